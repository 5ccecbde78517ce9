# tests/test_swiftflow/conftest.py
"""
Shared fixtures for the SwiftFlow test-suite.

`fake_swift` replaces ``subprocess.run``/``subprocess.Popen`` as seen from
``swiftflow.runner`` so no real toolchain is needed. ``swift package init``
is emulated by writing a manifest and a ``Tests`` folder like SwiftPM does.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pytest

import swiftflow.runner as runner

MANIFEST_TEMPLATE = """\
// swift-tools-version: 5.9
// The swift-tools-version declares the minimum version of Swift required to build this package.

import PackageDescription

let package = Package(
    name: "{name}",
    targets: [
        // Targets are the basic building blocks of a package, defining a module or a test suite.
        // Targets can depend on other targets in this package and products from dependencies.
        .executableTarget(
            name: "{name}"),
    ]
)
"""


def render_manifest(name: str) -> str:
    return MANIFEST_TEMPLATE.format(name=name)


class FakeSwift:
    """Records subprocess calls and emulates the swift CLI."""

    def __init__(self) -> None:
        self.calls: List[dict] = []
        self.popen_calls: List[list] = []
        self.init_returncode = 0
        self.run_returncode = 0
        self.write_tests_dir = True
        self.manifest_text: Optional[str] = None

    def run(self, cmd, cwd=None, **kwargs):
        where = Path(cwd) if cwd is not None else Path.cwd()
        self.calls.append({"cmd": list(cmd), "cwd": where})

        returncode = self.run_returncode
        if cmd[1:3] == ["package", "init"]:
            returncode = self.init_returncode
            if returncode == 0:
                name = cmd[cmd.index("--name") + 1]
                text = self.manifest_text if self.manifest_text is not None else render_manifest(name)
                (where / "Package.swift").write_text(text, encoding="utf-8")
                (where / "Sources" / name).mkdir(parents=True)
                (where / "Sources" / name / "main.swift").write_text('print("Hello, world!")\n')
                if self.write_tests_dir:
                    (where / "Tests" / f"{name}Tests").mkdir(parents=True)

        class Result:
            pass

        res = Result()
        res.returncode = returncode
        return res

    def popen(self, cmd, **kwargs):
        self.popen_calls.append(list(cmd))
        return object()

    def commands(self) -> List[list]:
        return [c["cmd"] for c in self.calls]


@pytest.fixture
def fake_swift(monkeypatch) -> FakeSwift:
    fake = FakeSwift()
    monkeypatch.setattr(runner.subprocess, "run", fake.run)
    monkeypatch.setattr(runner.subprocess, "Popen", fake.popen)
    return fake


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep user configuration out of the tests."""
    for var in ("SWIFTFLOW_CONFIG", "SWIFTFLOW_SWIFT", "SWIFTFLOW_OPENER", "SWIFTFLOW_FORCE_COLOR"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_manifest():
    """Return a callable rendering the manifest SwiftPM generates for a name."""
    return render_manifest
