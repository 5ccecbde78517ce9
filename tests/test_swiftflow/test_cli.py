"""
Tests for `swiftflow/cli.py`.

These tests drive the Click commands through CliRunner and validate:
- the interactive name prompt and its empty-input error
- the single top-level error handler (message format, exit status 1)
- option wiring (--no-open, --no-run, --config)
- check-tools reporting

The swift toolchain is emulated by the `fake_swift` fixture; the working
directory is isolated with monkeypatch.chdir.
"""

from __future__ import annotations

import pytest
from click.testing import CliRunner

import swiftflow.cli as cli_mod
from swiftflow.cli import cli


@pytest.fixture
def in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_help_lists_commands():
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "create" in result.output
    assert "check-tools" in result.output


def test_create_help_summary():
    result = CliRunner().invoke(cli, ["create", "--help"])
    assert result.exit_code == 0
    assert "Create a new executable Swift package" in result.output


# -----------------------------
# Prompt / empty name
# -----------------------------

@pytest.mark.parametrize("entered", ["\n", "   \n"])
def test_empty_name_exits_1_without_mutation(in_tmp, fake_swift, entered):
    result = CliRunner().invoke(cli, ["create"], input=entered)

    assert result.exit_code == 1
    assert "Enter package name:" in result.output
    assert "❌ Error: Package name cannot be empty" in result.output
    assert list(in_tmp.iterdir()) == []
    assert fake_swift.calls == []


def test_end_of_input_at_prompt_is_empty_name(in_tmp, fake_swift):
    result = CliRunner().invoke(cli, ["create"], input="")

    assert result.exit_code == 1
    assert "❌ Error: Package name cannot be empty" in result.output
    assert "Aborted!" not in result.output
    assert list(in_tmp.iterdir()) == []
    assert fake_swift.calls == []


def test_prompted_name_creates_project(in_tmp, fake_swift):
    result = CliRunner().invoke(cli, ["create"], input="Hello\n")

    assert result.exit_code == 0, result.output
    root = in_tmp / "Hello"
    assert root.is_dir()
    assert not (root / "Tests").exists()
    assert "platforms: [.macOS(.v14)" in (root / "Package.swift").read_text(encoding="utf-8")
    assert fake_swift.popen_calls and fake_swift.popen_calls[0][1] == "Package.swift"
    assert fake_swift.commands()[-1][1:] == ["run"]


def test_name_argument_skips_prompt(in_tmp, fake_swift):
    result = CliRunner().invoke(cli, ["create", "Tool"])
    assert result.exit_code == 0, result.output
    assert "Enter package name" not in result.output
    assert (in_tmp / "Tool" / "Package.swift").exists()


def test_existing_directory_is_replaced(in_tmp, fake_swift):
    old = in_tmp / "Tool"
    old.mkdir()
    (old / "stale.txt").write_text("x", encoding="utf-8")

    result = CliRunner().invoke(cli, ["create", "Tool"])

    assert result.exit_code == 0, result.output
    assert "Overwriting" in result.output
    assert not (old / "stale.txt").exists()


# -----------------------------
# Failures
# -----------------------------

def test_init_failure_exits_1_and_skips_patch(in_tmp, fake_swift, monkeypatch):
    fake_swift.init_returncode = 1
    called = []
    monkeypatch.setattr("swiftflow.project.update_package_manifest", lambda *a, **k: called.append(a))

    result = CliRunner().invoke(cli, ["create", "Broken"])

    assert result.exit_code == 1
    assert "❌ Error: Failed to create Swift package" in result.output
    assert called == []


def test_manifest_failure_exits_1(in_tmp, fake_swift):
    fake_swift.manifest_text = "// hand written\n"
    result = CliRunner().invoke(cli, ["create", "Odd"])
    assert result.exit_code == 1
    assert "❌ Error: Failed to update Package.swift with platforms" in result.output
    assert (in_tmp / "Odd" / "Package.swift").read_text(encoding="utf-8") == "// hand written\n"


def test_run_failure_exits_1(in_tmp, fake_swift):
    fake_swift.run_returncode = 1
    result = CliRunner().invoke(cli, ["create", "App"])
    assert result.exit_code == 1
    assert "❌ Error: Failed to execute next steps automatically" in result.output


def test_missing_swift_executable_exits_1(in_tmp, monkeypatch):
    def boom(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr("swiftflow.runner.subprocess.run", boom)
    result = CliRunner().invoke(cli, ["create", "App"])
    assert result.exit_code == 1
    assert "❌ Error:" in result.output


def test_unwritable_log_file_exits_1(in_tmp, fake_swift):
    result = CliRunner().invoke(cli, ["create", "App", "--log-file", "no/such/dir/x.log"])
    assert result.exit_code == 1
    assert "❌ Error:" in result.output
    assert not (in_tmp / "App").exists()


def test_missing_config_file_exits_1(in_tmp, fake_swift):
    result = CliRunner().invoke(cli, ["create", "App", "--config", "nope.yaml"])
    assert result.exit_code == 1
    assert "config file not found" in result.output
    assert not (in_tmp / "App").exists()


# -----------------------------
# Options
# -----------------------------

def test_no_open_no_run(in_tmp, fake_swift):
    result = CliRunner().invoke(cli, ["create", "App", "--no-open", "--no-run"])
    assert result.exit_code == 0, result.output
    assert fake_swift.popen_calls == []
    assert [c[1] for c in fake_swift.commands()] == ["package"]


def test_config_file_and_env_are_applied(in_tmp, fake_swift, monkeypatch):
    (in_tmp / ".swiftflow.yaml").write_text(
        "opener: code\nplatforms:\n  macOS: v13\n", encoding="utf-8"
    )
    monkeypatch.setenv("SWIFTFLOW_SWIFT", "/opt/swift")

    result = CliRunner().invoke(cli, ["create", "App"])

    assert result.exit_code == 0, result.output
    assert fake_swift.commands()[0][0] == "/opt/swift"
    assert fake_swift.popen_calls == [["code", "Package.swift"]]
    text = (in_tmp / "App" / "Package.swift").read_text(encoding="utf-8")
    assert 'name: "App",\n    platforms: [.macOS(.v13)],' in text


def test_dotenv_in_cwd_is_loaded(in_tmp, fake_swift, monkeypatch):
    (in_tmp / ".env").write_text("SWIFTFLOW_OPENER=subl\n", encoding="utf-8")
    # Register the key with monkeypatch so the value dotenv sets is undone.
    monkeypatch.setenv("SWIFTFLOW_OPENER", "placeholder")
    monkeypatch.delenv("SWIFTFLOW_OPENER")

    result = CliRunner().invoke(cli, ["create", "App", "--no-run"])

    assert result.exit_code == 0, result.output
    assert fake_swift.popen_calls == [["subl", "Package.swift"]]


# -----------------------------
# check-tools
# -----------------------------

def test_check_tools_all_found(in_tmp, monkeypatch):
    monkeypatch.setattr(cli_mod.runner, "which", lambda t: f"/usr/bin/{t}")
    result = CliRunner().invoke(cli, ["check-tools"])
    assert result.exit_code == 0
    assert result.output.count("FOUND") == 2


def test_check_tools_missing_exits_1(in_tmp, monkeypatch):
    monkeypatch.setattr(cli_mod.runner, "which", lambda t: None if t == "swift" else "/usr/bin/x")
    result = CliRunner().invoke(cli, ["check-tools"])
    assert result.exit_code == 1
    assert "MISSING" in result.output
