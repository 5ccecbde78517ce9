# swiftflow/runner.py
"""
External process helpers for SwiftFlow.

Thin wrappers around :mod:`subprocess` for the three commands the creation
flow needs:

- ``swift package init --type executable --name <name>`` (blocking)
- ``<opener> Package.swift`` (launched, never awaited)
- ``swift run`` (blocking)

Children inherit our stdin/stdout/stderr so the user sees SwiftPM output as it
happens. None of these helpers raise on a non-zero exit; callers decide what a
failure means. Launch failures (e.g. executable not found) surface as
:class:`OSError`.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Union

__all__ = [
    "package_init_command",
    "run_package_init",
    "open_file",
    "run_project",
    "which",
]

logger = logging.getLogger("swiftflow.runner")

PathLike = Union[str, Path]


def package_init_command(swift: str, package_name: str) -> List[str]:
    """Return the argv used to create an executable package skeleton."""
    return [
        swift,
        "package",
        "init",
        "--type", "executable",
        "--name", package_name,
    ]


def run_package_init(swift: str, package_name: str, cwd: PathLike) -> int:
    """Run ``swift package init`` in `cwd` and return its exit status."""
    cmd = package_init_command(swift, package_name)
    logger.debug("Running %s in %s", cmd, cwd)
    process = subprocess.run(cmd, cwd=str(cwd))
    logger.debug("swift package init exited with %s", process.returncode)
    return process.returncode


def open_file(opener: str, path: PathLike) -> subprocess.Popen:
    """Launch `opener` on `path` without waiting for it to finish."""
    cmd = [opener, str(path)]
    logger.debug("Launching %s", cmd)
    return subprocess.Popen(cmd)


def run_project(swift: str, cwd: Optional[PathLike] = None) -> int:
    """Build and run the package with ``swift run``; return the exit status."""
    cmd = [swift, "run"]
    logger.debug("Running %s in %s", cmd, cwd or Path.cwd())
    process = subprocess.run(cmd, cwd=str(cwd) if cwd is not None else None)
    logger.debug("swift run exited with %s", process.returncode)
    return process.returncode


def which(tool: str) -> Optional[str]:
    """Return the resolved path of `tool`, or ``None`` if it is not on PATH."""
    return shutil.which(tool)
