# swiftflow/project.py
"""
Project creation flow for SwiftFlow.

:class:`ProjectCreator` runs a strict linear sequence:

1. validate the package name and derive ``<cwd>/<name>``
2. create the project directory (destructively replacing an existing one)
3. ``swift package init --type executable`` and drop the generated ``Tests``
4. insert the ``platforms:`` clause into ``Package.swift``
5. cd into the project, open the manifest, ``swift run``

Any step raising :class:`~swiftflow.errors.ProjectError` (or ``OSError``)
aborts the remaining steps. Nothing is rolled back.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

import click

from swiftflow import runner
from swiftflow.config import CreatorConfig
from swiftflow.errors import (
    MissingPackageNameError,
    NextStepsExecutionError,
    PackageCreationError,
)
from swiftflow.manifest import MANIFEST_NAME, update_package_manifest
from swiftflow.platforms import platforms_clause, platforms_summary

__all__ = ["ProjectCreator", "TESTS_DIR"]

logger = logging.getLogger("swiftflow.project")

#: Folder generated by `swift package init` that we do not keep.
TESTS_DIR = "Tests"


def _remove_path(path: Path) -> None:
    """Delete a file, symlink or directory tree."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


class ProjectCreator:
    """Create an executable Swift package in the current directory.

    Parameters
    ----------
    config
        Tooling and platform settings; defaults to :class:`CreatorConfig`.
    cwd
        Directory the project is created in; defaults to the process cwd
        at construction time.
    """

    def __init__(self, config: Optional[CreatorConfig] = None, cwd: Optional[Path] = None) -> None:
        self.config = config or CreatorConfig()
        self.current_directory = Path(cwd) if cwd is not None else Path.cwd()
        self.package_name = ""
        self.project_path: Optional[Path] = None

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    def run(self, name: str) -> Path:
        """Create the project for `name` and run the post-creation steps."""
        self.set_package_name(name)
        self.create_project_structure()

        click.secho(
            f"\n✅ Successfully created executable project at: {self.project_path} "
            "with latest platform support",
            fg="green",
            bold=True,
        )
        self.execute_next_steps()
        return self.project_path

    def set_package_name(self, raw: Optional[str]) -> str:
        """Validate `raw` and derive :attr:`project_path`.

        Raises
        ------
        MissingPackageNameError
            If `raw` is ``None``, empty or whitespace only.
        """
        name = (raw or "").strip()
        if not name:
            raise MissingPackageNameError()
        self.package_name = name
        self.project_path = self.current_directory / name
        logger.debug("Package %r -> %s", name, self.project_path)
        return name

    # ------------------------------------------------------------------
    # Creation steps
    # ------------------------------------------------------------------

    def create_project_structure(self) -> None:
        click.secho("\n🛠  Creating executable project structure...", fg="cyan")
        self.create_directory()
        self.run_package_init()
        self.update_package_manifest()

    def create_directory(self) -> None:
        """Create the project directory, replacing anything already there."""
        path = self._require_path()
        if path.exists() or path.is_symlink():
            click.secho("⚠️  Directory already exists. Overwriting...", fg="yellow")
            _remove_path(path)
        path.mkdir(parents=True)

    def run_package_init(self) -> None:
        """Generate the package skeleton and remove its ``Tests`` folder.

        Raises
        ------
        PackageCreationError
            If ``swift package init`` exits with a non-zero status.
        """
        path = self._require_path()
        returncode = runner.run_package_init(self.config.swift, self.package_name, path)
        if returncode != 0:
            raise PackageCreationError(f"swift package init exited with status {returncode}")

        tests_path = path / TESTS_DIR
        if tests_path.exists():
            click.secho("🧹 Removing Tests directory...", fg="cyan")
            _remove_path(tests_path)

    def update_package_manifest(self) -> None:
        update_package_manifest(
            self._require_path(),
            self.package_name,
            platforms_clause(self.config.platforms),
        )
        click.secho(
            f"📄 Updated {MANIFEST_NAME} with latest platforms "
            f"({platforms_summary(self.config.platforms)})",
            fg="cyan",
        )

    # ------------------------------------------------------------------
    # Post-creation automation
    # ------------------------------------------------------------------

    def execute_next_steps(self) -> None:
        """cd into the project, open the manifest and build/run it.

        Raises
        ------
        NextStepsExecutionError
            If ``swift run`` exits with a non-zero status.
        """
        click.echo("\nExecuting next steps automatically...")

        os.chdir(self._require_path())
        click.secho(f"📂 Changed to directory: {self.package_name}", fg="cyan")

        if self.config.open_manifest:
            runner.open_file(self.config.opener, MANIFEST_NAME)
            click.secho(f"📄 Opened {MANIFEST_NAME}", fg="cyan")

        if not self.config.run_after_create:
            click.secho(f"👉 Next: cd {self.package_name} && swift run", fg="blue")
            return

        click.secho("🚀 Building and running project...", fg="green")
        returncode = runner.run_project(self.config.swift)
        if returncode != 0:
            raise NextStepsExecutionError(f"swift run exited with status {returncode}")

    # ------------------------------------------------------------------

    def _require_path(self) -> Path:
        if self.project_path is None:
            raise MissingPackageNameError()
        return self.project_path
