# swiftflow/cli.py
"""
SwiftFlow CLI.

Top-level Click group tying together:
- `create`: scaffold an executable Swift package and build/run it
- `check-tools`: report whether the configured executables are on PATH

`create` is also installed on its own as the ``swift-new`` script, so
``swift-new`` and ``swiftflow create`` behave the same.

Errors raised anywhere in the creation flow are caught once here, printed as
``❌ Error: <message>`` on stdout, and turned into exit status 1.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from typing import Optional

import click
from dotenv import find_dotenv, load_dotenv

from swiftflow.config import CreatorConfig, load_config
from swiftflow.errors import ProjectError
from swiftflow.log_manager import ROOT_LOGGER, get_logger
from swiftflow.project import ProjectCreator
from swiftflow import runner

__all__ = ["cli", "create", "check_tools"]

NAME_PROMPT = "\n📦 Enter package name"


def _load_settings(config_path: Optional[str]) -> CreatorConfig:
    """Load ``.env`` from the working directory, then the SwiftFlow config."""
    env_file = find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(env_file)
    return load_config(config_path)


def _setup_logging(verbose: bool, log_file: Optional[str]) -> logging.Logger:
    level = logging.DEBUG if verbose else logging.WARNING
    return get_logger(ROOT_LOGGER, level=level, log_to_file=log_file)


def _prompt_package_name() -> str:
    """Read one line for the package name; end of input counts as empty."""
    try:
        return click.prompt(NAME_PROMPT, default="", show_default=False, prompt_suffix=": ")
    except click.Abort:
        click.echo()
        return ""


def _fail(exc: Exception) -> None:
    click.echo(f"❌ Error: {exc}")
    sys.exit(1)


@click.group()
def cli() -> None:
    """
    🦅 SwiftFlow: Swift package scaffolding

    Creates executable Swift packages with up-to-date platform targets,
    then opens and runs them.
    """


@cli.command("create")
@click.argument("name", required=False)
@click.option("--no-open", is_flag=True, help="Do not open Package.swift after creation.")
@click.option("--no-run", is_flag=True, help="Do not build and run the project after creation.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="YAML config file (default: $SWIFTFLOW_CONFIG or ./.swiftflow.yaml).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log commands and paths.")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also write logs to this file.")
def create(
    name: Optional[str],
    no_open: bool,
    no_run: bool,
    config_path: Optional[str],
    verbose: bool,
    log_file: Optional[str],
) -> None:
    """🚀 Create a new executable Swift package.

    If NAME is omitted you are prompted for it. An existing directory with
    the same name is deleted and replaced.
    """
    click.secho("🚀 Starting Swift Executable Project Creator", fg="green", bold=True)

    logger = logging.getLogger(ROOT_LOGGER)
    try:
        logger = _setup_logging(verbose, log_file)
        config = _load_settings(config_path)
        if no_open:
            config = replace(config, open_manifest=False)
        if no_run:
            config = replace(config, run_after_create=False)

        if name is None:
            name = _prompt_package_name()

        ProjectCreator(config).run(name)
    except (ProjectError, OSError) as exc:
        logger.debug("Project creation aborted", exc_info=True)
        _fail(exc)


@cli.command("check-tools")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="YAML config file.")
def check_tools(config_path: Optional[str]) -> None:
    """🔍 Check that the Swift toolchain and file opener are on PATH."""
    try:
        config = _load_settings(config_path)
    except ProjectError as exc:
        _fail(exc)

    tools = [
        (config.swift, "Swift toolchain (package init, run)"),
        (config.opener, "Opens Package.swift after creation"),
    ]
    missing = 0
    click.echo("🔍 Checking tool availability:\n")
    for tool, desc in tools:
        path = runner.which(tool)
        if path:
            status = click.style("✅ FOUND  ", fg="green")
        else:
            status = click.style("❌ MISSING", fg="red")
            missing += 1
        click.echo(f"{tool.ljust(18)} {status} — {desc}")

    if missing:
        sys.exit(1)


if __name__ == "__main__":
    cli()
