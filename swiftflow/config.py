# swiftflow/config.py
"""
Configuration for SwiftFlow.

Resolution order (later wins):
1. Built-in defaults
2. YAML config file: explicit path, else ``$SWIFTFLOW_CONFIG``, else
   ``./.swiftflow.yaml`` when present
3. Environment overrides: ``SWIFTFLOW_SWIFT``, ``SWIFTFLOW_OPENER``

The CLI loads ``.env`` through python-dotenv before calling
:func:`load_config`, so values placed there behave like real environment
variables.

Example ``.swiftflow.yaml``::

    swift: /usr/bin/swift
    opener: code
    open_manifest: true
    run_after_create: false
    platforms:
      macOS: v14
      iOS: v17
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional, Union

import yaml

from swiftflow.errors import ConfigError
from swiftflow.platforms import DEFAULT_PLATFORMS, Platform, parse_platforms

__all__ = [
    "CreatorConfig",
    "DEFAULT_CONFIG_FILE",
    "default_opener",
    "find_config_file",
    "load_config",
]

logger = logging.getLogger("swiftflow.config")

DEFAULT_CONFIG_FILE = ".swiftflow.yaml"

ENV_CONFIG = "SWIFTFLOW_CONFIG"
ENV_SWIFT = "SWIFTFLOW_SWIFT"
ENV_OPENER = "SWIFTFLOW_OPENER"

_KNOWN_KEYS = {"swift", "opener", "open_manifest", "run_after_create", "platforms"}


def default_opener() -> str:
    """Return the platform's "open this file" command."""
    return "open" if sys.platform == "darwin" else "xdg-open"


@dataclass(frozen=True)
class CreatorConfig:
    """Settings used by :class:`swiftflow.project.ProjectCreator`."""

    swift: str = "swift"
    opener: str = field(default_factory=default_opener)
    open_manifest: bool = True
    run_after_create: bool = True
    platforms: List[Platform] = field(default_factory=lambda: list(DEFAULT_PLATFORMS))


def find_config_file(explicit: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Locate the YAML config file to use, if any.

    An explicit path or ``$SWIFTFLOW_CONFIG`` must exist; the implicit
    ``./.swiftflow.yaml`` is optional.
    """
    if explicit:
        path = Path(explicit)
    elif os.getenv(ENV_CONFIG):
        path = Path(os.environ[ENV_CONFIG])
    else:
        path = Path.cwd() / DEFAULT_CONFIG_FILE
        return path if path.is_file() else None

    if not path.is_file():
        raise ConfigError(f"config file not found: {path}")
    return path


def _read_yaml(path: Path) -> dict:
    try:
        text = path.read_text(encoding="utf-8")
        data = yaml.safe_load(text) or {}
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"cannot parse {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")
    return data


def _as_bool(key: str, value: object) -> bool:
    if isinstance(value, bool):
        return value
    raise ConfigError(f"'{key}' must be true or false")


def _as_command(key: str, value: object) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise ConfigError(f"'{key}' must be a non-empty string")


def _apply_file(config: CreatorConfig, data: dict, source: Path) -> CreatorConfig:
    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        logger.warning("Ignoring unknown keys in %s: %s", source, ", ".join(unknown))

    changes = {}
    if "swift" in data:
        changes["swift"] = _as_command("swift", data["swift"])
    if "opener" in data:
        changes["opener"] = _as_command("opener", data["opener"])
    if "open_manifest" in data:
        changes["open_manifest"] = _as_bool("open_manifest", data["open_manifest"])
    if "run_after_create" in data:
        changes["run_after_create"] = _as_bool("run_after_create", data["run_after_create"])
    if "platforms" in data:
        raw = data["platforms"]
        if not isinstance(raw, dict):
            raise ConfigError("'platforms' must be a mapping of platform: version")
        try:
            changes["platforms"] = parse_platforms(raw)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
    return replace(config, **changes)


def load_config(path: Optional[Union[str, Path]] = None) -> CreatorConfig:
    """Build a :class:`CreatorConfig` from defaults, file and environment.

    Raises
    ------
    ConfigError
        If an explicitly requested file is missing, or any file is malformed.
    """
    config = CreatorConfig()

    config_file = find_config_file(path)
    if config_file is not None:
        config = _apply_file(config, _read_yaml(config_file), config_file)
        logger.debug("Loaded config from %s", config_file)

    swift = os.getenv(ENV_SWIFT)
    if swift:
        config = replace(config, swift=swift)
    opener = os.getenv(ENV_OPENER)
    if opener:
        config = replace(config, opener=opener)

    return config
