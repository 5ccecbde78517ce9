# swiftflow/platforms.py
"""
Platform definitions for generated Swift packages.

This module centralizes:
- The default deployment targets (`DEFAULT_PLATFORMS`)
- Rendering of the ``platforms:`` clause inserted into ``Package.swift``
- A human-readable summary used in CLI messages
- Validation of platform mappings coming from configuration files

Notes
-----
- Platform names must match the static members of SwiftPM's
  ``SupportedPlatform`` (``.macOS``, ``.iOS``...), and versions must match the
  version members (``.v14``, ``.v17``...). We only validate the shape here;
  SwiftPM reports unknown members when the package is built.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Mapping, NamedTuple

__all__ = [
    "Platform",
    "DEFAULT_PLATFORMS",
    "platforms_clause",
    "platforms_summary",
    "parse_platforms",
]


class Platform(NamedTuple):
    """A single deployment target, e.g. ``Platform("macOS", "v14")``."""

    name: str
    version: str


# -----------------------------------------------------------------------------
# Defaults (latest platform generation at the time of writing)
# -----------------------------------------------------------------------------
DEFAULT_PLATFORMS: List[Platform] = [
    Platform("macOS", "v14"),
    Platform("iOS", "v17"),
    Platform("tvOS", "v17"),
    Platform("watchOS", "v10"),
    Platform("visionOS", "v2"),
]

_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")
_VERSION_RE = re.compile(r"^v\d+(_\d+)*$")

# Indentation used by `swift package init` for Package(...) arguments.
_INDENT = "    "


def platforms_clause(platforms: Iterable[Platform] = DEFAULT_PLATFORMS) -> str:
    """Return the text spliced after ``name: "<package>"`` in the manifest.

    The leading comma terminates the ``name:`` argument, so the clause can be
    inserted directly after the closing quote of the package name.

    Examples
    --------
    >>> platforms_clause([Platform("macOS", "v14")])
    ',\\n    platforms: [.macOS(.v14)]'
    """
    members = ", ".join(f".{p.name}(.{p.version})" for p in platforms)
    return f",\n{_INDENT}platforms: [{members}]"


def platforms_summary(platforms: Iterable[Platform] = DEFAULT_PLATFORMS) -> str:
    """Return a short human-readable list such as ``macOS 14, iOS 17``."""
    parts = []
    for p in platforms:
        version = p.version[1:] if p.version.startswith("v") else p.version
        parts.append(f"{p.name} {version.replace('_', '.')}")
    return ", ".join(parts)


def parse_platforms(raw: Mapping[str, object]) -> List[Platform]:
    """Validate a ``{name: version}`` mapping and return platforms in order.

    Versions may be given as ``"v14"``, ``"14"`` or ``14``; they are
    normalized to the ``vNN`` form used by SwiftPM.

    Raises
    ------
    ValueError
        If the mapping is empty or a name/version is malformed.
    """
    if not raw:
        raise ValueError("platforms mapping is empty")

    result: List[Platform] = []
    for name, version in raw.items():
        name = str(name).strip()
        ver = str(version).strip()
        if not ver.startswith("v"):
            ver = "v" + ver.replace(".", "_")
        if not _NAME_RE.match(name):
            raise ValueError(f"invalid platform name: {name!r}")
        if not _VERSION_RE.match(ver):
            raise ValueError(f"invalid version for {name}: {version!r}")
        result.append(Platform(name, ver))
    return result
