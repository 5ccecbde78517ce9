# swiftflow/manifest.py
"""
Textual patching of the generated ``Package.swift``.

`swift package init` writes a manifest of the form::

    let package = Package(
        name: "Hello",
        targets: [ ... ]
    )

We splice a ``platforms:`` argument directly after ``name: "Hello"``. This is
plain string search, not a Swift parse: if the generated manifest does not
contain both anchors the update fails and the file is left untouched.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Union

from swiftflow.errors import ManifestUpdateError
from swiftflow.platforms import platforms_clause

__all__ = [
    "MANIFEST_NAME",
    "PACKAGE_DECLARATION",
    "insert_platforms",
    "update_package_manifest",
]

logger = logging.getLogger("swiftflow.manifest")

MANIFEST_NAME = "Package.swift"
PACKAGE_DECLARATION = "let package = Package("


def _name_anchor(package_name: str) -> str:
    return f'name: "{package_name}"'


def insert_platforms(content: str, package_name: str, clause: str) -> str:
    """Return `content` with `clause` inserted after the package name.

    Parameters
    ----------
    content
        Full manifest text.
    package_name
        Name passed to ``swift package init``.
    clause
        Text to insert, usually :func:`swiftflow.platforms.platforms_clause`.

    Raises
    ------
    ManifestUpdateError
        If the package declaration, or the package name after it, is missing.
    """
    decl_idx = content.find(PACKAGE_DECLARATION)
    if decl_idx == -1:
        raise ManifestUpdateError("package declaration not found")

    anchor = _name_anchor(package_name)
    name_idx = content.find(anchor, decl_idx)
    if name_idx == -1:
        raise ManifestUpdateError("package name not found")

    split_at = name_idx + len(anchor)
    return content[:split_at] + clause + content[split_at:]


def _write_atomic(path: Path, text: str) -> None:
    """Replace `path` with `text` via a temporary file in the same directory.

    The permission bits of `path` carry over to the replacement.
    """
    fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=".", suffix=".tmp")
    try:
        # newline="" keeps the generated line endings byte-for-byte.
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.chmod(tmp_name, stat.S_IMODE(path.stat().st_mode))
        os.replace(tmp_name, path)
    except OSError:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def update_package_manifest(
    project_path: Union[str, Path],
    package_name: str,
    clause: str = platforms_clause(),
) -> Path:
    """Insert the platforms clause into ``<project_path>/Package.swift``.

    Returns
    -------
    pathlib.Path
        Path of the updated manifest.

    Raises
    ------
    ManifestUpdateError
        If the manifest is missing/unreadable, an anchor is missing, or the
        write fails. The original file is unchanged in every failure case.
    """
    manifest = Path(project_path) / MANIFEST_NAME

    try:
        with manifest.open("r", encoding="utf-8", newline="") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Could not read %s: %s", manifest, exc)
        raise ManifestUpdateError(f"could not read {MANIFEST_NAME}") from exc

    updated = insert_platforms(content, package_name, clause)

    try:
        _write_atomic(manifest, updated)
    except OSError as exc:
        logger.debug("Could not write %s: %s", manifest, exc)
        raise ManifestUpdateError(f"could not write {MANIFEST_NAME}") from exc

    logger.debug("Patched %s (%d -> %d chars)", manifest, len(content), len(updated))
    return manifest
