# swiftflow/errors.py
"""
Exception types raised while creating a project.

Every failure in the creation flow is fatal: the exception travels up to the
single handler in :mod:`swiftflow.cli`, which prints ``❌ Error: <message>``
and exits with status 1.
"""

from __future__ import annotations

__all__ = [
    "ProjectError",
    "MissingPackageNameError",
    "PackageCreationError",
    "ManifestUpdateError",
    "NextStepsExecutionError",
    "ConfigError",
]


class ProjectError(Exception):
    """Base class for all project-creation failures."""

    #: Message used when the exception is raised without arguments.
    default_message = "Project creation failed"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(self.default_message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.default_message} ({self.detail})"
        return self.default_message


class MissingPackageNameError(ProjectError):
    """Raised when the entered package name is empty or whitespace."""

    default_message = "Package name cannot be empty"


class PackageCreationError(ProjectError):
    """Raised when ``swift package init`` exits non-zero."""

    default_message = "Failed to create Swift package"


class ManifestUpdateError(ProjectError):
    """Raised when Package.swift cannot be read, patched or written."""

    default_message = "Failed to update Package.swift with platforms"


class NextStepsExecutionError(ProjectError):
    """Raised when the post-creation build/run step fails."""

    default_message = "Failed to execute next steps automatically"


class ConfigError(ProjectError):
    """Raised when a configuration file cannot be read or is malformed."""

    default_message = "Invalid SwiftFlow configuration"
