"""
SwiftFlow: scaffolding for executable Swift packages.

Creates a package with ``swift package init``, pins modern platform targets
in ``Package.swift``, then opens and runs it. The command-line entry points
live in :mod:`swiftflow.cli`.
"""

__version__ = "1.0.0"
__license__ = "Apache-2.0"
