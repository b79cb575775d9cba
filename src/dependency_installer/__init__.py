"""Dependency Installer - Install vendored third-party libraries into a repository.

This package provides tools for selecting vendored binary libraries listed in
a manifest, installing them into a local repository with generated
descriptors, and generating an aggregate descriptor depending on all of them.
"""

__version__ = "0.1.0"

from dependency_installer.models import (
    Coordinate,
    Dependency,
    Descriptor,
    InstallReport,
    LibraryRecord,
    License,
)

__all__ = [
    "__version__",
    "Coordinate",
    "Dependency",
    "Descriptor",
    "InstallReport",
    "LibraryRecord",
    "License",
]
