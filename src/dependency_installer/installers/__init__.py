"""Repository installers.

This module provides installers placing artifacts and their descriptors
into a repository keyed by coordinate.
"""

from dependency_installer.installers.base import BaseInstaller
from dependency_installer.installers.local import (
    DEFAULT_REPOSITORY,
    LocalRepositoryInstaller,
)

__all__ = ["BaseInstaller", "DEFAULT_REPOSITORY", "LocalRepositoryInstaller"]
