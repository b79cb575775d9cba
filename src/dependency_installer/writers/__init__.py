"""Descriptor writers.

This module provides writers rendering descriptors to files that can be
installed into a repository.
"""

from dependency_installer.writers.base import BaseDescriptorWriter
from dependency_installer.writers.pom import PomWriter

__all__ = ["BaseDescriptorWriter", "PomWriter"]
