"""Structural validators for generated descriptors."""

from dependency_installer.validators.base import BaseValidator
from dependency_installer.validators.model import ModelValidator

__all__ = ["BaseValidator", "ModelValidator"]
