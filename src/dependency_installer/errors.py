"""Exceptions raised by the installation pipeline.

Every error is terminal for a run: nothing in the package retries or
recovers, errors propagate to the command line which reports them.
"""

from typing import Optional


class InstallerError(Exception):
    """Base class for all dependency_installer errors."""


class ConfigurationError(InstallerError):
    """Raised when the installer configuration is missing or invalid."""


class ManifestFormatError(InstallerError):
    """Raised when the manifest or the vendored library tree is malformed."""


class ValidationError(InstallerError):
    """Raised when a generated descriptor fails structural validation.

    Attributes:
        complaints: The validator's messages, verbatim.
    """

    def __init__(self, complaints: list[str]) -> None:
        self.complaints = list(complaints)
        rendered = "\n".join(f"  {complaint}" for complaint in self.complaints)
        super().__init__(
            f"The artifact information is incomplete or not valid:\n{rendered}"
        )


class InstallationError(InstallerError):
    """Raised when an artifact cannot be written into the repository.

    Attributes:
        conflict_id: ``group:artifact:type`` of the artifact being installed.
    """

    def __init__(self, conflict_id: str, message: Optional[str] = None) -> None:
        self.conflict_id = conflict_id
        detail = f": {message}" if message else ""
        super().__init__(f"Error installing artifact '{conflict_id}'{detail}")


class ConsistencyError(InstallerError):
    """Raised when the install count and the aggregate dependency count differ.

    Attributes:
        installed: Number of installations performed.
        dependencies: Number of dependencies in the aggregate descriptor.
    """

    def __init__(self, installed: int, dependencies: int) -> None:
        self.installed = installed
        self.dependencies = dependencies
        super().__init__(
            f"Dependency count: {dependencies} differs from "
            f"number of installations: {installed}"
        )


__all__ = [
    "ConfigurationError",
    "ConsistencyError",
    "InstallationError",
    "InstallerError",
    "ManifestFormatError",
    "ValidationError",
]
