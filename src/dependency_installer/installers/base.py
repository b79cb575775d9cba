"""Base interface for repository installers."""

from abc import ABC, abstractmethod
from pathlib import Path

from dependency_installer.models import Coordinate


class BaseInstaller(ABC):
    """Abstract base class for repository installers.

    An installer persists a binary file and its descriptor under the
    artifact's coordinate. It must be safe to call repeatedly against the
    same repository within one process.

    Attributes:
        root: Base directory of the repository.
    """

    def __init__(self, root: Path) -> None:
        """Initialize the installer.

        Args:
            root: Base directory of the repository.
        """
        self.root = root

    @abstractmethod
    def install(self, binary_file: Path, coordinate: Coordinate, descriptor_file: Path) -> bool:
        """Install an artifact into the repository.

        Any prior installation colliding with the coordinate is evicted
        first, and the descriptor is attached to the installed artifact.

        Args:
            binary_file: The artifact file to install.
            coordinate: Coordinate to install the artifact under.
            descriptor_file: Rendered descriptor of the artifact.

        Returns:
            True if the artifact was installed.

        Raises:
            ManifestFormatError: If the coordinate collides with an
                installation of a different artifact.
            OSError: If the repository cannot be written.
        """
        ...
