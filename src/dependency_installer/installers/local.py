"""Installer for Maven default-layout local repositories."""

import logging
import shutil
from pathlib import Path
from typing import Optional

from dependency_installer.errors import ManifestFormatError
from dependency_installer.installers.base import BaseInstaller
from dependency_installer.models import Coordinate

logger = logging.getLogger(__name__)

DEFAULT_REPOSITORY = Path.home() / ".m2" / "repository"


class LocalRepositoryInstaller(BaseInstaller):
    """Installs artifacts into a local repository on disk.

    Artifacts are laid out as
    ``<root>/<group path>/<artifact>/<version>/<artifact>-<version>.<type>``
    with the descriptor next to them as ``<artifact>-<version>.pom``.
    """

    def __init__(self, root: Optional[Path] = None) -> None:
        """Initialize the installer.

        Args:
            root: Repository directory. Defaults to ~/.m2/repository.
        """
        super().__init__(root or DEFAULT_REPOSITORY)

    def path_of(self, coordinate: Coordinate) -> Path:
        """Return the repository path of an artifact file."""
        return self._version_dir(coordinate) / self._file_name(coordinate, coordinate.type)

    def descriptor_path_of(self, coordinate: Coordinate) -> Path:
        """Return the repository path of an artifact's descriptor."""
        return self._version_dir(coordinate) / self._file_name(coordinate, "pom")

    def install(self, binary_file: Path, coordinate: Coordinate, descriptor_file: Path) -> bool:
        target = self.path_of(coordinate)
        self._check_contained(target)

        if target.exists():
            self._evict(target, coordinate)

        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(binary_file, target)

        # A pom artifact is its own descriptor.
        if coordinate.type != "pom":
            shutil.copyfile(descriptor_file, self.descriptor_path_of(coordinate))

        logger.debug(f"Installed {binary_file} to {target}")
        return True

    def _evict(self, target: Path, coordinate: Coordinate) -> None:
        """Delete the artifact directory holding a previous installation.

        Raises:
            ManifestFormatError: If the directory is not named after the
                artifact, meaning two artifacts alias to the same path.
        """
        artifact_dir = target.parent.parent
        self._check_contained(artifact_dir)

        if artifact_dir.name != coordinate.artifact:
            raise ManifestFormatError(
                f"Name of artifact: '{coordinate.artifact}' differs from "
                f"artifact directory: {artifact_dir}"
            )

        logger.info(f"Replacing previous installation at {artifact_dir}")
        shutil.rmtree(artifact_dir)

    def _check_contained(self, path: Path) -> None:
        """Ensure a path lies strictly below the repository root.

        Raises:
            ManifestFormatError: If the path resolves to the root itself or
                to a location outside of it.
        """
        root = self.root.resolve()
        resolved = path.resolve()

        if resolved == root or not resolved.is_relative_to(root):
            raise ManifestFormatError(
                f"Path {path} of the artifact is outside the repository {self.root}"
            )

    def _version_dir(self, coordinate: Coordinate) -> Path:
        segments = [part for part in coordinate.group.split(".") if part]
        segments += [coordinate.artifact, coordinate.version]

        for segment in segments:
            if segment in (".", "..") or "/" in segment or "\\" in segment:
                raise ManifestFormatError(
                    f"Coordinate {coordinate} has an invalid path segment: '{segment}'"
                )

        return self.root.joinpath(*segments)

    @staticmethod
    def _file_name(coordinate: Coordinate, extension: str) -> str:
        return f"{coordinate.artifact}-{coordinate.version}.{extension}"
