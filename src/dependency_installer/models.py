"""Core data models for dependency_installer.

This module defines the fundamental data structures used throughout the
installation pipeline: library records parsed from the manifest, the
package coordinates derived from them, and the descriptors (POM models)
installed alongside each artifact.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_VERSION = "1.0"
MODEL_VERSION = "4.0.0"
AGGREGATE_PACKAGING = "pom"
GENERATED_DESCRIPTION = "POM generated by dependency-installer"
VALID_SCOPES = ("compile", "provided", "runtime", "test")


@dataclass(frozen=True)
class License:
    """A license declared for a vendored library.

    Attributes:
        name: License name (e.g., "Apache License 2.0").
        notice: Copyright notice text.
    """

    name: Optional[str] = None
    notice: Optional[str] = None


@dataclass(frozen=True)
class LibraryRecord:
    """Immutable entry of the library manifest.

    Attributes:
        full_file_name: Path relative to the library directory, in the
            form ``subdir/name.ext``.
        project_name: Optional upstream project name.
        project_url: Optional upstream project URL.
        version: Version string, copied verbatim from the manifest.
        licenses: Licenses declared for the library, in manifest order.
        has_license_block: False if the entry carried no ``licenses``
            element at all.
    """

    full_file_name: str
    project_name: Optional[str] = None
    project_url: Optional[str] = None
    version: str = DEFAULT_VERSION
    licenses: tuple[License, ...] = ()
    has_license_block: bool = True


@dataclass(frozen=True)
class Coordinate:
    """Package coordinates of an artifact in the repository.

    Attributes:
        group: Group id (e.g., "com.example.dev").
        artifact: Artifact id (file name without its final extension).
        type: Packaging type (the file name's final extension).
        version: Version string.
    """

    group: str
    artifact: str
    type: str
    version: str

    @property
    def conflict_id(self) -> str:
        """Return the ``group:artifact:type`` key identifying the artifact."""
        return f"{self.group}:{self.artifact}:{self.type}"

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}:{self.type}:{self.version}"


@dataclass(frozen=True)
class Dependency:
    """A dependency entry of the aggregate descriptor."""

    group_id: str
    artifact_id: str
    version: str
    type: str
    scope: str

    @property
    def management_key(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.type}"


@dataclass
class Descriptor:
    """Minimal package descriptor (POM model) for one artifact or the aggregate.

    Attributes:
        group_id: Group id of the described artifact.
        artifact_id: Artifact id of the described artifact.
        version: Version of the described artifact.
        packaging: Packaging type ("jar", "pom", ...).
        name: Human-readable name.
        url: Optional project URL.
        licenses: Licenses, empty for the aggregate descriptor.
        dependencies: Dependency list, only set for the aggregate descriptor.
        description: Fixed tag marking the descriptor as machine-generated.
        model_version: POM model version.
    """

    group_id: str
    artifact_id: str
    version: str
    packaging: str
    name: Optional[str] = None
    url: Optional[str] = None
    licenses: list[License] = field(default_factory=list)
    dependencies: Optional[list[Dependency]] = None
    description: str = GENERATED_DESCRIPTION
    model_version: str = MODEL_VERSION

    @property
    def is_aggregate(self) -> bool:
        """Return True if this descriptor carries a dependency list."""
        return self.dependencies is not None


@dataclass
class InstallReport:
    """Outcome of a successful pipeline run.

    Attributes:
        installed: Coordinates installed, in install order.
        skipped: Number of manifest records rejected by the inclusion patterns.
        aggregate_path: Path of the generated aggregate descriptor, or None
            if nothing was installed.
    """

    installed: list[Coordinate] = field(default_factory=list)
    skipped: int = 0
    aggregate_path: Optional[Path] = None

    @property
    def installed_count(self) -> int:
        return len(self.installed)

