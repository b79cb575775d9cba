"""Installation pipeline.

Parses the manifest, selects libraries through the inclusion patterns,
installs each selected library with a generated descriptor, and finally
writes an aggregate descriptor depending on everything installed.

The run is sequential and stops at the first error. Artifacts installed
before the error stay in the repository.
"""

import contextlib
import logging
from collections.abc import Iterator
from enum import Enum
from pathlib import Path
from typing import Optional

from dependency_installer.config import InstallerSettings
from dependency_installer.coordinates import derive_coordinate, split_file_name, to_dependency
from dependency_installer.descriptors import build_aggregate_descriptor, build_artifact_descriptor
from dependency_installer.errors import (
    ConsistencyError,
    InstallationError,
    InstallerError,
    ManifestFormatError,
)
from dependency_installer.installers import BaseInstaller, LocalRepositoryInstaller
from dependency_installer.manifest import ManifestParser, read_manifest
from dependency_installer.models import (
    AGGREGATE_PACKAGING,
    Coordinate,
    Dependency,
    Descriptor,
    InstallReport,
    LibraryRecord,
)
from dependency_installer.patterns import PatternSet
from dependency_installer.validators import BaseValidator, ModelValidator
from dependency_installer.writers import BaseDescriptorWriter, PomWriter

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    """Stages of an installation run."""

    INIT = "init"
    PARSING = "parsing"
    FILTERING = "filtering"
    DERIVING = "deriving"
    VALIDATING = "validating"
    INSTALLING = "installing"
    AGGREGATING = "aggregating"
    AGGREGATE_VALIDATING = "aggregate_validating"
    AGGREGATE_INSTALLING = "aggregate_installing"
    DONE = "done"
    FAILED = "failed"


class InstalledSet:
    """Dependencies installed during a run, keyed by ``group.fileName``.

    Iteration follows key order, not insertion order, so the aggregate
    dependency list does not depend on manifest order. Adding a key twice
    keeps the last value.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Dependency] = {}
        self._frozen = False

    def add(self, key: str, dependency: Dependency) -> None:
        if self._frozen:
            raise RuntimeError("InstalledSet is frozen")
        self._entries[key] = dependency

    def freeze(self) -> None:
        self._frozen = True

    def keys(self) -> list[str]:
        return sorted(self._entries)

    def dependencies(self) -> list[Dependency]:
        """Return the dependencies sorted by key."""
        return [self._entries[key] for key in self.keys()]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


class InstallPipeline:
    """Orchestrates a complete installation run.

    Attributes:
        settings: The run configuration.
        installer: Repository installer, defaults to the local repository.
        validator: Descriptor validator.
        writer: Descriptor writer.
        state: Current stage, FAILED once an error escaped the run.
    """

    def __init__(
        self,
        settings: InstallerSettings,
        installer: Optional[BaseInstaller] = None,
        validator: Optional[BaseValidator] = None,
        writer: Optional[BaseDescriptorWriter] = None,
        parser: Optional[ManifestParser] = None,
    ) -> None:
        self.settings = settings
        self.installer = installer or LocalRepositoryInstaller(settings.repository)
        self.validator = validator or ModelValidator()
        self.writer = writer or PomWriter()
        self.parser = parser or ManifestParser()
        self.state = PipelineState.INIT

    def run(self) -> InstallReport:
        """Install every selected library and generate the aggregate descriptor.

        Returns:
            Report of the installed coordinates and the aggregate path.

        Raises:
            ConfigurationError: If the settings or inclusion patterns are invalid.
            ManifestFormatError: If the manifest or library tree is broken.
            ValidationError: If a generated descriptor is invalid.
            InstallationError: If the repository cannot be written.
            ConsistencyError: If the number of installations differs from
                the number of aggregate dependencies.
        """
        try:
            report = self._run()
        except InstallerError:
            self.state = PipelineState.FAILED
            raise

        self.state = PipelineState.DONE
        return report

    def plan(self) -> list[tuple[LibraryRecord, Coordinate]]:
        """Select the libraries a run would install, without installing them.

        Returns:
            Pairs of manifest record and derived coordinate, in manifest order.

        Raises:
            ConfigurationError: If the settings or inclusion patterns are invalid.
            ManifestFormatError: If the manifest or library tree is broken.
        """
        patterns = self._prepare(require_aggregate=False)
        selected = []

        for record in self._records():
            subdir, file_name = split_file_name(record.full_file_name)
            if not patterns.matches(subdir, file_name):
                continue
            self._locate(subdir, file_name)
            selected.append(
                (record, derive_coordinate(record, subdir, self.settings.group_prefix))
            )

        return selected

    def _run(self) -> InstallReport:
        patterns = self._prepare()
        report = InstallReport()
        installed = InstalledSet()
        installed_count = 0

        for record in self._records():
            self.state = PipelineState.FILTERING
            subdir, file_name = split_file_name(record.full_file_name)

            if not patterns.matches(subdir, file_name):
                logger.debug(f"Skipping {record.full_file_name}")
                report.skipped += 1
                continue

            binary_file = self._locate(subdir, file_name)

            self.state = PipelineState.DERIVING
            coordinate = derive_coordinate(record, subdir, self.settings.group_prefix)
            descriptor = build_artifact_descriptor(coordinate, record)

            self.state = PipelineState.VALIDATING
            self.validator.ensure_valid(descriptor)

            installed.add(
                f"{coordinate.group}.{file_name}",
                to_dependency(coordinate, self.settings.dependency_scope),
            )

            self.state = PipelineState.INSTALLING
            if self._install(binary_file, coordinate, descriptor):
                installed_count += 1
                report.installed.append(coordinate)
                logger.info(f"Installed {coordinate}")
            else:
                logger.error(f"Installer reported failure for {coordinate}")

        installed.freeze()

        if installed:
            report.aggregate_path = self._aggregate(installed, installed_count)

        return report

    def _prepare(self, require_aggregate: bool = True) -> PatternSet:
        # Patterns first, a bad regex must fail before anything is read.
        patterns = PatternSet.build(self.settings.include)
        self.settings.check(require_aggregate)
        return patterns

    def _records(self) -> Iterator[LibraryRecord]:
        self.state = PipelineState.PARSING
        manifest_path = self.settings.manifest_path
        logger.info(f"Parsing : {manifest_path}")
        return self.parser.iter_records(read_manifest(manifest_path))

    def _locate(self, subdir: str, file_name: str) -> Path:
        binary_file = self.settings.lib_dir / subdir / file_name
        if not binary_file.is_file():
            raise ManifestFormatError(f"File: {binary_file} not found")
        return binary_file

    def _install(self, binary_file: Path, coordinate: Coordinate, descriptor: Descriptor) -> bool:
        try:
            with self._temporary_descriptor(descriptor) as descriptor_file:
                return self.installer.install(binary_file, coordinate, descriptor_file)
        except OSError as e:
            raise InstallationError(coordinate.conflict_id, str(e)) from e

    @contextlib.contextmanager
    def _temporary_descriptor(self, descriptor: Descriptor) -> Iterator[Path]:
        descriptor_file = self.writer.write_temporary(descriptor)
        try:
            yield descriptor_file
        finally:
            descriptor_file.unlink(missing_ok=True)

    def _aggregate(self, installed: InstalledSet, installed_count: int) -> Path:
        self.state = PipelineState.AGGREGATING
        dependencies = installed.dependencies()
        settings = self.settings

        aggregate = build_aggregate_descriptor(
            artifact_id=settings.aggregate_artifact_id,
            group_id=settings.resolved_aggregate_group_id,
            name=settings.aggregate_name,
            version=settings.aggregate_version,
            dependencies=dependencies,
        )

        self.state = PipelineState.AGGREGATE_VALIDATING
        logger.info("Validating resulting pom model")
        self.validator.ensure_valid(aggregate)

        logger.info(f"{installed_count} artifacts installed")
        if len(dependencies) != installed_count:
            raise ConsistencyError(installed=installed_count, dependencies=len(dependencies))

        self.state = PipelineState.AGGREGATE_INSTALLING
        destination = settings.aggregate_destination
        logger.info(f"Generating : {destination}")
        self.writer.write(aggregate, destination)

        if settings.install_aggregate:
            coordinate = Coordinate(
                group=aggregate.group_id,
                artifact=aggregate.artifact_id,
                type=AGGREGATE_PACKAGING,
                version=aggregate.version,
            )
            try:
                if not self.installer.install(destination, coordinate, destination):
                    raise InstallationError(coordinate.conflict_id, "installer reported failure")
            except OSError as e:
                raise InstallationError(coordinate.conflict_id, str(e)) from e
            logger.info(f"Installed {coordinate}")

        logger.info(
            f"Generated pom file: '{destination}' with {len(dependencies)} dependencies"
        )
        return destination
