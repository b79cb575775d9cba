"""Builders for the descriptors installed with each artifact."""

from collections.abc import Iterable
from typing import Optional

from dependency_installer.models import (
    AGGREGATE_PACKAGING,
    Coordinate,
    Dependency,
    Descriptor,
    LibraryRecord,
)


def build_artifact_descriptor(coordinate: Coordinate, record: LibraryRecord) -> Descriptor:
    """Build the descriptor of a single vendored artifact.

    Args:
        coordinate: Coordinates derived for the record.
        record: The manifest record, providing name, URL and licenses.

    Returns:
        A Descriptor without a dependency list.
    """
    return Descriptor(
        group_id=coordinate.group,
        artifact_id=coordinate.artifact,
        version=coordinate.version,
        packaging=coordinate.type,
        name=record.project_name,
        url=record.project_url,
        licenses=list(record.licenses),
    )


def build_aggregate_descriptor(
    artifact_id: str,
    group_id: str,
    name: Optional[str],
    version: str,
    dependencies: Iterable[Dependency],
) -> Descriptor:
    """Build the ``pom`` descriptor depending on every installed artifact.

    Args:
        artifact_id: Artifact id of the aggregate.
        group_id: Group id of the aggregate.
        name: Human-readable name of the aggregate.
        version: Version of the aggregate.
        dependencies: Dependencies, in the order they should be listed.

    Returns:
        A Descriptor of packaging ``pom`` with no licenses.
    """
    return Descriptor(
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        packaging=AGGREGATE_PACKAGING,
        name=name,
        dependencies=list(dependencies),
    )
