"""Derivation of repository coordinates from manifest records.

The naming convention is fixed:

- ``group`` is ``<group prefix>.<subdirectory>``
- ``artifact`` is the file name up to its last ``.``
- ``type`` is the file name after its last ``.``

so ``dev/foo.bar-1.0.jar`` under prefix ``com.example`` becomes
``com.example.dev:foo.bar-1.0:jar``.
"""

from dependency_installer.models import Coordinate, Dependency, LibraryRecord


def extract_first(text: str, delimiter: str) -> str:
    """Return the part of ``text`` before the first ``delimiter``.

    Returns an empty string if the delimiter does not occur.
    """
    index = text.find(delimiter)
    if index == -1:
        return ""
    return text[:index]


def extract_last(text: str, delimiter: str) -> str:
    """Return the part of ``text`` after the last ``delimiter``.

    Returns an empty string if the delimiter does not occur.
    """
    index = text.rfind(delimiter)
    if index == -1:
        return ""
    return text[index + len(delimiter) :]


def split_file_name(full_file_name: str) -> tuple[str, str]:
    """Split ``subdir/name.ext`` into ``(subdir, name.ext)``."""
    return extract_first(full_file_name, "/"), extract_last(full_file_name, "/")


def derive_coordinate(
    record: LibraryRecord,
    subdirectory: str,
    group_prefix: str,
) -> Coordinate:
    """Map a library record to its repository coordinates.

    Args:
        record: The manifest record.
        subdirectory: Subdirectory the file lives in.
        group_prefix: Group id prefix shared by all derived coordinates.

    Returns:
        The derived Coordinate. The function is pure and deterministic.
    """
    file_name = extract_last(record.full_file_name, "/")
    extension = file_name.rfind(".")

    if extension == -1:
        artifact, packaging = file_name, ""
    else:
        artifact, packaging = file_name[:extension], file_name[extension + 1 :]

    return Coordinate(
        group=f"{group_prefix}.{subdirectory}",
        artifact=artifact,
        type=packaging,
        version=record.version,
    )


def to_dependency(coordinate: Coordinate, scope: str) -> Dependency:
    """Build the aggregate dependency entry for an installed coordinate."""
    return Dependency(
        group_id=coordinate.group,
        artifact_id=coordinate.artifact,
        version=coordinate.version,
        type=coordinate.type,
        scope=scope,
    )
