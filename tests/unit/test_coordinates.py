"""Tests for coordinate derivation."""

import pytest

from dependency_installer.coordinates import (
    derive_coordinate,
    extract_first,
    extract_last,
    split_file_name,
    to_dependency,
)
from dependency_installer.models import Coordinate, LibraryRecord


class TestExtract:
    """Test the single-delimiter extraction helpers."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("dev/foo.jar", "dev"),
            ("a/b/c.jar", "a"),
            ("foo.jar", ""),
            ("/foo.jar", ""),
        ],
    )
    def test_extract_first(self, text, expected):
        assert extract_first(text, "/") == expected

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("dev/foo.jar", "foo.jar"),
            ("a/b/c.jar", "c.jar"),
            ("foo.jar", ""),
            ("dev/", ""),
        ],
    )
    def test_extract_last(self, text, expected):
        assert extract_last(text, "/") == expected

    def test_split_file_name(self):
        """Test that the subdirectory is before the first slash."""
        assert split_file_name("dev/foo-1.0.jar") == ("dev", "foo-1.0.jar")


class TestDeriveCoordinate:
    """Test suite for derive_coordinate."""

    def test_simple_file_name(self):
        """Test the coordinate of a plain jar."""
        record = LibraryRecord(full_file_name="dev/foo-1.0.jar", version="2.3")

        coordinate = derive_coordinate(record, "dev", "com.example")

        assert coordinate == Coordinate(
            group="com.example.dev",
            artifact="foo-1.0",
            type="jar",
            version="2.3",
        )

    def test_multi_dot_file_name_splits_at_last_dot(self):
        """Test that only the final extension becomes the type."""
        record = LibraryRecord(full_file_name="dev/foo.bar.jar")

        coordinate = derive_coordinate(record, "dev", "com.example")

        assert coordinate.artifact == "foo.bar"
        assert coordinate.type == "jar"

    def test_file_name_without_extension(self):
        """Test that a file without a dot has an empty type."""
        record = LibraryRecord(full_file_name="dev/LICENSE")

        coordinate = derive_coordinate(record, "dev", "com.example")

        assert coordinate.artifact == "LICENSE"
        assert coordinate.type == ""

    def test_version_copied_verbatim(self):
        """Test that versions are opaque strings."""
        record = LibraryRecord(full_file_name="dev/foo.jar", version="[1.0,2.0) beta")

        assert derive_coordinate(record, "dev", "g").version == "[1.0,2.0) beta"

    def test_derivation_is_idempotent(self):
        """Test that deriving twice from the same record is identical."""
        record = LibraryRecord(full_file_name="portal/commons-io.jar", version="1.4")

        first = derive_coordinate(record, "portal", "com.example")
        second = derive_coordinate(record, "portal", "com.example")

        assert first == second


def test_to_dependency_applies_scope():
    """Test that the dependency copies the coordinate and the given scope."""
    coordinate = Coordinate(group="com.example.dev", artifact="foo", type="jar", version="1.0")

    dependency = to_dependency(coordinate, "provided")

    assert dependency.group_id == "com.example.dev"
    assert dependency.artifact_id == "foo"
    assert dependency.type == "jar"
    assert dependency.version == "1.0"
    assert dependency.scope == "provided"
