"""Tests for descriptor builders."""

from dependency_installer.descriptors import build_aggregate_descriptor, build_artifact_descriptor
from dependency_installer.models import (
    GENERATED_DESCRIPTION,
    Coordinate,
    Dependency,
    LibraryRecord,
    License,
)


def test_build_artifact_descriptor():
    """Test that the artifact descriptor carries coordinate and record metadata."""
    coordinate = Coordinate(group="com.example.dev", artifact="foo-1.0", type="jar", version="2.3")
    record = LibraryRecord(
        full_file_name="dev/foo-1.0.jar",
        project_name="Foo",
        project_url="https://foo.example.com",
        version="2.3",
        licenses=(License(name="MIT", notice="Copyright Foo"),),
    )

    descriptor = build_artifact_descriptor(coordinate, record)

    assert descriptor.group_id == "com.example.dev"
    assert descriptor.artifact_id == "foo-1.0"
    assert descriptor.version == "2.3"
    assert descriptor.packaging == "jar"
    assert descriptor.name == "Foo"
    assert descriptor.url == "https://foo.example.com"
    assert descriptor.licenses == [License(name="MIT", notice="Copyright Foo")]
    assert descriptor.dependencies is None
    assert descriptor.description == GENERATED_DESCRIPTION


def test_build_aggregate_descriptor():
    """Test that the aggregate is a pom carrying dependencies and no licenses."""
    dependencies = [
        Dependency(group_id="g.a", artifact_id="a", version="1", type="jar", scope="test"),
        Dependency(group_id="g.b", artifact_id="b", version="2", type="zip", scope="test"),
    ]

    descriptor = build_aggregate_descriptor(
        artifact_id="deps",
        group_id="com.example",
        name="Third-party dependencies",
        version="7.0",
        dependencies=iter(dependencies),
    )

    assert descriptor.packaging == "pom"
    assert descriptor.dependencies == dependencies
    assert descriptor.licenses == []
    assert descriptor.url is None
    assert descriptor.description == GENERATED_DESCRIPTION
    assert descriptor.is_aggregate
