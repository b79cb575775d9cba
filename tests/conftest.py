"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path
from typing import Optional

import pytest

from dependency_installer.config import InstallerSettings


def _library_xml(
    file_name: str,
    version: Optional[str] = "1.0",
    project_name: Optional[str] = "Test Project",
    project_url: Optional[str] = None,
    licenses: Optional[list[tuple[str, str]]] = None,
) -> str:
    """Build the XML of one ``library`` element.

    Pass ``licenses=None`` to omit the licenses block entirely.
    """
    parts = [f"<file-name>{file_name}</file-name>"]
    if version is not None:
        parts.append(f"<version>{version}</version>")
    if project_name is not None:
        parts.append(f"<project-name>{project_name}</project-name>")
    if project_url is not None:
        parts.append(f"<project-url>{project_url}</project-url>")
    if licenses is not None:
        entries = "".join(
            f"<license><license-name>{name}</license-name>"
            f"<copyright-notice>{notice}</copyright-notice></license>"
            for name, notice in licenses
        )
        parts.append(f"<licenses>{entries}</licenses>")
    return "<library>" + "".join(parts) + "</library>"


@pytest.fixture
def library_xml() -> Callable[..., str]:
    """Return a builder for ``library`` elements."""
    return _library_xml


@pytest.fixture
def manifest_xml() -> Callable[..., str]:
    """Return a builder wrapping library elements into a manifest document."""

    def build(*libraries: str) -> str:
        return "<libraries>" + "".join(libraries) + "</libraries>"

    return build


@pytest.fixture
def lib_dir(tmp_path: Path) -> Path:
    """Create an empty vendored library directory."""
    path = tmp_path / "lib"
    path.mkdir()
    return path


@pytest.fixture
def write_manifest(lib_dir: Path, manifest_xml) -> Callable[..., Path]:
    """Return a function writing ``versions.xml`` from library elements."""

    def write(*libraries: str) -> Path:
        path = lib_dir / "versions.xml"
        path.write_text(manifest_xml(*libraries), encoding="utf-8")
        return path

    return write


@pytest.fixture
def vendor_file(lib_dir: Path) -> Callable[[str], Path]:
    """Return a function creating a vendored file under the library directory."""

    def create(relative: str, content: bytes = b"PK\x03\x04binary") -> Path:
        path = lib_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return create


@pytest.fixture
def repository(tmp_path: Path) -> Path:
    """Return the path of a repository directory for the test."""
    return tmp_path / "repository"


@pytest.fixture
def settings(tmp_path: Path, lib_dir: Path, repository: Path) -> InstallerSettings:
    """Create settings selecting ``foo-.*`` in the ``dev`` sub-directory."""
    return InstallerSettings(
        include={"dev": "foo-.*"},
        lib_dir=lib_dir,
        group_prefix="com.example",
        aggregate_artifact_id="third-party-deps",
        aggregate_version="7.0",
        aggregate_destination=tmp_path / "target" / "generated-pom.xml",
        repository=repository,
    )
