"""Parser for the library manifest (``versions.xml``).

The manifest lists every vendored library with its location, version and
licensing information::

    <libraries>
        <library>
            <file-name>development/derby.jar</file-name>
            <version>10.2.2.0</version>
            <project-name>Apache Derby</project-name>
            <project-url>http://db.apache.org/derby</project-url>
            <licenses>
                <license>
                    <license-name>Apache License 2.0</license-name>
                    <copyright-notice>Copyright (c) The Apache Software Foundation</copyright-notice>
                </license>
            </licenses>
        </library>
    </libraries>

The format is strict: every child of the root must be a ``library`` element,
and every library must name its file. Missing versions and licenses are
tolerated and reported as warnings.
"""

import logging
import re
from collections.abc import Iterator
from pathlib import Path
from typing import Optional, Union

from lxml import etree
from lxml.etree import XMLSyntaxError

from dependency_installer.errors import ManifestFormatError
from dependency_installer.models import DEFAULT_VERSION, LibraryRecord, License

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "versions.xml"

LIBRARY_TAG = "library"

XML_DECLARATION = re.compile(r"^\ufeff?\s*<\?xml[^>]*\?>")


class ManifestParser:
    """Parses manifest documents into LibraryRecord objects.

    Records are produced lazily and in document order by
    :meth:`iter_records`, so a structural error is raised at the point the
    offending element is reached. :meth:`parse` collects them all.
    """

    def __init__(self) -> None:
        self._xml_parser = etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
        )

    def parse(self, content: Union[str, bytes]) -> list[LibraryRecord]:
        """Parse a whole manifest document.

        Args:
            content: The manifest document.

        Returns:
            Library records in document order.

        Raises:
            ManifestFormatError: If the document is not well-formed, contains
                a non-library element, or a library without a file name.
        """
        return list(self.iter_records(content))

    def parse_file(self, path: Path) -> list[LibraryRecord]:
        """Read and parse a manifest file.

        Raises:
            ManifestFormatError: If the file does not exist or is malformed.
        """
        return list(self.iter_records(read_manifest(path)))

    def iter_records(self, content: Union[str, bytes]) -> Iterator[LibraryRecord]:
        """Yield library records one at a time, in document order.

        Args:
            content: The manifest document.

        Yields:
            One LibraryRecord per ``library`` element.

        Raises:
            ManifestFormatError: See :meth:`parse`.
        """
        root = self._load(content)

        for element in root.iterchildren(etree.Element):
            if element.tag != LIBRARY_TAG:
                raise ManifestFormatError(
                    f"Not suitable xml definition: unexpected element "
                    f"<{element.tag}> (line {element.sourceline}), "
                    f"expected <{LIBRARY_TAG}>"
                )
            yield self._parse_library(element)

    def _load(self, content: Union[str, bytes]) -> etree._Element:
        # Decoded text no longer follows the encoding it declares.
        if isinstance(content, str):
            content = XML_DECLARATION.sub("", content, count=1)

        try:
            return etree.fromstring(content, self._xml_parser)
        except XMLSyntaxError as e:
            raise ManifestFormatError(f"Invalid manifest XML: {e}") from e

    def _parse_library(self, element: etree._Element) -> LibraryRecord:
        full_file_name = _text(element, "file-name")
        project_name = _text(element, "project-name")

        if not full_file_name:
            raise ManifestFormatError(
                f"file-name of '{project_name}' must not be empty"
            )

        if "/" not in full_file_name:
            raise ManifestFormatError(
                f"file-name '{full_file_name}' of '{project_name}' "
                f"must start with a sub-directory"
            )

        if full_file_name.count("/") != 1:
            raise ManifestFormatError(
                f"file-name '{full_file_name}' of '{project_name}' "
                f"must name a file directly inside its sub-directory"
            )

        version = _text(element, "version")
        if not version:
            logger.warning(
                f"Version of: {full_file_name} is missing, "
                f"setting version to {DEFAULT_VERSION}"
            )
            version = DEFAULT_VERSION

        licenses: list[License] = []
        licenses_element = element.find("licenses")

        if licenses_element is not None:
            for license_element in licenses_element.iterchildren(etree.Element):
                licenses.append(
                    License(
                        name=_text(license_element, "license-name"),
                        notice=_text(license_element, "copyright-notice"),
                    )
                )
        else:
            logger.warning(f"Library: {full_file_name} has no license")

        return LibraryRecord(
            full_file_name=full_file_name,
            project_name=project_name,
            project_url=_text(element, "project-url"),
            version=version,
            licenses=tuple(licenses),
            has_license_block=licenses_element is not None,
        )


def read_manifest(path: Path) -> bytes:
    """Read the raw manifest bytes, leaving decoding to the XML parser.

    Raises:
        ManifestFormatError: If the file does not exist.
    """
    if not path.is_file():
        raise ManifestFormatError(f"{path} doesn't exist")
    return path.read_bytes()


def _text(element: etree._Element, tag: str) -> Optional[str]:
    """Return the stripped text of a child element, or None if it is absent."""
    text = element.findtext(tag)
    if text is None:
        return None
    return text.strip()
