"""Base interface for descriptor writers.

Writers turn a Descriptor into the document format understood by the
repository (a POM for Maven-layout repositories).
"""

import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from dependency_installer.models import Descriptor


class BaseDescriptorWriter(ABC):
    """Abstract base class for descriptor writers."""

    @abstractmethod
    def render(self, descriptor: Descriptor) -> str:
        """Render a descriptor to its document form.

        Args:
            descriptor: The descriptor to render.

        Returns:
            Rendered document as a string.
        """
        ...

    def write(self, descriptor: Descriptor, output_path: Path) -> Path:
        """Render and write a descriptor to a file.

        Missing parent directories are created.

        Args:
            descriptor: The descriptor to render.
            output_path: Path to write the document to.

        Returns:
            The path written.
        """
        content = self.render(descriptor)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        return output_path

    def write_temporary(self, descriptor: Descriptor) -> Path:
        """Render a descriptor into a new temporary file.

        The caller owns the file and must delete it.

        Returns:
            Path of the temporary file.
        """
        content = self.render(descriptor)

        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            prefix="mvninstall",
            suffix=self.default_extension,
            delete=False,
        ) as tmp_file:
            tmp_file.write(content)
            return Path(tmp_file.name)

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Return the file extension of written documents.

        Returns:
            Extension like ".pom".
        """
        ...
