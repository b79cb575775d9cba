"""POM writer for Maven-layout repositories.

Renders descriptors as Maven POM 4.0.0 documents using a Jinja2 template.
"""

from importlib.resources import files
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, Template

from dependency_installer.models import Descriptor
from dependency_installer.writers.base import BaseDescriptorWriter


class PomWriter(BaseDescriptorWriter):
    """Writer that renders descriptors as POM XML.

    Attributes:
        template: The Jinja2 template to use for rendering.
    """

    def __init__(self, template_path: Optional[Path] = None) -> None:
        """Initialize the POM writer.

        Args:
            template_path: Optional path to a custom Jinja2 template.
                If not provided, uses the bundled template.
        """
        if template_path:
            env = self._environment(FileSystemLoader(template_path.parent))
            self.template = env.get_template(template_path.name)
        else:
            self.template = self._load_default_template()

    @staticmethod
    def _environment(loader: Optional[FileSystemLoader] = None) -> Environment:
        # Text from the manifest lands in element content, escape it.
        return Environment(
            loader=loader,
            autoescape=True,
            keep_trailing_newline=True,
        )

    def _load_default_template(self) -> Template:
        template_content = (
            files("dependency_installer.templates")
            .joinpath("pom.xml.j2")
            .read_text(encoding="utf-8")
        )
        return self._environment().from_string(template_content)

    def render(self, descriptor: Descriptor) -> str:
        """Render a descriptor to POM XML.

        Args:
            descriptor: The descriptor to render.

        Returns:
            The POM document as a string.
        """
        return self.template.render(descriptor=descriptor)

    @property
    def default_extension(self) -> str:
        return ".pom"
