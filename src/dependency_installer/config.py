"""Installer configuration.

Settings can come from a TOML file and from command-line options; options
given on the command line take precedence. A configuration file looks like::

    [installer]
    lib-dir = "lib"
    group-prefix = "com.example.thirdparty"
    aggregate-artifact-id = "third-party-deps"
    dependency-scope = "test"
    aggregate-destination = "target/generated-pom.xml"

    [installer.include]
    development = "jsf-.*,derby,catalina,ant-.*"
    global = ".*"
"""

import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional

from dependency_installer.errors import ConfigurationError
from dependency_installer.manifest import DEFAULT_MANIFEST_NAME
from dependency_installer.models import DEFAULT_VERSION, VALID_SCOPES

CONFIG_TABLE = "installer"

_PATH_FIELDS = {"lib_dir", "aggregate_destination", "repository"}


@dataclass(frozen=True)
class InstallerSettings:
    """All inputs of an installation run.

    Attributes:
        include: Subdirectory name mapped to comma-separated regular expressions.
        lib_dir: Directory containing the manifest and the vendored subdirectories.
        group_prefix: Group id prefix of every derived coordinate.
        aggregate_artifact_id: Artifact id of the aggregate descriptor.
        aggregate_group_id: Group id of the aggregate descriptor. Defaults to
            group_prefix.
        aggregate_name: Human-readable name of the aggregate descriptor.
        aggregate_version: Version of the aggregate descriptor.
        dependency_scope: Scope applied to every aggregate dependency.
        aggregate_destination: Where the aggregate descriptor is written.
        repository: Repository directory, None for the default local repository.
        manifest_name: File name of the manifest inside lib_dir.
        install_aggregate: Also install the aggregate descriptor into the
            repository under its own coordinate.
    """

    include: dict[str, str] = field(default_factory=dict)
    lib_dir: Optional[Path] = None
    group_prefix: str = ""
    aggregate_artifact_id: str = ""
    aggregate_group_id: Optional[str] = None
    aggregate_name: str = "Third-party dependencies"
    aggregate_version: str = DEFAULT_VERSION
    dependency_scope: str = "test"
    aggregate_destination: Path = Path("target") / "generated-pom.xml"
    repository: Optional[Path] = None
    manifest_name: str = DEFAULT_MANIFEST_NAME
    install_aggregate: bool = False

    @property
    def manifest_path(self) -> Path:
        """Return the manifest location inside the library directory."""
        if self.lib_dir is None:
            raise ConfigurationError("Specify the library directory")
        return self.lib_dir / self.manifest_name

    @property
    def resolved_aggregate_group_id(self) -> str:
        return self.aggregate_group_id or self.group_prefix

    def check(self, require_aggregate: bool = True) -> None:
        """Validate the settings that do not involve inclusion patterns.

        Args:
            require_aggregate: Whether the aggregate descriptor settings are
                needed, False when only previewing the selection.

        Raises:
            ConfigurationError: If a required setting is missing or invalid.
        """
        if self.lib_dir is None:
            raise ConfigurationError("Specify the library directory")
        if not self.lib_dir.is_dir():
            raise ConfigurationError(f"Library directory {self.lib_dir} doesn't exist")
        if not self.group_prefix:
            raise ConfigurationError("Specify the group id prefix")
        if require_aggregate and not self.aggregate_artifact_id:
            raise ConfigurationError("Specify the artifact id of the generated pom")
        if self.dependency_scope not in VALID_SCOPES:
            raise ConfigurationError(
                f"Invalid dependency scope '{self.dependency_scope}', "
                f"expected one of: {', '.join(VALID_SCOPES)}"
            )

    def merge(self, **overrides: Any) -> "InstallerSettings":
        """Return a copy with every non-None override applied.

        The ``include`` override is merged into the existing mapping.
        """
        values = {key: value for key, value in overrides.items() if value is not None}

        if "include" in values:
            values["include"] = {**self.include, **values["include"]}

        return replace(self, **values)


def load_settings(path: Path) -> InstallerSettings:
    """Load settings from the ``[installer]`` table of a TOML file.

    Keys may be written with dashes or underscores. Relative paths are
    resolved against the directory containing the file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        The loaded settings.

    Raises:
        ConfigurationError: If the file is missing, is not valid TOML, or
            contains unknown keys.
    """
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e

    table = data.get(CONFIG_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigurationError(f"[{CONFIG_TABLE}] in {path} must be a table")

    known = {f.name for f in fields(InstallerSettings)}
    values: dict[str, Any] = {}

    for key, value in table.items():
        name = key.replace("-", "_")
        if name not in known:
            raise ConfigurationError(f"Unknown setting '{key}' in {path}")

        if name in _PATH_FIELDS:
            value = path.parent / value
        elif name == "include":
            if not isinstance(value, dict):
                raise ConfigurationError(f"[{CONFIG_TABLE}.include] in {path} must be a table")
            value = {str(k): str(v) for k, v in value.items()}

        values[name] = value

    return InstallerSettings(**values)


def parse_include_options(options: Optional[list[str]]) -> Optional[dict[str, str]]:
    """Parse ``SUBDIR=REGEX[,REGEX...]`` command-line values.

    Returns:
        The parsed mapping, or None if no option was given.

    Raises:
        ConfigurationError: If a value has no ``=`` or no subdirectory.
    """
    if not options:
        return None

    include: dict[str, str] = {}
    for option in options:
        subdir, sep, patterns = option.partition("=")
        if not sep or not subdir.strip():
            raise ConfigurationError(
                f"Invalid include '{option}', expected SUBDIR=REGEX[,REGEX...]"
            )
        include[subdir.strip()] = patterns

    return include
