"""Command-line interface for dependency_installer.

Provides the entry point and subcommands for installing vendored libraries
into a local repository and previewing which libraries a run would select.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dependency_installer.config import (
    InstallerSettings,
    load_settings,
    parse_include_options,
)
from dependency_installer.errors import InstallerError
from dependency_installer.pipeline import InstallPipeline

app = typer.Typer(
    name="dependency-installer",
    help="Install vendored third-party libraries into a local repository.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("dependency_installer")


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("dependency_installer").setLevel(level)


ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help="TOML file with an [installer] table",
        exists=True,
        readable=True,
        dir_okay=False,
    ),
]
LibDirOption = Annotated[
    Optional[Path],
    typer.Option(
        "--lib-dir",
        "-l",
        help="Directory containing the manifest and vendored sub-directories",
        file_okay=False,
    ),
]
IncludeOption = Annotated[
    Optional[list[str]],
    typer.Option(
        "--include",
        "-i",
        help="Inclusion patterns as SUBDIR=REGEX[,REGEX...] (repeatable)",
    ),
]
GroupPrefixOption = Annotated[
    Optional[str],
    typer.Option(
        "--group-prefix",
        "-g",
        help="Group id prefix of installed artifacts",
    ),
]
ManifestOption = Annotated[
    Optional[str],
    typer.Option(
        "--manifest",
        help="Manifest file name inside the library directory",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
]


def _build_settings(config: Optional[Path], **overrides) -> InstallerSettings:
    """Load the configuration file, if any, and apply command-line overrides."""
    settings = load_settings(config) if config else InstallerSettings()
    overrides["include"] = parse_include_options(overrides.get("include"))
    return settings.merge(**overrides)


@app.command()
def install(
    config: ConfigOption = None,
    lib_dir: LibDirOption = None,
    include: IncludeOption = None,
    group_prefix: GroupPrefixOption = None,
    artifact_id: Annotated[
        Optional[str],
        typer.Option(
            "--artifact-id",
            "-a",
            help="Artifact id of the generated pom",
        ),
    ] = None,
    aggregate_group_id: Annotated[
        Optional[str],
        typer.Option(
            "--aggregate-group-id",
            help="Group id of the generated pom (defaults to the group prefix)",
        ),
    ] = None,
    name: Annotated[
        Optional[str],
        typer.Option(
            "--name",
            help="Name of the generated pom",
        ),
    ] = None,
    version: Annotated[
        Optional[str],
        typer.Option(
            "--version",
            help="Version of the generated pom",
        ),
    ] = None,
    scope: Annotated[
        Optional[str],
        typer.Option(
            "--scope",
            help="Scope of every dependency in the generated pom",
        ),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Destination of the generated pom",
        ),
    ] = None,
    repository: Annotated[
        Optional[Path],
        typer.Option(
            "--repository",
            "-r",
            envvar="DEPENDENCY_INSTALLER_REPOSITORY",
            help="Local repository directory (defaults to ~/.m2/repository)",
            file_okay=False,
        ),
    ] = None,
    install_aggregate: Annotated[
        bool,
        typer.Option(
            "--install-aggregate",
            help="Also install the generated pom into the repository",
        ),
    ] = False,
    manifest: ManifestOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Install the selected libraries and generate the aggregate pom.

    Exit codes:
        0 - All selected libraries installed
        1 - Configuration, manifest, validation or installation error
    """
    _setup_logging(verbose)

    try:
        settings = _build_settings(
            config,
            lib_dir=lib_dir,
            include=include,
            group_prefix=group_prefix,
            aggregate_artifact_id=artifact_id,
            aggregate_group_id=aggregate_group_id,
            aggregate_name=name,
            aggregate_version=version,
            dependency_scope=scope,
            aggregate_destination=output,
            repository=repository,
            install_aggregate=install_aggregate or None,
            manifest_name=manifest,
        )
        pipeline = InstallPipeline(settings)
        report = pipeline.run()
    except InstallerError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    if not report.installed:
        console.print("[yellow]No libraries matched the inclusion patterns[/yellow]")
        raise typer.Exit(code=0)

    console.print(
        f"Installed [bold]{report.installed_count}[/bold] artifacts "
        f"into {pipeline.installer.root}"
    )
    if verbose:
        console.print(f"[dim]Skipped {report.skipped} libraries[/dim]")
    console.print(f"[green]Generated:[/green] {report.aggregate_path}")


@app.command()
def scan(
    config: ConfigOption = None,
    lib_dir: LibDirOption = None,
    include: IncludeOption = None,
    group_prefix: GroupPrefixOption = None,
    manifest: ManifestOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List the libraries an install run would select, without installing."""
    _setup_logging(verbose)

    try:
        settings = _build_settings(
            config,
            lib_dir=lib_dir,
            include=include,
            group_prefix=group_prefix,
            manifest_name=manifest,
        )
        selected = InstallPipeline(settings).plan()
    except InstallerError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    if not selected:
        console.print("[yellow]No libraries matched the inclusion patterns[/yellow]")
        raise typer.Exit(code=0)

    table = Table(title=f"Selected libraries ({len(selected)})")
    table.add_column("File")
    table.add_column("Coordinate")
    table.add_column("Licenses")

    for record, coordinate in selected:
        licenses = ", ".join(lic.name for lic in record.licenses if lic.name)
        table.add_row(
            escape(record.full_file_name),
            escape(str(coordinate)),
            escape(licenses) or "[yellow]none[/yellow]",
        )

    console.print(table)


if __name__ == "__main__":
    app()
