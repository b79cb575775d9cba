from pathlib import Path

import pytest
from typer.testing import CliRunner

from dependency_installer.cli import app
from dependency_installer.models import Coordinate, InstallReport

runner = CliRunner()


@pytest.fixture
def vendored_tree(write_manifest, vendor_file, library_xml):
    """Create a library tree with one selectable and one unrelated library."""
    write_manifest(
        library_xml("dev/foo-1.0.jar", version="2.3", licenses=[("MIT", "(c) Foo")]),
        library_xml("global/bar.jar", licenses=None),
    )
    vendor_file("dev/foo-1.0.jar")
    vendor_file("global/bar.jar")


def _install_args(lib_dir: Path, repository: Path, output: Path) -> list[str]:
    return [
        "install",
        "--lib-dir", str(lib_dir),
        "--include", "dev=foo-.*",
        "--group-prefix", "com.example",
        "--artifact-id", "third-party-deps",
        "--repository", str(repository),
        "--output", str(output),
    ]


def test_install_command(vendored_tree, lib_dir, repository, tmp_path):
    """Test a complete install run from the command line."""
    output = tmp_path / "generated-pom.xml"

    result = runner.invoke(app, _install_args(lib_dir, repository, output))

    assert result.exit_code == 0, result.output
    assert "Installed 1 artifacts" in result.output
    assert "Generated:" in result.output
    assert output.exists()
    assert (repository / "com" / "example" / "dev" / "foo-1.0" / "2.3" / "foo-1.0-2.3.jar").exists()
    assert not (repository / "com" / "example" / "global").exists()


def test_install_command_from_config_file(vendored_tree, lib_dir, repository, tmp_path):
    """Test that settings can come from a TOML file with CLI overrides."""
    config = tmp_path / "installer.toml"
    config.write_text(
        f"""
[installer]
lib-dir = "{lib_dir.name}"
group-prefix = "com.example"
aggregate-artifact-id = "third-party-deps"
repository = "{repository.name}"

[installer.include]
dev = "nothing-matches"
""",
        encoding="utf-8",
    )
    output = tmp_path / "out" / "pom.xml"

    result = runner.invoke(
        app,
        ["install", "--config", str(config), "--include", "global=.*", "--output", str(output)],
    )

    assert result.exit_code == 0, result.output
    assert (repository / "com" / "example" / "global" / "bar" / "1.0" / "bar-1.0.jar").exists()
    assert "bar" in output.read_text(encoding="utf-8")


def test_install_command_nothing_selected(vendored_tree, lib_dir, repository, tmp_path):
    output = tmp_path / "generated-pom.xml"
    args = _install_args(lib_dir, repository, output)
    args[args.index("dev=foo-.*")] = "dev=nothing"

    result = runner.invoke(app, args)

    assert result.exit_code == 0
    assert "No libraries matched" in result.output
    assert not output.exists()


def test_install_command_invalid_regex(vendored_tree, lib_dir, repository, tmp_path):
    """Test that configuration errors exit with code 1."""
    args = _install_args(lib_dir, repository, tmp_path / "pom.xml")
    args[args.index("dev=foo-.*")] = "dev=foo-("

    result = runner.invoke(app, args)

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert not repository.exists()


def test_install_command_missing_backing_file(write_manifest, library_xml, lib_dir, repository, tmp_path):
    """Test that a broken vendor tree exits with code 1."""
    write_manifest(library_xml("dev/foo-1.0.jar"))

    result = runner.invoke(app, _install_args(lib_dir, repository, tmp_path / "pom.xml"))

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert not repository.exists()


def test_install_command_reports_skipped_when_verbose(mocker, lib_dir, repository, tmp_path):
    """Test the verbose summary with a mocked pipeline."""
    pipeline = mocker.patch("dependency_installer.cli.InstallPipeline")
    pipeline.return_value.installer.root = repository
    pipeline.return_value.run.return_value = InstallReport(
        installed=[Coordinate(group="com.example.dev", artifact="foo", type="jar", version="1")],
        skipped=4,
        aggregate_path=tmp_path / "pom.xml",
    )

    result = runner.invoke(app, _install_args(lib_dir, repository, tmp_path / "pom.xml") + ["--verbose"])

    assert result.exit_code == 0, result.output
    assert "Skipped 4 libraries" in result.output
    settings = pipeline.call_args.args[0]
    assert settings.include == {"dev": "foo-.*"}
    assert settings.aggregate_artifact_id == "third-party-deps"


def test_scan_command(vendored_tree, lib_dir):
    """Test that scan lists the selection without installing."""
    result = runner.invoke(
        app,
        ["scan", "--lib-dir", str(lib_dir), "--include", "dev=foo-.*", "--group-prefix", "com.example"],
    )

    assert result.exit_code == 0, result.output
    assert "dev/foo-1.0.jar" in result.output
    assert "MIT" in result.output
    assert "global/bar.jar" not in result.output


def test_scan_command_invalid_include_option(lib_dir):
    result = runner.invoke(app, ["scan", "--lib-dir", str(lib_dir), "--include", "dev"])

    assert result.exit_code == 1
    assert "SUBDIR=REGEX" in result.output
