"""Tests for the root cdnctl CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from cdnctl import __version__
from cdnctl.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "cdnctl" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize(
    "command", ["domain", "category", "default", "binding", "upload", "delete", "ls", "serve"]
)
def test_command_registered(cli_runner: CliRunner, command: str) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert command in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/does-not-exist.toml", "--version"])
    assert result.exit_code == 0


def test_root_option(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["--root", str(tmp_path), "category", "add", "docs", "Docs"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "configs" / "categories.json").is_file()


def test_invalid_toml_reported(
    cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "cdnctl.toml").write_text("[broken")
    monkeypatch.chdir(tmp_path)
    result = cli_runner.invoke(cli, ["domain", "list"])
    assert result.exit_code == 1
    assert "Invalid TOML" in result.output
