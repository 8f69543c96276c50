"""Tests for the domain and category CLI groups."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from cdnctl.cli import cli


@pytest.mark.usefixtures("_isolated_depot")
class TestDomainCommands:
    def test_add_and_list(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "domain", "add", "main", "Main CDN", "https://cdn.example.com/"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["data"]["public_host"] == "cdn.example.com"

        listed = cli_runner.invoke(cli, ["domain", "list"])
        assert listed.exit_code == 0
        assert "main" in listed.output
        assert "cdn.example.com" in listed.output

    def test_add_persists_across_invocations(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["domain", "add", "main", "Main", "cdn.example.com"])
        result = cli_runner.invoke(cli, ["-q", "domain", "list"])
        assert result.output.strip() == "main"

    def test_add_duplicate_fails(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["domain", "add", "main", "Main", "cdn.example.com"])
        result = cli_runner.invoke(cli, ["domain", "add", "main", "Main", "x.example.com"])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_remove(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["domain", "add", "main", "Main", "cdn.example.com"])
        result = cli_runner.invoke(cli, ["domain", "remove", "main"])
        assert result.exit_code == 0
        assert "left on disk" in result.output

    def test_remove_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "domain", "remove", "ghost"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "NOT_FOUND"

    def test_empty_list(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["domain", "list"])
        assert result.exit_code == 0
        assert "No domains configured." in result.output

    def test_add_refused_when_catalog_unreadable(
        self, cli_runner: CliRunner, depot_root: Path
    ) -> None:
        configs = depot_root / "configs"
        configs.mkdir()
        truncated = '[{"folder-name": "main"'
        (configs / "domains.json").write_text(truncated)
        result = cli_runner.invoke(cli, ["--json", "domain", "add", "new", "New", "new.com"])
        assert result.exit_code == 1
        assert "PARSE_ERROR" in result.output
        assert (configs / "domains.json").read_text() == truncated


@pytest.mark.usefixtures("_isolated_depot")
class TestCategoryCommands:
    def test_add_list_remove(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["category", "add", "Photo Album", "Photos"])
        assert result.exit_code == 0
        assert "Photo-Album" in result.output

        listed = cli_runner.invoke(cli, ["-q", "category", "list"])
        assert listed.output.strip() == "Photo-Album"

        removed = cli_runner.invoke(cli, ["category", "remove", "Photo-Album"])
        assert removed.exit_code == 0

    def test_remove_in_use(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["domain", "add", "main", "Main", "cdn.example.com"])
        cli_runner.invoke(cli, ["category", "add", "images", "Images"])
        cli_runner.invoke(cli, ["default", "set", "main", "images"])
        result = cli_runner.invoke(cli, ["--json", "category", "remove", "images"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "IN_USE"
