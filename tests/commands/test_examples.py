"""Tests for --examples flag on CLI commands.

Parametrized to cover all commands that define examples text.
"""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from cdnctl.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    # -- groups --
    (["domain", "--examples"], ["cdnctl domain add", "cdnctl domain list"]),
    (["domain", "add", "--examples"], ["https://media.example.com/"]),
    (["domain", "remove", "--examples"], ["cdnctl domain remove"]),
    (["domain", "list", "--examples"], ["cdnctl -q domain list"]),
    (["category", "--examples"], ["cdnctl category add"]),
    (["category", "add", "--examples"], ["cdnctl category add images"]),
    (["default", "--examples"], ["cdnctl default set"]),
    (["default", "set", "--examples"], ["cdnctl default set main images"]),
    (["binding", "--examples"], ["--binding screenshots"]),
    (["binding", "set", "--examples"], ["cdnctl binding set"]),
    # -- standalone commands --
    (["upload", "--examples"], ["--binding docs", "cdnctl -q upload"]),
    (["delete", "--examples"], ["cdnctl delete"]),
    (["ls", "--examples"], ["--page 2"]),
    (["serve", "--examples"], ["--threads 32", "--log-json"]),
]


def _examples_id(item: tuple[list[str], list[str]]) -> str:
    """Generate a readable test ID from args."""
    args, _ = item
    return "_".join(a for a in args if a != "--examples")


@pytest.mark.parametrize(
    "args,expected_keywords",
    EXAMPLES_COMMANDS,
    ids=[_examples_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples_flag(
    cli_runner: CliRunner, args: list[str], expected_keywords: list[str]
) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in examples output for {args}"


@pytest.mark.parametrize(
    "args",
    [["domain", "--help"], ["upload", "--help"], ["binding", "set", "--help"]],
)
def test_examples_listed_in_help(cli_runner: CliRunner, args: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "--examples" in result.output
