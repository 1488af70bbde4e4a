"""Parametrized help tests for all CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from catalyst.cli import cli

# (CLI args, expected keywords in output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    # -- config group --
    (["config", "--help"], ["get", "set", "list", "reset", "init"]),
    (["config", "get", "--help"], ["KEY"]),
    (["config", "set", "--help"], ["KEY", "VALUE", "--global"]),
    (["config", "list", "--help"], ["--global", "--local"]),
    (["config", "reset", "--help"], ["--global", "--force"]),
    (["config", "init", "--help"], ["--global", "--force"]),
    # -- workspace group --
    (["workspace", "--help"], ["create", "add", "remove", "list", "validate"]),
    (["workspace", "create", "--help"], ["NAME", "--at"]),
    (["workspace", "add", "--help"], ["PACKAGE_PATH", "--workspace"]),
    (["workspace", "remove", "--help"], ["PACKAGE_PATH", "--workspace"]),
    (["workspace", "list", "--help"], ["--workspace", "--sorted"]),
    (["workspace", "validate", "--help"], ["--workspace"]),
    # -- template group --
    (["template", "--help"], ["list", "show"]),
    (["template", "list", "--help"], ["--examples"]),
    (["template", "show", "--help"], ["NAME", "--content"]),
    # -- list --
    (["list", "--help"], ["--path", "--workspace", "--no-workspace", "--full-paths"]),
    # -- new --
    (["new", "--help"], ["KIND", "NAME", "--path", "--author", "--platform", "--dependency"]),
    (["new", "--help"], ["--local", "--var", "--no-workspace", "--no-select", "--dry-run"]),
]


def _help_id(args_keywords: tuple[list[str], list[str]]) -> str:
    """Generate a readable test ID from args."""
    args, _ = args_keywords
    return "_".join(a for a in args if a != "--help")


@pytest.mark.parametrize(
    ("args", "keywords"),
    HELP_COMMANDS,
    ids=[_help_id(entry) for entry in HELP_COMMANDS],
)
def test_help(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    for keyword in keywords:
        assert keyword in result.output


def test_new_help_lists_module_kinds(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["new", "--help"])
    for kind in ("core", "feature", "shared", "microapp"):
        assert kind in result.output
