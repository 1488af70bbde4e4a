"""Every command exposes ``--examples`` and exits cleanly."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from catalyst.cli import cli

EXAMPLES_COMMANDS: list[list[str]] = [
    ["config"],
    ["config", "get"],
    ["config", "set"],
    ["config", "list"],
    ["config", "reset"],
    ["config", "init"],
    ["workspace"],
    ["workspace", "create"],
    ["workspace", "add"],
    ["workspace", "remove"],
    ["workspace", "list"],
    ["workspace", "validate"],
    ["template"],
    ["template", "list"],
    ["template", "show"],
    ["list"],
    ["new"],
]


@pytest.mark.parametrize("args", EXAMPLES_COMMANDS, ids=["_".join(a) for a in EXAMPLES_COMMANDS])
def test_examples(cli_runner: CliRunner, args: list[str]) -> None:
    result = cli_runner.invoke(cli, [*args, "--examples"])
    assert result.exit_code == 0, result.output
    assert "Examples for" in result.output
    assert "catalyst " in result.output


def test_examples_listed_in_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["workspace", "add", "--help"])
    assert "--examples" in result.output
