"""Click base classes shared by every catalyst command.

Help text stays short. Commands may also carry a block of sample
invocations, which ``--examples`` prints in place of running the command.
"""

from __future__ import annotations

from typing import Any

import click


def examples_option(examples: str) -> click.Option:
    """Eager ``--examples`` flag that prints *examples* under the command path and exits."""

    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n")
            click.echo(examples)
            ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show,
        help="Show sample invocations and exit.",
    )


class CatalystCommand(click.Command):
    """A command with an optional ``examples`` block."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(examples_option(examples))


class CatalystGroup(click.Group):
    """A group whose subcommands accept ``examples=`` without an explicit ``cls``.

    Nested groups created with ``@group.group()`` are CatalystGroups as well.
    """

    command_class = CatalystCommand
    group_class = type

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(examples_option(examples))
