"""Subcommand modules for catalyst.

Provides register_commands() which uses deferred imports to keep
``catalyst --help`` fast as the codebase grows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    3 groups (have subcommands) + 2 standalone commands.
    """
    # --- Groups ---
    from catalyst.commands.config_cmd import config_cmd
    from catalyst.commands.template import template
    from catalyst.commands.workspace import workspace

    cli.add_command(config_cmd)
    cli.add_command(template)
    cli.add_command(workspace)

    # --- Standalone commands ---
    from catalyst.commands.list_cmd import list_packages
    from catalyst.commands.new import new

    cli.add_command(list_packages)
    cli.add_command(new)
