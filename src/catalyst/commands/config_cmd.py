"""Command group: layered configuration (named config_cmd to avoid shadowing catalyst.config)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from catalyst.commands._base import CatalystGroup
from catalyst.config.store import LayerKind
from catalyst.services.config import ConfigService

if TYPE_CHECKING:
    from catalyst.commands._context import AppContext

_CONFIG_EXAMPLES = """\
  catalyst config get author
  catalyst config set organizationName "Acme Corp"
  catalyst config set --global author "Jane Appleseed"
  catalyst config set dependencyExclusions "PackageA, PackageB"
  catalyst config list --local
  catalyst config init --global"""


def _layer(use_global: bool) -> LayerKind:
    return LayerKind.USER if use_global else LayerKind.PROJECT


def _service(app: AppContext, *, load: bool = True) -> ConfigService:
    """Reads and writes share the loaded store; reset and init need only file locations."""
    return ConfigService(app.settings.config_sources(), app.store if load else None)


@click.group("config", cls=CatalystGroup, examples=_CONFIG_EXAMPLES)
def config_cmd() -> None:
    """Manage catalyst configuration settings."""


@config_cmd.command(
    examples="""\
  catalyst config get swiftVersion
  catalyst config get paths.featureModules
  catalyst -q config get author"""
)
@click.argument("key")
@click.pass_obj
def get(app: AppContext, key: str) -> None:
    """Print the merged value of a dotted KEY."""
    app.emit(_service(app).get(key))


@config_cmd.command(
    name="set",
    examples="""\
  catalyst config set swiftVersion 6.0
  catalyst config set skipDependencyResolver true
  catalyst config set --global defaultPlatforms '.iOS(.v16), .macOS(.v13)'""",
)
@click.argument("key")
@click.argument("value")
@click.option("--global", "use_global", is_flag=True, help="Write the user-wide file.")
@click.pass_obj
def set_value(app: AppContext, key: str, value: str, use_global: bool) -> None:
    """Set KEY to VALUE in the project (or user) configuration file."""
    app.emit(_service(app).set(key, value, _layer(use_global)))


@config_cmd.command(
    name="list",
    examples="""\
  catalyst config list
  catalyst config list --global
  catalyst --json config list""",
)
@click.option("--global", "use_global", is_flag=True, help="Show the user-wide file only.")
@click.option("--local", "use_local", is_flag=True, help="Show the project file only.")
@click.pass_obj
def list_values(app: AppContext, use_global: bool, use_local: bool) -> None:
    """List configuration values (merged unless a layer is chosen)."""
    if use_global and use_local:
        raise click.UsageError("--global and --local are mutually exclusive.")
    layer = LayerKind.USER if use_global else LayerKind.PROJECT if use_local else None
    app.emit(_service(app).list_settings(layer))


@config_cmd.command(
    examples="""\
  catalyst config reset
  catalyst config reset --global --force"""
)
@click.option("--global", "use_global", is_flag=True, help="Reset the user-wide file.")
@click.option("-f", "--force", is_flag=True, help="Reset without confirmation.")
@click.pass_obj
def reset(app: AppContext, use_global: bool, force: bool) -> None:
    """Delete a configuration file so built-in defaults apply again."""
    layer = _layer(use_global)
    if not force and app.interactive:
        click.confirm(f"Reset {layer.value} configuration?", abort=True)
    app.emit(_service(app, load=False).reset(layer))


@config_cmd.command(
    examples="""\
  catalyst config init
  catalyst config init --global --force"""
)
@click.option("--global", "use_global", is_flag=True, help="Initialise the user-wide file.")
@click.option("-f", "--force", is_flag=True, help="Overwrite an existing file.")
@click.pass_obj
def init(app: AppContext, use_global: bool, force: bool) -> None:
    """Write a configuration file populated with the built-in defaults."""
    app.emit(_service(app, load=False).init(_layer(use_global), force=force))
