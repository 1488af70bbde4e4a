"""Command group: inspect module templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from catalyst.commands._base import CatalystGroup
from catalyst.infrastructure.templates import TemplateRenderer
from catalyst.services.templates import TemplateService, template_search_paths

if TYPE_CHECKING:
    from catalyst.commands._context import AppContext

_TEMPLATE_EXAMPLES = """\
  catalyst template list
  catalyst template show FeatureModule
  catalyst template show CoreModule --content"""


def _service(app: AppContext) -> TemplateService:
    paths = template_search_paths(app.store.merged, app.settings.project_dir)
    return TemplateService(TemplateRenderer(paths))


@click.group(cls=CatalystGroup, examples=_TEMPLATE_EXAMPLES)
def template() -> None:
    """List template groups and show what they generate."""


@template.command(
    name="list",
    examples="""\
  catalyst template list
  catalyst -q template list
  catalyst --json template list""",
)
@click.pass_obj
def list_templates(app: AppContext) -> None:
    """List packaged and project template groups."""
    app.emit(_service(app).list_templates())


@template.command(
    examples="""\
  catalyst template show MicroApp
  catalyst -v template show SharedModule
  catalyst template show CoreModule --content"""
)
@click.argument("name")
@click.option("--content", is_flag=True, help="Print each template file's raw source.")
@click.pass_obj
def show(app: AppContext, name: str, content: bool) -> None:
    """Show the files and variables of template group NAME."""
    app.emit(_service(app).show_template(name, content=content))
