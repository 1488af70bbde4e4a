"""Command: list local Swift packages (named list_cmd to avoid shadowing the builtin)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from catalyst.commands._base import CatalystCommand
from catalyst.services.catalog import PackageCatalog
from catalyst.services.workspace import WorkspaceService

if TYPE_CHECKING:
    from catalyst.commands._context import AppContext

_LIST_EXAMPLES = """\
  catalyst list
  catalyst list --path Modules --full-paths
  catalyst -v list
  catalyst list -w App.xcworkspace
  catalyst -q list --no-workspace"""


@click.command("list", cls=CatalystCommand, examples=_LIST_EXAMPLES)
@click.option("--path", "root", default=".", help="Directory to search (default: project).")
@click.option("-w", "--workspace", "workspace_path", default=None, help="Workspace to compare.")
@click.option("--no-workspace", is_flag=True, help="Skip workspace membership.")
@click.option("--full-paths", is_flag=True, help="Show absolute package paths.")
@click.pass_obj
def list_packages(
    app: AppContext,
    root: str,
    workspace_path: str | None,
    no_workspace: bool,
    full_paths: bool,
) -> None:
    """List Swift packages below the project directory and their products."""
    workspace = None
    if not no_workspace:
        explicit = app.resolve_path(workspace_path) if workspace_path else None
        workspace = WorkspaceService().locate(explicit, app.settings.project_dir)
    catalog = PackageCatalog(app.resolve_path(root))
    app.emit(catalog.list_local(workspace, full_paths=full_paths))
