"""Command group: Xcode workspace membership."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from catalyst.commands._base import CatalystGroup
from catalyst.domain.errors import WorkspaceIOError
from catalyst.services.workspace import WorkspaceService

if TYPE_CHECKING:
    from catalyst.commands._context import AppContext

_WORKSPACE_EXAMPLES = """\
  catalyst workspace create MyApp
  catalyst workspace add Modules/Feature
  catalyst workspace list --sorted
  catalyst workspace remove Modules/Feature -w MyApp.xcworkspace
  catalyst workspace validate"""

_workspace_option = click.option(
    "-w",
    "--workspace",
    "workspace_path",
    default=None,
    help="Workspace container (default: first *.xcworkspace in the project directory).",
)


def _locate(app: AppContext, service: WorkspaceService, op: str, given: str | None) -> Path:
    """Resolve the target workspace or emit a failure naming the project directory."""
    explicit = app.resolve_path(given) if given else None
    found = service.locate(explicit, app.settings.project_dir)
    if found is None:
        app.fail(op, WorkspaceIOError(app.settings.project_dir, "no .xcworkspace found; pass -w"))
    return found


@click.group(cls=CatalystGroup, examples=_WORKSPACE_EXAMPLES)
def workspace() -> None:
    """Create workspaces and manage their member packages."""


@workspace.command(
    examples="""\
  catalyst workspace create MyApp
  catalyst workspace create MyApp --at ./App"""
)
@click.argument("name")
@click.option("--at", "at", default=".", help="Directory to create the workspace in.")
@click.pass_obj
def create(app: AppContext, name: str, at: str) -> None:
    """Create an empty NAME.xcworkspace."""
    app.emit(WorkspaceService().create(app.resolve_path(at), name))


@workspace.command(
    examples="""\
  catalyst workspace add Modules/Feature
  catalyst workspace add ../Shared/Networking -w App.xcworkspace"""
)
@click.argument("package_path")
@_workspace_option
@click.pass_obj
def add(app: AppContext, package_path: str, workspace_path: str | None) -> None:
    """Add the package at PACKAGE_PATH to the workspace (no-op if present)."""
    service = WorkspaceService()
    target = _locate(app, service, "add_package", workspace_path)
    app.emit(service.add(app.resolve_path(package_path), target))


@workspace.command(
    examples="""\
  catalyst workspace remove Modules/Feature
  catalyst workspace remove Modules/Feature -w App.xcworkspace"""
)
@click.argument("package_path")
@_workspace_option
@click.pass_obj
def remove(app: AppContext, package_path: str, workspace_path: str | None) -> None:
    """Remove the package at PACKAGE_PATH from the workspace (no-op if absent)."""
    service = WorkspaceService()
    target = _locate(app, service, "remove_package", workspace_path)
    app.emit(service.remove(app.resolve_path(package_path), target))


@workspace.command(
    name="list",
    examples="""\
  catalyst workspace list
  catalyst workspace list --sorted
  catalyst -q workspace list""",
)
@_workspace_option
@click.option("--sorted", "sort_by_name", is_flag=True, help="Sort members by name.")
@click.pass_obj
def list_members(app: AppContext, workspace_path: str | None, sort_by_name: bool) -> None:
    """List member packages in persisted order."""
    service = WorkspaceService()
    target = _locate(app, service, "list_packages", workspace_path)
    app.emit(service.list_packages(target, sort_by_name=sort_by_name))


@workspace.command(
    examples="""\
  catalyst workspace validate
  catalyst --json workspace validate -w App.xcworkspace"""
)
@_workspace_option
@click.pass_obj
def validate(app: AppContext, workspace_path: str | None) -> None:
    """Check that the workspace container is well formed."""
    service = WorkspaceService()
    target = _locate(app, service, "validate_workspace", workspace_path)
    app.emit(service.validate(target))
