"""Command: scaffold a new module package."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from catalyst.commands._base import CatalystCommand
from catalyst.domain.dependencies import LocalDependency, RemoteDependency
from catalyst.domain.errors import CatalystError
from catalyst.domain.types import ModuleKind
from catalyst.services.module import ModuleService
from catalyst.services.selection import (
    DependencyOption,
    describe_package,
    group_selections,
    parse_indexes,
    pick,
)

if TYPE_CHECKING:
    from catalyst.commands._context import AppContext

_NEW_EXAMPLES = """\
  catalyst new core Networking
  catalyst new feature Profile --author "Jane Appleseed" --platform ".iOS(.v16)"
  catalyst new shared DesignSystem --path Modules/Shared --no-workspace
  catalyst new feature Checkout --local Modules/Core/Payments:PaymentsInterface
  catalyst new core Analytics --dependency Rainbow=https://github.com/onevcat/Rainbow#4.0.0
  catalyst new microapp ProfileApp --dry-run"""


def _parse_remote(raw: str) -> RemoteDependency:
    """``NAME=URL[#VERSION]`` → RemoteDependency."""
    name, sep, rest = raw.partition("=")
    if not sep or not name.strip() or not rest.strip():
        raise click.BadParameter(
            f"expected NAME=URL[#VERSION], got {raw!r}", param_hint="--dependency"
        )
    url, _, version = rest.partition("#")
    return RemoteDependency(name=name.strip(), url=url.strip(), version=version.strip())


def _parse_local(app: AppContext, raw: str) -> LocalDependency:
    """``PATH[:Product,Product]`` → LocalDependency exposing the named (or all) products."""
    raw_path, _, raw_products = raw.partition(":")
    package = describe_package(app.resolve_path(raw_path))
    products = [p.strip() for p in raw_products.split(",") if p.strip()]
    return LocalDependency(
        package_name=package.name,
        path=package.path,
        exposed_products=tuple(products or package.products),
        available_products=package.products,
    )


def _parse_variable(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key.strip():
        raise click.BadParameter(f"expected KEY=VALUE, got {raw!r}", param_hint="--var")
    return key.strip(), value


def _prompt_selection(options: list[DependencyOption]) -> list[LocalDependency]:
    """Show numbered options and group the chosen products."""
    click.echo("\nAvailable dependencies:")
    interface_count = sum(1 for option in options if option.is_interface)
    for index, option in enumerate(options, start=1):
        if index == interface_count + 1 and interface_count < len(options):
            click.secho(
                "\nSelecting non-Interface packages can introduce performance impact.\n",
                fg="yellow",
                err=True,
            )
        click.echo(f"{index:2d}. {option.package_name} / {option.product_name}")
        click.echo(f"    Path: {option.display_path}")

    answer = click.prompt(
        "\nSelect dependencies to add (comma-separated numbers, press Enter to skip)",
        default="",
        show_default=False,
    )
    if not answer.strip():
        return []
    chosen = pick(options, parse_indexes(answer))
    if not chosen:
        click.secho("No valid selections detected.", fg="yellow", err=True)
    return group_selections(chosen)


@click.command("new", cls=CatalystCommand, examples=_NEW_EXAMPLES)
@click.argument(
    "kind",
    type=click.Choice([kind.value for kind in ModuleKind], case_sensitive=False),
)
@click.argument("name")
@click.option("--path", "target", default=None, help="Parent directory (default: paths.<kind>).")
@click.option("--author", default=None, help="Author name.")
@click.option("--organization", default=None, help="Organization name.")
@click.option("--bundle-id", "bundle_identifier", default=None, help="Bundle identifier.")
@click.option("--platform", "platforms", multiple=True, help='Platform entry, e.g. ".iOS(.v16)".')
@click.option("--dependency", "dependencies", multiple=True, help="Remote NAME=URL[#VERSION].")
@click.option("--local", "locals_", multiple=True, help="Local PATH[:Product,...] dependency.")
@click.option("--var", "variables", multiple=True, help="Custom template variable KEY=VALUE.")
@click.option("-w", "--workspace", "workspace_path", default=None, help="Workspace to register in.")
@click.option("--no-workspace", is_flag=True, help="Do not register in a workspace.")
@click.option("--no-select", is_flag=True, help="Skip interactive local dependency selection.")
@click.option("-f", "--force", is_flag=True, help="Overwrite an existing module directory.")
@click.option("--dry-run", is_flag=True, help="Show the files that would be generated.")
@click.pass_obj
def new(
    app: AppContext,
    kind: str,
    name: str,
    target: str | None,
    author: str | None,
    organization: str | None,
    bundle_identifier: str | None,
    platforms: tuple[str, ...],
    dependencies: tuple[str, ...],
    locals_: tuple[str, ...],
    variables: tuple[str, ...],
    workspace_path: str | None,
    no_workspace: bool,
    no_select: bool,
    force: bool,
    dry_run: bool,
) -> None:
    """Generate a KIND module called NAME from templates."""
    module_kind = ModuleKind(kind.lower())
    service = ModuleService(app.store.merged, app.settings.project_dir)
    op = "create_module"

    try:
        local_dependencies = [_parse_local(app, raw) for raw in locals_]
        if not local_dependencies and not no_select and app.interactive:
            options = service.dependency_options()
            if options:
                local_dependencies = _prompt_selection(options)
        module = service.plan(
            name,
            module_kind,
            path=app.resolve_path(target) if target else None,
            author=author,
            organization_name=organization,
            bundle_identifier=bundle_identifier,
            platforms=platforms,
            dependencies=[_parse_remote(raw) for raw in dependencies],
            local_dependencies=local_dependencies,
            custom_variables=dict(_parse_variable(raw) for raw in variables),
        )
    except CatalystError as exc:
        app.fail(op, exc)

    app.emit(
        service.create_module(
            module,
            workspace=app.resolve_path(workspace_path) if workspace_path else None,
            register=not no_workspace,
            force=force,
            dry_run=dry_run,
        )
    )
