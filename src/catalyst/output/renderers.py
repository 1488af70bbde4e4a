"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from catalyst.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from catalyst.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False, color: bool = True) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console(no_color=not color)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    if result.op == "config_get":
        return _display(result.data.get("value"))

    # For list results, return one path per line
    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(
            str(item.get("path", item.get("name", ""))) for item in items if isinstance(item, dict)
        )

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _display(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ", ".join(_display(v) for v in value)
    if isinstance(value, dict):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    console.print(Text.assemble(("OK", "cat.ok"), "  ", (result.op, "cat.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = (f"  {key}: ", "cat.key")
    if key in ("path", "workspace"):
        v = (str(value), "cat.path")
    elif key == "name":
        v = (str(value), "cat.name")
    elif key == "source":
        v = (str(value), "cat.source")
    else:
        v = (_display(value), "")
    console.print(Text.assemble(k, v))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text.assemble(("ERROR", "cat.error"), "  ", (result.op, "cat.op"), ": ", msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {_display(v)}")


# ── Config renderers ──────────────────────────────────────────────────


def _render_config_value(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render config get/set: the value, plus where it lives in verbose mode."""
    d = result.data
    label = Text(f"{d.get('key')} =", style="cat.key")
    console.print(label, Text(_display(d.get("value")), style="cat.value"))
    if verbose:
        for key in ("source", "layer", "path"):
            if d.get(key):
                _field(console, key, d[key])


def _render_config_list(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    d = result.data
    settings: dict[str, str] = d.get("settings", {})
    if not settings:
        console.print(f"No {d.get('layer', '')} configuration values set")
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Key", style="cat.key", no_wrap=True)
    table.add_column("Value", style="cat.value")
    for key, value in settings.items():
        table.add_row(key, value)
    console.print(table)
    suffix = f" ({d['path']})" if d.get("path") else ""
    count = d.get("count", len(settings))
    console.print(f"\n{count} values in {d.get('layer')} configuration{suffix}")


def _render_config_file(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render config reset/init results."""
    _status_line(console, result)
    for key in ("layer", "path", "removed"):
        if key in result.data:
            _field(console, key, result.data[key])


# ── Workspace renderers ───────────────────────────────────────────────


def _render_package_change(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render add/remove results, noting when nothing had to change."""
    d = result.data
    _status_line(console, result)
    package = d.get("package")
    if isinstance(package, dict):
        _field(console, "name", package.get("name"))
        _field(console, "path", package.get("path"))
        _field(console, "kind", package.get("kind"))
        if verbose:
            _field(console, "location", package.get("location"))
        if not d.get("added", True):
            console.print(Text("  already a member", style="dim"))
    else:
        _field(console, "path", d.get("path"))
        if not d.get("removed", True):
            console.print(Text("  not a member", style="dim"))
    _field(console, "workspace", d.get("workspace"))


def _render_package_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No packages in workspace")
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cat.name", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Path", style="cat.path")
    if verbose:
        table.add_column("Location", style="dim")
    for index, item in enumerate(items, start=1):
        kind = str(item.get("kind", ""))
        row = [
            str(index),
            str(item.get("name", "")),
            Text(kind, style=style_for_kind(kind)),
            str(item.get("path", "")),
        ]
        if verbose:
            row.append(str(item.get("location", "")))
        table.add_row(*row)
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} packages")


def _render_validation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "workspace", result.data.get("workspace"))
    _field(console, "members", result.data.get("members"))


# ── Module renderers ──────────────────────────────────────────────────


def _render_module(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("name", "kind", "path"):
        _field(console, key, d.get(key))
    if d.get("dry_run"):
        console.print(Text("  dry run: no files written", style="cat.warning"))
    if d.get("registered"):
        _field(console, "workspace", d.get("workspace"))
    files = d.get("files", [])
    if verbose or d.get("dry_run"):
        for relative in files:
            console.print(Text(f"    {relative}", style="cat.path"))
    else:
        _field(console, "files", len(files))


# ── Template renderers ────────────────────────────────────────────────


def _render_template_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No templates found")
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="cat.name", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Files", justify="right")
    table.add_column("Description", style="dim")
    for item in items:
        table.add_row(
            str(item.get("name", "")),
            str(item.get("display_name", "")),
            str(item.get("files", 0)),
            str(item.get("description", "")),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} template groups")


def _render_template_detail(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render one group: its files, where each came from, and the variables used."""
    d = result.data
    console.print(
        Text.assemble((str(d.get("name")), "cat.name"), " ", (f"({d.get('display_name')})", "dim"))
    )
    console.print(Text(f"  {d.get('description', '')}", style="dim"))
    files = d.get("files", [])
    console.print(Text("\n  files:", style="cat.key"))
    for entry in files:
        console.print(Text(f"    {entry.get('output')}", style="cat.path"))
        if verbose:
            console.print(Text(f"      from {entry.get('origin')}", style="dim"))
    console.print(Text.assemble(("\n  variables: ", "cat.key"), ", ".join(d.get("variables", []))))
    for entry in files:
        if "content" in entry:
            console.print(Text(f"\n── {entry.get('template')} ──", style="cat.key"))
            console.print(Text(str(entry["content"]).rstrip("\n")))


# ── Local package renderers ───────────────────────────────────────────


def _render_local_packages(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    d = result.data
    items = d.get("items", [])
    if not items:
        console.print(f"No Swift packages found under {d.get('root')}")
        return
    with_workspace = d.get("workspace") is not None
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cat.name", no_wrap=True)
    table.add_column("Path", style="cat.path")
    table.add_column("Products")
    if with_workspace:
        table.add_column("Workspace")
    for index, item in enumerate(items, start=1):
        products = item.get("products", [])
        row = [
            str(index),
            str(item.get("name", "")),
            str(item.get("path", "")),
            ", ".join(products) if verbose else str(len(products)),
        ]
        if with_workspace:
            row.append("yes" if item.get("in_workspace") else "no")
        table.add_row(*row)
    console.print(table)
    summary = f"\n{d.get('count', len(items))} packages"
    if with_workspace:
        members = sum(1 for item in items if item.get("in_workspace"))
        summary += f", {members} in {d['workspace']}"
    console.print(Text(summary))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Config
    "config_get": _render_config_value,
    "config_set": _render_config_value,
    "config_list": _render_config_list,
    "config_reset": _render_config_file,
    "config_init": _render_config_file,
    # Workspace
    "create_workspace": _render_generic,
    "add_package": _render_package_change,
    "remove_package": _render_package_change,
    "list_packages": _render_package_table,
    "validate_workspace": _render_validation,
    "list_local_packages": _render_local_packages,
    # Templates
    "list_templates": _render_template_table,
    "show_template": _render_template_detail,
    # Modules
    "create_module": _render_module,
}
