"""Rich Console factory and theme for catalyst output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CATALYST_THEME = Theme(
    {
        "cat.ok": "bold green",
        "cat.error": "bold red",
        "cat.warning": "bold yellow",
        "cat.op": "bold cyan",
        "cat.key": "dim",
        "cat.name": "bold blue",
        "cat.path": "dim",
        "cat.value": "bold",
        "cat.source": "magenta",
        "cat.kind.swift_package": "green",
        "cat.kind.xcode_project": "blue",
        "cat.kind.folder": "yellow",
    }
)

_KIND_STYLES: dict[str, str] = {
    "swift_package": "cat.kind.swift_package",
    "xcode_project": "cat.kind.xcode_project",
    "folder": "cat.kind.folder",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (``colorOutput: false``).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=CATALYST_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(package_kind: str) -> str:
    """Return the Rich style name for a workspace member kind."""
    return _KIND_STYLES.get(package_kind, "")
