"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich output, colors, tables) or
machines (--json). The formatter layer adapts ServiceResult to the
requested output mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from catalyst.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from catalyst.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """How a result should be presented."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    color: bool = True


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet, quiet over the rich human rendering.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose, color=settings.color)
