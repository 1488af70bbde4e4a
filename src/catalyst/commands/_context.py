"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy configuration loading and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import click

from catalyst.config.logging import configure_logging
from catalyst.domain.errors import CatalystError
from catalyst.output.formatters import OutputSettings, format_result
from catalyst.services.result import ServiceResult

if TYPE_CHECKING:
    from catalyst.config.settings import CatalystSettings
    from catalyst.config.store import ConfigurationStore


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The configuration store
    is loaded on first use so ``--help`` and ``--version`` never touch the
    filesystem.
    """

    def __init__(self, settings: CatalystSettings) -> None:
        self.settings = settings
        self._store: ConfigurationStore | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def store(self) -> ConfigurationStore:
        """The layered configuration (loaded lazily on first access).

        A ``verbose: true`` setting in the configuration raises the log
        level the same way the ``-v`` flag does. A configuration file that
        cannot be parsed is reported as a failed ``load_config`` result.
        """
        if self._store is None:
            try:
                self._store = self.settings.load_store()
            except CatalystError as exc:
                self.fail("load_config", exc)
            if not self.settings.verbose and self._store.merged.get("verbose") is True:
                configure_logging(verbose=True, log_json=self.settings.log_json)
        return self._store

    @property
    def interactive(self) -> bool:
        return not self.settings.no_interact and not self.settings.json_output

    def resolve_path(self, path: str | Path) -> Path:
        """Anchor a command-line path at the project directory."""
        candidate = Path(path).expanduser()
        if candidate.is_absolute():
            return candidate
        return self.settings.project_dir / candidate

    def _color(self) -> bool:
        if self._store is None:
            return True
        return self._store.merged.get("colorOutput") is not False

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            color=self._color(),
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def fail(self, op: str, exc: CatalystError) -> NoReturn:
        """Emit *exc* as a failed result for *op* and exit."""
        self.emit(ServiceResult.failure(op, exc))
        raise SystemExit(1)
