"""structlog setup for catalyst.

Everything logs to stderr so stdout carries only command results. Records
from the stdlib ``logging`` loggers used throughout catalyst go through the
same structlog processors as structlog's own loggers.

- Human (default): short timestamps, colored when stderr is a terminal
- JSON (``--log-json``): one object per line with ISO timestamps
"""

from __future__ import annotations

import logging
import sys

import structlog

# Libraries whose internal chatter is never useful at the command line.
QUIET_LOGGERS = ("ruamel.yaml", "jinja2")


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route all logging to one stderr handler.

    ``verbose`` lowers the ``catalyst`` logger to DEBUG. Third-party
    loggers stay at WARNING, and those in :data:`QUIET_LOGGERS` at ERROR.
    Safe to call repeatedly; the root handler is replaced each time.
    """
    timestamper = structlog.processors.TimeStamper(fmt="iso" if log_json else "%H:%M:%S")
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        timestamper,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("catalyst").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)
