"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Generator

import pytest
import structlog

from catalyst.config.logging import QUIET_LOGGERS, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    catalyst = logging.getLogger("catalyst")
    quiet_levels = {name: logging.getLogger(name).level for name in QUIET_LOGGERS}
    catalyst_level = catalyst.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    catalyst.setLevel(catalyst_level)
    for name, level in quiet_levels.items():
        logging.getLogger(name).setLevel(level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("catalyst").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("catalyst").level == logging.WARNING

    def test_single_handler(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("catalyst.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "catalyst.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("catalyst.services.workspace").info("Added %s", "Feature")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Added Feature"
        assert parsed["logger"] == "catalyst.services.workspace"
        assert parsed["level"] == "info"

    def test_debug_suppressed_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("catalyst.config.store").debug("quiet please")
        assert capfd.readouterr().err == ""

    @pytest.mark.parametrize("verbose", [True, False])
    def test_library_loggers_quieted(self, verbose: bool) -> None:
        configure_logging(verbose=verbose)
        assert logging.getLogger("jinja2").level == logging.ERROR
        assert logging.getLogger("ruamel.yaml").level == logging.ERROR

    def test_library_warning_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("ruamel.yaml.composer").warning("duplicate anchor")
        assert capfd.readouterr().err == ""

    def test_human_timestamp_is_short(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=False)
        logging.getLogger("catalyst.test").warning("plain")
        line = capfd.readouterr().err.strip()
        assert "plain" in line
        assert re.match(r"\d{2}:\d{2}:\d{2} ", line)
