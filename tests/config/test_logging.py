"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from eagov.config.logging import HANDLER_NAME, NOISY_LOGGERS, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    eagov = logging.getLogger("eagov")
    eagov_level = eagov.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    eagov.setLevel(eagov_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("eagov").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("eagov").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("eagov.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "eagov.test"
        assert "timestamp" in parsed

    def test_stdlib_records_rendered_as_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("eagov.governance.engine").debug("Rule %s: %d findings", "R1", 2)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Rule R1: 2 findings"
        assert parsed["level"] == "debug"

    def test_nothing_on_stdout(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=False)
        logging.getLogger("eagov.x").warning("to stderr")
        assert capfd.readouterr().out == ""

    def test_noisy_libraries_capped(self) -> None:
        configure_logging(verbose=True)
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_reconfigure_replaces_own_handler(self) -> None:
        foreign = logging.NullHandler()
        logging.getLogger().addHandler(foreign)
        configure_logging()
        configure_logging(log_json=True)
        handlers = logging.getLogger().handlers
        assert [h.get_name() for h in handlers].count(HANDLER_NAME) == 1
        assert foreign in handlers

    def test_custom_stream(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        logging.getLogger("eagov.services.governance").info("Role %s denied %s", "Viewer", "x")
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "Role Viewer denied x"
        assert parsed["logger"] == "eagov.services.governance"

    def test_json_exception_is_structured(self) -> None:
        stream = io.StringIO()
        configure_logging(log_json=True, stream=stream)
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logging.getLogger("eagov.x").exception("failed")
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["exception"][0]["exc_type"] == "RuntimeError"
