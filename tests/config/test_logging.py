"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from copyrec.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    copyrec_logger = logging.getLogger("copyrec")
    copyrec_level = copyrec_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    copyrec_logger.setLevel(copyrec_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("copyrec").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("copyrec").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("copyrec.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "copyrec.test"
        assert "timestamp" in parsed

    def test_codec_debug_logs_are_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        from copyrec.domain.encoder import format_value
        from copyrec.domain.schema import FieldDescriptor
        from copyrec.domain.types import FieldType

        configure_logging(verbose=True, log_json=True)
        format_value("ABCDEFG", FieldDescriptor("code", FieldType.ALPHANUMERIC, 3))

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip().splitlines()[-1])
        assert parsed["event"] == "Truncating code from 7 to 3 characters"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "copyrec.domain.encoder"

    def test_quiet_mode_hides_debug(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("copyrec.domain.encoder").debug("noise")
        captured = capfd.readouterr()
        assert captured.err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1
