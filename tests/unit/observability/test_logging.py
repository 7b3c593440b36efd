"""Tests for observability/logging.py."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from auto_apply_agents.observability.logging import (
    _resolve_level,
    bind_run_context,
    clear_run_context,
    configure_logging,
)
from tests.mocks.mock_settings import make_settings


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Restore root handlers and context after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    clear_run_context()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def _capture(name: str) -> tuple[logging.Logger, io.StringIO]:
    """Attach a stream handler using the configured formatter."""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.getLogger().handlers[0].formatter)
    log = logging.getLogger(name)
    log.addHandler(handler)
    log.propagate = False
    return log, stream


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_installs_single_root_handler(self) -> None:
        """Existing root handlers are replaced by one stream handler."""
        logging.getLogger().addHandler(logging.NullHandler())
        configure_logging(make_settings(log_format="console"))
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_json_mode_renders_json_with_context(self) -> None:
        """Stdlib records render as JSON carrying the bound run id."""
        configure_logging(make_settings(log_format="json"))
        log, stream = _capture("test_json_mode")
        log.setLevel(logging.INFO)

        bind_run_context("run-123", threshold=0.7)
        log.info("matching_complete")

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "matching_complete"
        assert record["run_id"] == "run-123"
        assert record["threshold"] == 0.7
        assert record["level"] == "info"
        assert record["logger"] == "test_json_mode"

    def test_clear_run_context_drops_fields(self) -> None:
        """Cleared context no longer appears in output."""
        configure_logging(make_settings(log_format="json"))
        log, stream = _capture("test_clear_context")
        log.setLevel(logging.INFO)

        bind_run_context("run-456")
        clear_run_context()
        log.info("server_stop")

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert "run_id" not in record

    def test_sets_root_level(self) -> None:
        """Log level is applied to the root logger."""
        configure_logging(make_settings(log_level="WARNING"))
        assert logging.getLogger().level == logging.WARNING

    def test_noisy_loggers_capped_at_warning(self) -> None:
        """HTTP and SDK loggers stay at WARNING even in debug mode."""
        configure_logging(make_settings(log_level="DEBUG"))
        for name in ("httpx", "httpcore", "anthropic", "uvicorn.access"):
            assert logging.getLogger(name).level == logging.WARNING

    def test_noisy_loggers_follow_stricter_root(self) -> None:
        """A stricter root level also applies to the noisy loggers."""
        configure_logging(make_settings(log_level="ERROR"))
        assert logging.getLogger("httpx").level == logging.ERROR


@pytest.mark.unit
class TestResolveLevel:
    """Tests for _resolve_level."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("debug", logging.DEBUG),
            ("unknown", logging.INFO),
        ],
    )
    def test_resolve_level(self, name: str, expected: int) -> None:
        """Level names resolve to logging constants."""
        assert _resolve_level(name) == expected
