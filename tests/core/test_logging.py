# tests/core/test_logging.py
"""Tests for structured logging helpers."""

import structlog

from regexpomatic.core.logging import get_logger


class TestGetLogger:
    """Tests for get_logger."""

    def test_get_logger_returns_logger(self) -> None:
        """get_logger returns a bound logger."""
        logger = get_logger("test")

        assert hasattr(logger, "info")
        assert hasattr(logger, "warning")
        assert hasattr(logger, "bind")

    def test_events_carry_keyword_fields(self) -> None:
        logger = get_logger("test")

        with structlog.testing.capture_logs() as logs:
            logger.warning("skipping record", namespace=["intel", "logs"], data=123)

        assert logs == [{"event": "skipping record", "namespace": ["intel", "logs"], "data": 123, "log_level": "warning"}]

    def test_bound_fields_are_included(self) -> None:
        with structlog.testing.capture_logs() as logs:
            get_logger("test").bind(gate="^feature").debug("gate matched")

        assert logs[0]["gate"] == "^feature"
        assert logs[0]["log_level"] == "debug"
