"""Tests for the exprcache.logging module."""

from __future__ import annotations

import json
import logging
import os
from unittest.mock import patch

import pytest
import structlog

from exprcache.logging import configure_logging, get_logger


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_logging_default(self) -> None:
        """Test default logging configuration (console output)."""
        configure_logging()

        assert structlog.is_configured()
        assert len(logging.getLogger().handlers) == 1

    def test_configure_logging_json_via_env(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test JSON logging when EXPRCACHE_LOG_FORMAT=json."""
        with patch.dict(os.environ, {"EXPRCACHE_LOG_FORMAT": "json"}):
            configure_logging(level=logging.INFO)

        structlog.get_logger("test.json").info("json_event", answer=42)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "json_event"
        assert payload["answer"] == 42

    def test_configure_logging_force_json(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(force_json=True, level=logging.INFO)

        structlog.get_logger("test.force").info("forced_event")

        line = capsys.readouterr().err.strip().splitlines()[-1]
        assert json.loads(line)["event"] == "forced_event"

    def test_configure_logging_custom_level(self) -> None:
        configure_logging(level=logging.DEBUG)

        assert logging.getLogger().level == logging.DEBUG

    def test_configure_logging_level_from_env(self) -> None:
        with patch.dict(os.environ, {"EXPRCACHE_LOG_LEVEL": "ERROR"}):
            configure_logging()

        assert logging.getLogger().level == logging.ERROR

    def test_unknown_level_falls_back_to_info(self) -> None:
        with patch.dict(os.environ, {"EXPRCACHE_LOG_LEVEL": "CHATTY"}):
            configure_logging()

        assert logging.getLogger().level == logging.INFO

    def test_reconfiguring_does_not_duplicate_handlers(self) -> None:
        configure_logging()
        configure_logging()

        assert len(logging.getLogger().handlers) == 1


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_with_name(self) -> None:
        log = get_logger("test.module")
        assert log is not None

    def test_logger_can_bind_context(self) -> None:
        configure_logging()

        log = get_logger("test").bind(element="find_user")

        assert log is not None

    def test_evaluator_logs_cache_miss(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The evaluator emits a debug event on a cache miss."""
        from exprcache.expressions.evaluator import CachedExpressionEvaluator

        configure_logging(force_json=True, level=logging.DEBUG)

        CachedExpressionEvaluator().resolve({}, "element", "#p0")

        events = [
            json.loads(line)
            for line in capsys.readouterr().err.strip().splitlines()
            if line.startswith("{")
        ]
        assert any(
            event["event"] == "expression_cache_miss"
            and event["expression"] == "#p0"
            for event in events
        )

    def test_cache_miss_log_accepts_element_without_str(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Debug output renders element identities that cannot be str()-ed."""
        from exprcache.expressions.evaluator import CachedExpressionEvaluator

        class Unprintable:
            def __str__(self) -> str:
                raise RuntimeError("no str")

        configure_logging(force_json=True, level=logging.DEBUG)

        parsed = CachedExpressionEvaluator().resolve({}, Unprintable(), "#p0")

        assert parsed.variables == ("p0",)
        assert "expression_cache_miss" in capsys.readouterr().err
