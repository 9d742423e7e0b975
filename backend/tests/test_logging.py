"""Tests for structlog configuration and request trace ids."""

import json
import logging

import pytest
import structlog

from app.core.config import Settings
from app.core.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    structlog.contextvars.clear_contextvars()


def _json_lines(text):
    return [json.loads(line) for line in text.splitlines() if line.strip()]


def test_stdlib_logger_gets_structured_fields(capsys):
    configure_logging(Settings(json_logs=True))
    structlog.contextvars.bind_contextvars(trace_id="abc")

    logging.getLogger("app.test").info("Product created: id=%s", 7)

    (payload,) = _json_lines(capsys.readouterr().out)
    assert payload["event"] == "Product created: id=7"
    assert payload["level"] == "info"
    assert payload["logger"] == "app.test"
    assert payload["trace_id"] == "abc"
    assert "timestamp" in payload


def test_structlog_logger_keeps_key_values(capsys):
    configure_logging(Settings(json_logs=True))

    structlog.get_logger("app.test").warning("slow query", duration_ms=812.5)

    (payload,) = _json_lines(capsys.readouterr().out)
    assert payload["event"] == "slow query"
    assert payload["duration_ms"] == 812.5
    assert payload["level"] == "warning"


def test_level_threshold_applies(capsys):
    configure_logging(Settings(json_logs=True, log_level="warning"))

    logging.getLogger("app.test").info("dropped")

    assert capsys.readouterr().out == ""


def test_console_mode_output(capsys):
    configure_logging(Settings(json_logs=False))

    logging.getLogger("app.test").info("hello world")

    assert "hello world" in capsys.readouterr().out


def test_idempotent_calls():
    configure_logging(Settings(json_logs=False))
    configure_logging(Settings(json_logs=True))

    assert len(logging.getLogger().handlers) == 1


def test_sqlalchemy_echo_controls_engine_logger():
    configure_logging(Settings(database_echo=True))
    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

    configure_logging(Settings(database_echo=False))
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_request_log_carries_trace_id(client, capsys):
    configure_logging(Settings(json_logs=True))

    response = client.get("/products", headers={"X-Trace-Id": "trace-42"})

    assert response.status_code == 200
    records = [
        p for p in _json_lines(capsys.readouterr().out) if p["event"] == "request.complete"
    ]
    assert len(records) == 1
    assert records[0]["trace_id"] == "trace-42"
    assert records[0]["method"] == "GET"
    assert records[0]["path"] == "/products"
    assert records[0]["status_code"] == 200
