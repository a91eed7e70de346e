"""Tests for sensitive data filtering in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

from portfolio_api.core.logging import (
    JsonFormatter,
    SensitiveDataFilter,
    clear_request_id,
    hash_identifier,
    set_request_id,
)


def _capture_logger(name: str) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger, stream


def test_sensitive_filter_redacts_api_keys():
    logger, stream = _capture_logger("test_redaction")

    logger.info(
        "test_event",
        extra={
            "api_key": "sk-secret-123",
            "x-goog-api-key": "another-secret",
            "safe_field": "visible",
        },
    )

    output = stream.getvalue()

    assert "sk-secret-123" not in output
    assert "another-secret" not in output
    assert "[REDACTED]" in output
    assert "visible" in output


def test_sensitive_filter_redacts_contact_fields():
    """Visitor-supplied contact data never reaches the log line."""
    logger, stream = _capture_logger("test_contact_redaction")

    logger.info(
        "contact_event",
        extra={
            "email": "visitor@example.com",
            "reply_to": "visitor@example.com",
            "html": "<p>Hello from Jane Doe</p>",
            "message_chars": 27,
        },
    )

    output = stream.getvalue()

    assert "visitor@example.com" not in output
    assert "Jane Doe" not in output
    assert "message_chars" in output


def test_sensitive_filter_redacts_nested_transcripts():
    logger, stream = _capture_logger("test_nested")

    logger.info(
        "nested_event",
        extra={
            "payload": {
                "contents": [{"role": "user", "parts": [{"text": "my phone is 555"}]}],
                "generationConfig": {"temperature": 0.7},
            },
        },
    )

    output = stream.getvalue()

    assert "555" not in output
    assert "temperature" in output


def test_safe_fields_pass_through():
    logger, stream = _capture_logger("test_safe_fields")

    logger.info(
        "safe_event",
        extra={
            "path": "/api/chat",
            "status_code": 200,
            "duration_ms": 150.5,
        },
    )

    record = json.loads(stream.getvalue())

    assert record["event"] == "safe_event"
    assert record["path"] == "/api/chat"
    assert record["status_code"] == 200
    assert "[REDACTED]" not in stream.getvalue()


def test_request_id_from_context_is_included():
    logger, stream = _capture_logger("test_request_id")

    set_request_id("req-abc")
    try:
        logger.info("correlated_event")
    finally:
        clear_request_id()

    assert json.loads(stream.getvalue())["request_id"] == "req-abc"


def test_hash_identifier_is_stable_and_short():
    assert hash_identifier("203.0.113.7") == hash_identifier("203.0.113.7")
    assert hash_identifier("203.0.113.7") != hash_identifier("203.0.113.8")
    assert len(hash_identifier("anything")) == 16
