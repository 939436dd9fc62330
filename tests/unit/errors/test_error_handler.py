"""Tests for the error handler."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from faultline.errors import (
    ApiErrorResponse,
    AuthenticationError,
    ComponentErrorResult,
    DatabaseError,
    ErrorCategory,
    ErrorContext,
    ErrorHandler,
    ValidationError,
)
from faultline.errors.serialization import serialize_error
from faultline.logging.protocols import SanitizedLogEntry
from faultline.logging.redaction import REDACTED
from faultline.logging.sanitizer import sanitize_text


@pytest.mark.parametrize(
    "error,level",
    [
        (ValidationError("bad"), "info"),
        (AuthenticationError("who"), "warn"),
        (KeyError("x"), "error"),
        ("not an exception", "warn"),
    ],
)
def test_emits_once_at_severity_level(handler, recording_logger, error, level):
    handler.handle(error)
    assert recording_logger.levels == [level]


def test_log_entry_shape(handler, recording_logger):
    context = ErrorContext(request_id="req_1", path="/orders")

    result = handler.handle(DatabaseError("query failed"), context)

    assert result.category is ErrorCategory.DATABASE
    level, message, data = recording_logger.last
    assert level == "error"
    assert message == "database: query failed"
    assert data["event_name"] == "error.database"
    assert data["event_category"] == "error_event"
    assert data["error_category"] == "database"
    assert data["error_severity"] == "high"
    assert data["error_retryable"] is True
    assert data["error_code"] == "DATABASE_ERROR"
    assert data["status_code"] == 503
    assert data["error_details"]["name"] == "DatabaseError"
    assert data["context"] == {"request_id": "req_1", "path": "/orders"}
    assert data["timestamp"].endswith("+00:00")


def test_log_entry_is_sanitized(handler, recording_logger):
    context = ErrorContext(additional_data={"password": "hunter2", "order": 7})

    handler.handle(ValueError("invalid\ninput"), context)

    _, message, data = recording_logger.last
    assert message == "validation: invalid\\ninput"
    assert data["context"]["additional_data"] == {"password": REDACTED, "order": 7}


def test_caller_context_is_not_mutated(handler):
    raw = {"requestId": "req_1", "additionalData": {"a": 1}}
    handler.handle_unhandled_rejection("boom", raw)
    assert raw == {"requestId": "req_1", "additionalData": {"a": 1}}


def test_custom_sanitizer_is_used(recording_logger):
    sanitizer = MagicMock()
    sanitizer.sanitize.return_value = SanitizedLogEntry("clean", {"ok": True})
    handler = ErrorHandler(recording_logger, sanitizer=sanitizer)

    handler.handle(ValueError("invalid"))

    assert recording_logger.last == ("info", "clean", {"ok": True})


def test_logger_failures_propagate():
    logger = MagicMock()
    logger.error.side_effect = OSError("disk full")
    with pytest.raises(OSError):
        ErrorHandler(logger).handle(KeyError("x"))


def test_api_error_for_validation_failure(handler):
    response = handler.handle_api_error(
        ValueError("email is required"), {"requestId": "req_1"}
    )

    assert isinstance(response, ApiErrorResponse)
    assert response.status_code == 400
    assert response.headers == {"Content-Type": "application/json"}
    assert response.body == {
        "error": True,
        "message": "Invalid input provided",
        "requestId": "req_1",
    }


def test_api_error_never_leaks_details(handler):
    response = handler.handle_api_error(RuntimeError("secret dsn=postgres://u:p@db"))
    assert response.status_code == 500
    assert response.body == {"error": True, "message": "An error occurred"}


def test_api_error_includes_code(handler):
    response = handler.handle_api_error(AuthenticationError("expired", code="TOKEN_EXPIRED"))
    assert response.status_code == 401
    assert response.body["code"] == "TOKEN_EXPIRED"


def test_api_error_to_response(handler):
    response = handler.handle_api_error(DatabaseError("database down")).to_response()
    assert response.status_code == 503
    assert response.headers["content-type"] == "application/json"
    assert json.loads(response.body) == {
        "error": True,
        "message": "Service temporarily unavailable",
        "code": "DATABASE_ERROR",
    }


def test_component_error(handler):
    result = handler.handle_component_error(TimeoutError("slow"), {"requestId": "req_7"})
    assert result == ComponentErrorResult(
        user_message="Network error occurred", should_retry=True, error_id="req_7"
    )
    assert handler.handle_component_error(KeyError("x")).error_id == "unknown"


@pytest.mark.parametrize(
    "method,kind",
    [
        ("handle_unhandled_rejection", "unhandled_rejection"),
        ("handle_uncaught_exception", "uncaught_exception"),
    ],
)
def test_process_failures_are_tagged(handler, recording_logger, method, kind):
    result = getattr(handler, method)(RuntimeError("x"), {"requestId": "req_1"})

    assert result.context.additional_data == {"type": kind}
    assert result.context.request_id == "req_1"
    assert recording_logger.last[2]["context"]["additional_data"] == {"type": kind}


def test_caller_additional_data_wins(handler):
    result = handler.handle_uncaught_exception(
        RuntimeError("x"), ErrorContext(additional_data={"type": "custom", "job": "sync"})
    )
    assert result.context.additional_data == {"type": "custom", "job": "sync"}


def test_long_stack_reaches_logger_whole(handler, recording_logger):
    try:
        raise RuntimeError("z" * 1200)
    except RuntimeError as e:
        error = e

    handler.handle(error)

    _, message, data = recording_logger.last
    stack = serialize_error(error)["stack"]
    assert len(stack) > 1000
    assert data["error_details"]["stack"] == sanitize_text(stack)
    assert data["error_details"]["stack"].endswith("z" * 1200 + "\\n")
    assert message == "system: " + "z" * 1200
