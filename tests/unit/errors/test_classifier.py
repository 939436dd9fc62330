"""Tests for failure classification."""

from __future__ import annotations

import pytest

from faultline.errors import (
    CATEGORY_OUTCOMES,
    CLASSIFICATION_RULES,
    DatabaseError,
    ErrorCategory,
    ErrorClassifier,
    ErrorContext,
    ErrorSeverity,
    NotFoundError,
    RateLimitError,
    classify_error,
)


class NamedFailure:
    """Failure-like object that is not an exception."""

    def __init__(self, name, message, code=None):
        self.name = name
        self.message = message
        if code is not None:
            self.code = code


class ZodError(Exception):
    pass


class QueryError(Exception):
    pass


@pytest.mark.parametrize(
    "error,category",
    [
        (ValueError("email is required"), ErrorCategory.VALIDATION),
        (ZodError("bad shape"), ErrorCategory.VALIDATION),
        (PermissionError("Unauthorized request"), ErrorCategory.AUTHENTICATION),
        (Exception("Forbidden: admin only"), ErrorCategory.AUTHORIZATION),
        (NotFoundError("gone"), ErrorCategory.NOT_FOUND),
        (LookupError("user does not exist"), ErrorCategory.NOT_FOUND),
        (TimeoutError("slow upstream"), ErrorCategory.NETWORK),
        (QueryError("syntax"), ErrorCategory.DATABASE),
        (Exception("Database is read-only"), ErrorCategory.DATABASE),
        (RateLimitError("slow down"), ErrorCategory.RATE_LIMIT),
        (Exception("Too Many Requests"), ErrorCategory.RATE_LIMIT),
        (KeyError("something else"), ErrorCategory.SYSTEM),
    ],
)
def test_categories(error, category):
    assert ErrorClassifier.classify(error).category is category


def test_network_precedes_database():
    result = classify_error(DatabaseError("connection refused"))
    assert result.category is ErrorCategory.NETWORK
    assert result.is_retryable


def test_earlier_rule_wins():
    # "invalid credentials" is also a validation keyword
    result = classify_error(Exception("Invalid credentials"))
    assert result.category is ErrorCategory.VALIDATION


@pytest.mark.parametrize("value", [None, 42, 3.5, "boom", {"a": 1}, object(), [1, 2]])
def test_non_failures_are_unknown(value):
    result = ErrorClassifier.classify(value)
    assert result.category is ErrorCategory.UNKNOWN
    assert result.severity is ErrorSeverity.MEDIUM
    assert result.status_code == 500
    assert not result.is_retryable
    assert result.user_message == "An unexpected error occurred"
    assert result.original_error is value


def test_unknown_message_is_string_form():
    assert classify_error("boom").message == "boom"
    assert classify_error(None).message == "None"


def test_duck_typed_failures():
    result = classify_error(NamedFailure("RateLimitError", "quota", code="E429"))
    assert result.category is ErrorCategory.RATE_LIMIT
    assert result.message == "quota"
    assert result.error_code == "E429"


def test_partial_duck_type_is_unknown():
    assert classify_error(NamedFailure("NetworkError", 7)).category is ErrorCategory.UNKNOWN


def test_error_code_comes_from_code_attribute():
    assert classify_error(NotFoundError("gone", code="USER_404")).error_code == "USER_404"
    assert classify_error(NotFoundError("gone")).error_code == "NOT_FOUND"
    assert classify_error(ValueError("invalid")).error_code is None


def test_hostile_failure_does_not_raise():
    class Hostile(Exception):
        def __str__(self):
            raise RuntimeError("no str")

    result = classify_error(Hostile())
    assert result.category is ErrorCategory.SYSTEM
    assert result.message


def test_classification_is_deterministic():
    error = DatabaseError("query failed")
    context = ErrorContext(request_id="req_1")
    assert classify_error(error, context) == classify_error(error, context)


def test_context_is_attached():
    result = classify_error(ValueError("invalid"), {"requestId": "req_1", "path": "/x"})
    assert result.context == ErrorContext(request_id="req_1", path="/x")
    assert result.request_id == "req_1"


def test_outcome_table_is_total():
    assert set(CATEGORY_OUTCOMES) == set(ErrorCategory)
    assert CATEGORY_OUTCOMES[ErrorCategory.EXTERNAL_API].status_code == 502


def test_no_rule_yields_external_api():
    assert ErrorCategory.EXTERNAL_API not in {rule.category for rule in CLASSIFICATION_RULES}


def test_outcome_follows_category():
    for error in [ValueError("invalid"), KeyError("x"), TimeoutError("t")]:
        result = classify_error(error)
        outcome = CATEGORY_OUTCOMES[result.category]
        assert (result.severity, result.is_retryable, result.status_code, result.user_message) == (
            outcome.severity,
            outcome.is_retryable,
            outcome.status_code,
            outcome.user_message,
        )


@pytest.mark.parametrize(
    "severity,level",
    [
        (ErrorSeverity.CRITICAL, "error"),
        (ErrorSeverity.HIGH, "error"),
        (ErrorSeverity.MEDIUM, "warn"),
        (ErrorSeverity.LOW, "info"),
    ],
)
def test_severity_to_log_level(severity, level):
    assert severity.to_log_level().value == level
