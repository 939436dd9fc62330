# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Failure classification.

Classification walks :data:`CLASSIFICATION_RULES` in order and stops at the
first rule whose names contain the failure's name or whose substrings occur
in its lower-cased message. The order matters: a message mentioning a
"connection" is a network failure even when raised as ``DatabaseError``.

The outcome (severity, retryability, status code and user message) is a
function of the category alone, see :data:`CATEGORY_OUTCOMES`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final

from faultline.errors.categories import ErrorCategory, ErrorSeverity
from faultline.errors.context import ErrorContext
from faultline.errors.structured import StructuredError
from faultline.utils import safe_getattr, safe_str


@dataclass(frozen=True)
class ClassificationRule:
    """One row of the classification table."""

    category: ErrorCategory
    names: frozenset[str]
    substrings: tuple[str, ...]

    def matches(self, name: str, message: str) -> bool:
        """Whether a failure named ``name`` with a lower-cased ``message`` matches."""
        return name in self.names or any(s in message for s in self.substrings)


@dataclass(frozen=True)
class CategoryOutcome:
    """What a category means for the caller and the end user."""

    severity: ErrorSeverity
    is_retryable: bool
    status_code: int
    user_message: str


CLASSIFICATION_RULES: Final[tuple[ClassificationRule, ...]] = (
    ClassificationRule(
        ErrorCategory.VALIDATION,
        frozenset({"ValidationError", "ZodError"}),
        ("validation", "invalid", "required"),
    ),
    ClassificationRule(
        ErrorCategory.AUTHENTICATION,
        frozenset({"AuthenticationError"}),
        ("unauthorized", "authentication", "invalid credentials"),
    ),
    ClassificationRule(
        ErrorCategory.AUTHORIZATION,
        frozenset({"AuthorizationError"}),
        ("forbidden", "access denied", "permission"),
    ),
    ClassificationRule(
        ErrorCategory.NOT_FOUND,
        frozenset({"NotFoundError"}),
        ("not found", "does not exist"),
    ),
    ClassificationRule(
        ErrorCategory.NETWORK,
        frozenset({"NetworkError", "TimeoutError"}),
        ("network", "timeout", "connection"),
    ),
    ClassificationRule(
        ErrorCategory.DATABASE,
        frozenset({"DatabaseError", "QueryError"}),
        ("database", "connection", "query failed"),
    ),
    ClassificationRule(
        ErrorCategory.RATE_LIMIT,
        frozenset({"RateLimitError"}),
        ("rate limit", "too many requests"),
    ),
)

CATEGORY_OUTCOMES: Final[Mapping[ErrorCategory, CategoryOutcome]] = MappingProxyType(
    {
        ErrorCategory.VALIDATION: CategoryOutcome(
            ErrorSeverity.LOW, False, 400, "Invalid input provided"
        ),
        ErrorCategory.AUTHENTICATION: CategoryOutcome(
            ErrorSeverity.MEDIUM, False, 401, "Authentication required"
        ),
        ErrorCategory.AUTHORIZATION: CategoryOutcome(
            ErrorSeverity.MEDIUM, False, 403, "Access denied"
        ),
        ErrorCategory.NOT_FOUND: CategoryOutcome(
            ErrorSeverity.LOW, False, 404, "Resource not found"
        ),
        ErrorCategory.NETWORK: CategoryOutcome(
            ErrorSeverity.MEDIUM, True, 503, "Network error occurred"
        ),
        ErrorCategory.DATABASE: CategoryOutcome(
            ErrorSeverity.HIGH, True, 503, "Service temporarily unavailable"
        ),
        # declared for completeness, no rule produces it
        ErrorCategory.EXTERNAL_API: CategoryOutcome(
            ErrorSeverity.MEDIUM, True, 502, "External service error"
        ),
        ErrorCategory.RATE_LIMIT: CategoryOutcome(
            ErrorSeverity.MEDIUM, True, 429, "Rate limit exceeded"
        ),
        ErrorCategory.SYSTEM: CategoryOutcome(
            ErrorSeverity.HIGH, False, 500, "An error occurred"
        ),
        ErrorCategory.UNKNOWN: CategoryOutcome(
            ErrorSeverity.MEDIUM, False, 500, "An unexpected error occurred"
        ),
    }
)


def _describe(error: Any) -> tuple[str, str] | None:
    """Return the name and message of a failure, or None if it has neither."""
    if isinstance(error, BaseException):
        return type(error).__name__, safe_str(error)
    name = safe_getattr(error, "name")
    message = safe_getattr(error, "message")
    if isinstance(name, str) and isinstance(message, str):
        return name, message
    return None


def _error_code(error: Any) -> str | None:
    code = safe_getattr(error, "code")
    return code if isinstance(code, str) else None


class ErrorClassifier:
    """Stateless classifier over :data:`CLASSIFICATION_RULES`."""

    rules: tuple[ClassificationRule, ...] = CLASSIFICATION_RULES
    outcomes: Mapping[ErrorCategory, CategoryOutcome] = CATEGORY_OUTCOMES

    @classmethod
    def category_for(cls, name: str, message: str) -> ErrorCategory:
        """Return the category of the first rule matching ``name`` and ``message``."""
        lowered = message.lower()
        for rule in cls.rules:
            if rule.matches(name, lowered):
                return rule.category
        return ErrorCategory.SYSTEM

    @classmethod
    def classify(
        cls, error: Any, context: ErrorContext | Mapping[str, Any] | None = None
    ) -> StructuredError:
        """Classify any value into a :class:`StructuredError`.

        Args:
            error: The failure; exceptions, objects with string ``name`` and
                ``message`` attributes, or any other value
            context: Diagnostic context attached to the result

        Returns:
            A new structured error. Never raises.
        """
        error_context = ErrorContext.coerce(context)
        described = _describe(error)
        if described is None:
            category = ErrorCategory.UNKNOWN
            message = safe_str(error)
        else:
            name, message = described
            category = cls.category_for(name, message)

        outcome = cls.outcomes[category]
        return StructuredError(
            category=category,
            message=message,
            original_error=error,
            context=error_context,
            severity=outcome.severity,
            is_retryable=outcome.is_retryable,
            user_message=outcome.user_message,
            status_code=outcome.status_code,
            error_code=_error_code(error) if described is not None else None,
        )


def classify_error(
    error: Any, context: ErrorContext | Mapping[str, Any] | None = None
) -> StructuredError:
    """Classify ``error`` with the default rule table."""
    return ErrorClassifier.classify(error, context)
