# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""The classified form of a failure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from faultline.errors.categories import ErrorCategory, ErrorSeverity
from faultline.errors.context import ErrorContext


@dataclass(frozen=True)
class StructuredError:
    """
    A failure together with its category and the outcome derived from it.

    ``severity``, ``is_retryable``, ``user_message`` and ``status_code`` are
    fixed per category. ``original_error`` is the value that was classified,
    kept as-is.
    """

    category: ErrorCategory
    message: str
    original_error: Any
    context: ErrorContext
    severity: ErrorSeverity
    is_retryable: bool
    user_message: str
    status_code: int
    error_code: str | None = None

    @property
    def request_id(self) -> str | None:
        return self.context.request_id

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly summary without the original error."""
        return {
            "category": self.category.value,
            "message": self.message,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
            "user_message": self.user_message,
            "error_code": self.error_code,
            "status_code": self.status_code,
            "context": self.context.to_log_dict(),
        }
