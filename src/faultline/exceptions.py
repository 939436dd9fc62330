# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Base exception for faultline.

Every exception defined by the package derives from :class:`FaultlineError`,
which carries an optional machine-readable code and a context mapping.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


class FaultlineError(Exception):
    """Base error class for faultline errors."""

    default_code: str | None = None

    def __init__(
        self,
        message: str = "",
        code: str | None = None,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize a new error.

        Args:
            message: Human-readable error message
            code: Optional machine-readable error code
            context: Additional contextual information
            **kwargs: Extra context keys
        """
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.context = {**(context or {}), **kwargs}
        self.timestamp = datetime.now(UTC)

    def with_context(self, **context: Any) -> FaultlineError:
        """Return a copy of this error with additional context."""
        new_error = self.__class__(
            self.message, code=self.code, context={**self.context, **context}
        )
        if self.__cause__ is not None:
            new_error.__cause__ = self.__cause__
        return new_error

    def to_dict(self) -> dict[str, Any]:
        """Return a dictionary representation of the error."""
        return {
            "name": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }
