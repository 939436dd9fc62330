# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline

"""
Logging interface definitions for faultline.

This module defines the protocols and interfaces for the logging system,
providing a consistent contract for all logging implementations.
"""

from __future__ import annotations

from typing import Any, NamedTuple, Protocol


class SanitizedLogEntry(NamedTuple):
    """A log message and payload that are safe to emit."""

    message: str
    data: Any


class LoggerProtocol(Protocol):
    """
    Minimal logger capability consumed by the error handler.

    Implementations are expected not to raise.
    This protocol is NOT runtime_checkable and should be used
    for static type checking only.
    """

    def info(self, message: str, data: Any = None) -> None:
        """Log an info message."""
        ...

    def warn(self, message: str, data: Any = None) -> None:
        """Log a warning message."""
        ...

    def error(self, message: str, data: Any = None) -> None:
        """Log an error message."""
        ...


class SanitizerProtocol(Protocol):
    """Redaction capability applied to every structured log entry."""

    def sanitize(self, message: str, data: Any = None) -> SanitizedLogEntry:
        """Return a redacted copy of ``message`` and ``data``.

        Must not raise and must leave fields that match no redaction path
        untouched.
        """
        ...
