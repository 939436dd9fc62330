# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Error taxonomy for faultline.

Every failure is placed in exactly one :class:`ErrorCategory`, and every
category carries a fixed :class:`ErrorSeverity`.
"""

from __future__ import annotations

from enum import Enum

from faultline.logging.level import LogLevel


class ErrorCategory(str, Enum):
    """Closed set of failure categories."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    NETWORK = "network"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    RATE_LIMIT = "rate_limit"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorSeverity(str, Enum):
    """Ordinal importance of a failure, from least to most important."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    def to_log_level(self) -> LogLevel:
        """Return the level at which failures of this severity are logged."""
        if self in (ErrorSeverity.CRITICAL, ErrorSeverity.HIGH):
            return LogLevel.ERROR
        if self is ErrorSeverity.MEDIUM:
            return LogLevel.WARN
        return LogLevel.INFO
