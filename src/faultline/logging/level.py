# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Log levels and severity arithmetic for faultline.

Levels follow the OpenTelemetry SeverityNumber scale: a higher number means a
more important record. The configured level is a floor, so a record is
emitted when its severity is greater than or equal to the configured one.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final


class LogLevel(str, Enum):
    """Symbolic log levels, ordered from least to most severe."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"

    @property
    def severity(self) -> int:
        """Numeric OpenTelemetry severity of this level."""
        return SEVERITY_NUMBERS[self]

    def to_stdlib_level(self) -> int:
        """Convert to standard library logging level.

        Returns:
            Standard library logging level integer
        """
        return _STDLIB_LEVELS[self]

    @classmethod
    def from_string(cls, value: str) -> LogLevel:
        """Convert a string to a LogLevel.

        Args:
            value: String representation of level, any case

        Returns:
            LogLevel enum value

        Raises:
            ValueError: If the string doesn't match a valid level
        """
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError):
            raise ValueError(f"Invalid log level: {value}")

    @classmethod
    def parse(cls, value: object) -> LogLevel | None:
        """Lenient variant of :meth:`from_string` returning None on bad input."""
        if isinstance(value, LogLevel):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls.from_string(value)
        except ValueError:
            return None


SEVERITY_NUMBERS: Final[dict[LogLevel, int]] = {
    LogLevel.TRACE: 1,
    LogLevel.DEBUG: 5,
    LogLevel.INFO: 9,
    LogLevel.WARN: 13,
    LogLevel.ERROR: 17,
    LogLevel.FATAL: 21,
}

# Unknown levels rank at least as high as FATAL so a typo never hides records.
UNKNOWN_LEVEL_SEVERITY: Final = 30

DEFAULT_LOG_LEVEL: Final = LogLevel.INFO

_STDLIB_LEVELS: Final[dict[LogLevel, int]] = {
    LogLevel.TRACE: 5,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.FATAL: logging.CRITICAL,
}


def get_log_level_value(level: LogLevel | str) -> int:
    """Return the numeric severity for ``level``.

    Args:
        level: A LogLevel or its name in any case

    Returns:
        The OpenTelemetry severity number, or ``UNKNOWN_LEVEL_SEVERITY`` for
        anything that is not a known level
    """
    parsed = LogLevel.parse(level)
    if parsed is None:
        return UNKNOWN_LEVEL_SEVERITY
    return SEVERITY_NUMBERS[parsed]


def is_log_level_enabled(current_level: LogLevel | str, target_level: LogLevel | str) -> bool:
    """Whether ``target_level`` records pass a logger configured at ``current_level``."""
    return get_log_level_value(target_level) >= get_log_level_value(current_level)
