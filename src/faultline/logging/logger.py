# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Logger implementation for faultline.

This module provides the default implementation of the logger capability on
top of structlog. Records are gated by the configured :class:`LogLevel`,
carry the application base properties and the current logger context, and
are rendered as JSON unless console output is configured.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from structlog.types import Processor

from faultline.logging.config import LoggingSettings
from faultline.logging.context import merge_logger_context
from faultline.logging.level import LogLevel, is_log_level_enabled
from faultline.logging.utils import create_base_properties

# structlog has no trace or fatal methods
_STRUCTLOG_METHODS: dict[LogLevel, str] = {
    LogLevel.TRACE: "debug",
    LogLevel.DEBUG: "debug",
    LogLevel.INFO: "info",
    LogLevel.WARN: "warning",
    LogLevel.ERROR: "error",
    LogLevel.FATAL: "critical",
}

_RESERVED_KEYS = frozenset({"event"})


def configure_logging(
    settings: LoggingSettings | None = None, *extra_processors: Processor
) -> None:
    """Configure structlog for faultline records.

    Args:
        settings: Optional settings; loaded from the environment when omitted
        *extra_processors: Processors inserted before rendering
    """
    settings = settings or LoggingSettings.load()

    processors: list[Processor] = [
        merge_logger_context,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        *extra_processors,
    ]
    if settings.json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            settings.log_level.to_stdlib_level()
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


class StructuredLogger:
    """Default logger for faultline, backed by structlog."""

    def __init__(
        self,
        name: str = "faultline",
        settings: LoggingSettings | None = None,
        level: LogLevel | str | None = None,
    ) -> None:
        """
        Initialize a new logger.

        Args:
            name: Logger name
            settings: Optional logger settings (loads from environment if None)
            level: Level override; the configured level when omitted
        """
        self.name = name
        self._settings = settings or LoggingSettings.load()
        self.level = LogLevel.parse(level) or self._settings.log_level
        self._base_properties = create_base_properties(self._settings)
        self._logger = structlog.get_logger(name)

    def is_level_enabled(self, level: LogLevel | str) -> bool:
        """Whether records at ``level`` are emitted by this logger."""
        return is_log_level_enabled(self.level, level)

    def set_level(self, level: LogLevel | str) -> None:
        """Set the logger's level.

        Args:
            level: New logging level

        Raises:
            ValueError: If ``level`` is not a known level
        """
        self.level = level if isinstance(level, LogLevel) else LogLevel.from_string(level)

    def _log(self, level: LogLevel, message: str, data: Any = None) -> None:
        if not self.is_level_enabled(level):
            return

        fields: dict[str, Any] = {
            **self._base_properties,
            "logger": self.name,
            "severity_text": level.value,
            "severity_number": level.severity,
        }
        if isinstance(data, Mapping):
            for key, value in data.items():
                key = str(key)
                fields[f"_{key}" if key in _RESERVED_KEYS else key] = value
        elif data is not None:
            fields["data"] = data

        getattr(self._logger, _STRUCTLOG_METHODS[level])(message, **fields)

    def trace(self, message: str, data: Any = None) -> None:
        self._log(LogLevel.TRACE, message, data)

    def debug(self, message: str, data: Any = None) -> None:
        self._log(LogLevel.DEBUG, message, data)

    def info(self, message: str, data: Any = None) -> None:
        self._log(LogLevel.INFO, message, data)

    def warn(self, message: str, data: Any = None) -> None:
        self._log(LogLevel.WARN, message, data)

    warning = warn

    def error(self, message: str, data: Any = None) -> None:
        self._log(LogLevel.ERROR, message, data)

    def fatal(self, message: str, data: Any = None) -> None:
        self._log(LogLevel.FATAL, message, data)

    def bind(self, **context: Any) -> StructuredLogger:
        """Create a new logger with bound context values.

        Args:
            **context: Context values attached to every record

        Returns:
            New logger instance with bound context
        """
        logger = StructuredLogger(self.name, settings=self._settings, level=self.level)
        logger._logger = self._logger.bind(**context)
        return logger


def get_logger(name: str = "faultline", level: LogLevel | str | None = None) -> StructuredLogger:
    """Get a logger for the specified name.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override

    Returns:
        Configured logger instance
    """
    return StructuredLogger(name, settings=LoggingSettings.load(), level=level)
