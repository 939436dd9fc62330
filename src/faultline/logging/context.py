# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Request-scoped logger context.

:class:`LoggerContextManager` keeps a mapping (request id, trace id, user id,
...) in a :class:`~faultline.context.storage.ContextStorage` for the duration
of a request so every log record emitted underneath carries it. It also
offers helpers that emit the standard event shapes (user actions, system
events, security events, errors and performance metrics).
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Callable, MutableMapping
from datetime import UTC, datetime
from typing import Any, TypeVar

from faultline.context.storage import ContextStorage, create_context_storage
from faultline.logging.level import LogLevel
from faultline.logging.protocols import SanitizerProtocol
from faultline.logging.sanitizer import Sanitizer
from faultline.utils import safe_str

T = TypeVar("T")

LoggerContext = dict[str, Any]


def _level_method(base_logger: Any, level: LogLevel) -> Callable[..., None]:
    """Resolve the method for ``level`` on a logger that may only know info/warn/error."""
    candidates = {
        LogLevel.TRACE: ("trace", "debug", "info"),
        LogLevel.DEBUG: ("debug", "info"),
        LogLevel.INFO: ("info",),
        LogLevel.WARN: ("warn", "warning"),
        LogLevel.ERROR: ("error",),
        LogLevel.FATAL: ("fatal", "critical", "error"),
    }[level]
    for name in candidates:
        method = getattr(base_logger, name, None)
        if callable(method):
            return method
    return base_logger.error


class ContextualLogger:
    """Logger proxy that attaches the current context to every record."""

    def __init__(
        self, manager: LoggerContextManager, base_logger: Any, extra: LoggerContext
    ) -> None:
        self._manager = manager
        self._base_logger = base_logger
        self._extra = extra

    def _log(self, level: LogLevel, message: str, data: Any = None) -> None:
        payload = {
            **self._extra,
            **(self._manager.get_context() or {}),
            "severity_number": level.severity,
            "timestamp": datetime.now(UTC).isoformat(),
        }
        if data is not None:
            payload["data"] = data
        entry = self._manager.sanitizer.sanitize(message, payload)
        _level_method(self._base_logger, level)(entry.message, entry.data)

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

    def is_level_enabled(self, level: LogLevel | str) -> bool:
        check = getattr(self._base_logger, "is_level_enabled", None)
        return bool(check(level)) if callable(check) else True


class LoggerContextManager:
    """Manage the logger context of the current request."""

    def __init__(
        self,
        storage: ContextStorage[LoggerContext] | None = None,
        sanitizer: SanitizerProtocol | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            storage: Context storage; created for the detected runtime when omitted
            sanitizer: Sanitizer applied to event payloads
        """
        self.storage = storage or create_context_storage("faultline_logger_context")
        self.sanitizer = sanitizer or Sanitizer()

    def run_with_context(
        self, context: LoggerContext, fn: Callable[..., T], *args: Any, **kwargs: Any
    ) -> T:
        """Call ``fn`` with ``context`` as the current logger context."""
        return self.storage.run(context, fn, *args, **kwargs)

    def get_context(self) -> LoggerContext | None:
        """Return the current logger context, or None outside a request."""
        return self.storage.get_store()

    def update_context(self, **updates: Any) -> LoggerContext | None:
        """Return the current context merged with ``updates``.

        The current context itself is left unchanged; run the result with
        :meth:`run_with_context` to make it current.
        """
        current = self.get_context()
        if current is None:
            return None
        return {**current, **updates}

    def set_trace_context(self, trace_id: str, span_id: str | None = None) -> bool:
        """Record trace identifiers on the current context.

        Returns:
            True when a context was active and has been updated
        """
        current = self.get_context()
        if not isinstance(current, MutableMapping):
            return False
        current["trace_id"] = trace_id
        if span_id:
            current["span_id"] = span_id
        return True

    def create_contextual_logger(self, base_logger: Any, **extra: Any) -> ContextualLogger:
        """Wrap ``base_logger`` so every record carries the current context."""
        return ContextualLogger(self, base_logger, extra)

    def _emit(self, base_logger: Any, level: LogLevel, message: str, data: dict[str, Any]) -> None:
        entry = self.sanitizer.sanitize(message, {**data, **(self.get_context() or {})})
        _level_method(base_logger, level)(entry.message, entry.data)

    def log_user_action(
        self, base_logger: Any, action: str, details: dict[str, Any] | None = None
    ) -> None:
        """Log a user action as a ``user.<action>`` event."""
        self._emit(
            base_logger,
            LogLevel.INFO,
            f"User action: {action}",
            {
                "event_name": f"user.{action}",
                "event_category": "user_action",
                "event_attributes": details or {},
            },
        )

    def log_system_event(
        self, base_logger: Any, event: str, details: dict[str, Any] | None = None
    ) -> None:
        """Log an internal event as a ``system.<event>`` event."""
        self._emit(
            base_logger,
            LogLevel.INFO,
            f"System event: {event}",
            {
                "event_name": f"system.{event}",
                "event_category": "system_event",
                "event_attributes": details or {},
            },
        )

    def log_security_event(
        self, base_logger: Any, event: str, details: dict[str, Any] | None = None
    ) -> None:
        """Log a security event at error level with high severity."""
        self._emit(
            base_logger,
            LogLevel.ERROR,
            f"Security event: {event}",
            {
                "event_name": f"security.{event}",
                "event_category": "security_event",
                "event_attributes": details or {},
                "severity": "high",
            },
        )

    def log_error_event(
        self, base_logger: Any, error: Any, details: dict[str, Any] | None = None
    ) -> None:
        """Log an application error that is not going through the error handler."""
        if isinstance(error, BaseException):
            error_data: dict[str, Any] = {
                "name": type(error).__name__,
                "message": safe_str(error),
                "stack": "".join(traceback.format_exception(error))
                if error.__traceback__ is not None
                else None,
            }
        else:
            error_data = {"value": safe_str(error)}
        self._emit(
            base_logger,
            LogLevel.ERROR,
            "Application error occurred",
            {
                "event_name": "error.application",
                "event_category": "error_event",
                "event_attributes": details or {},
                "error": error_data,
            },
        )

    def log_performance_metric(
        self, base_logger: Any, metric: str, value: float, unit: str = "ms"
    ) -> None:
        """Log a performance measurement as a ``performance.<metric>`` event."""
        self._emit(
            base_logger,
            LogLevel.INFO,
            f"Performance metric: {metric}",
            {
                "event_name": f"performance.{metric}",
                "event_category": "system_event",
                "event_attributes": {
                    "metric_name": metric,
                    "metric_value": value,
                    "metric_unit": unit,
                },
            },
        )

    def debug_context(self, base_logger: Any) -> None:
        """Log the current context at debug level."""
        context = self.get_context()
        debug = _level_method(base_logger, LogLevel.DEBUG)
        if context:
            debug("Current logger context", dict(context))
        else:
            debug("No logger context found")


def merge_logger_context(
    _: logging.Logger | Any, __: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor adding the current logger context to a record.

    Keys already present in the record win over context keys.
    """
    context = logger_context_manager.get_context()
    if context:
        for key, value in context.items():
            event_dict.setdefault(key, value)
    return event_dict


logger_context_manager = LoggerContextManager()


def run_with_logger_context(
    context: LoggerContext, fn: Callable[..., T], *args: Any, **kwargs: Any
) -> T:
    """Call ``fn`` under ``context`` using the shared manager."""
    return logger_context_manager.run_with_context(context, fn, *args, **kwargs)


def get_logger_context() -> LoggerContext | None:
    """Return the shared manager's current context."""
    return logger_context_manager.get_context()


def create_contextual_logger(base_logger: Any, **extra: Any) -> ContextualLogger:
    """Wrap ``base_logger`` with the shared manager."""
    return logger_context_manager.create_contextual_logger(base_logger, **extra)
