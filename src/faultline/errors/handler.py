# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Error handler: classify a failure, log it once, and shape the result.

:class:`ErrorHandler` owns a logger and a sanitizer. Every entry point goes
through :meth:`ErrorHandler.handle`, which emits exactly one sanitized record
at the level implied by the failure's severity. Only the user message, the
status code and the error code ever reach end users.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Final

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from faultline.errors.classifier import ErrorClassifier
from faultline.errors.context import ErrorContext
from faultline.errors.serialization import serialize_error
from faultline.errors.structured import StructuredError
from faultline.logging.level import LogLevel
from faultline.logging.protocols import LoggerProtocol, SanitizerProtocol
from faultline.logging.sanitizer import Sanitizer

JSON_HEADERS: Final = {"Content-Type": "application/json"}

ContextLike = ErrorContext | Mapping[str, Any] | None


class ErrorEnvelope(BaseModel):
    """Body returned to API clients for a failed request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    error: bool = True
    message: str
    code: str | None = None
    request_id: str | None = Field(default=None, alias="requestId")

    def to_body(self) -> dict[str, Any]:
        """Return the JSON body, leaving out unset keys."""
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class ApiErrorResponse:
    """Framework-neutral HTTP error response."""

    status_code: int
    body: dict[str, Any]
    headers: dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))

    def to_response(self) -> JSONResponse:
        """Convert to a Starlette/FastAPI response."""
        return JSONResponse(
            content=self.body, status_code=self.status_code, headers=self.headers
        )


@dataclass(frozen=True)
class ComponentErrorResult:
    """What a rendering layer needs to show a failure to the user."""

    user_message: str
    should_retry: bool
    error_id: str


class ErrorHandler:
    """Classify, log and translate failures."""

    def __init__(
        self,
        logger: LoggerProtocol,
        sanitizer: SanitizerProtocol | None = None,
        classifier: type[ErrorClassifier] = ErrorClassifier,
    ) -> None:
        """
        Initialize the handler.

        Args:
            logger: Destination for error records
            sanitizer: Redaction applied to every record; the standard table
                when omitted
            classifier: Classifier to use
        """
        self.logger = logger
        self.sanitizer = sanitizer or Sanitizer()
        self.classifier = classifier

    def handle(self, error: Any, context: ContextLike = None) -> StructuredError:
        """Classify ``error``, log it once and return the classification.

        Failures raised by the logger or the sanitizer propagate.
        """
        structured = self.classifier.classify(error, context)
        message, data = self._create_log_entry(structured)
        self._log(structured.severity.to_log_level(), message, data)
        return structured

    def _create_log_entry(self, structured: StructuredError) -> tuple[str, Any]:
        entry = {
            "event_name": f"error.{structured.category.value}",
            "event_category": "error_event",
            "error_category": structured.category.value,
            "error_severity": structured.severity.value,
            "error_retryable": structured.is_retryable,
            "error_code": structured.error_code,
            "status_code": structured.status_code,
            "error_details": serialize_error(structured.original_error),
            "context": structured.context.to_log_dict(),
            "timestamp": datetime.now(UTC).isoformat(),
        }
        return self.sanitizer.sanitize(
            f"{structured.category.value}: {structured.message}", entry
        )

    def _log(self, level: LogLevel, message: str, data: Any) -> None:
        if level is LogLevel.ERROR:
            self.logger.error(message, data)
        elif level is LogLevel.WARN:
            self.logger.warn(message, data)
        else:
            self.logger.info(message, data)

    def handle_api_error(self, error: Any, context: ContextLike = None) -> ApiErrorResponse:
        """Handle ``error`` and build the client-facing error response."""
        structured = self.handle(error, context)
        envelope = ErrorEnvelope(
            message=structured.user_message,
            code=structured.error_code,
            request_id=structured.request_id,
        )
        return ApiErrorResponse(
            status_code=structured.status_code or 500, body=envelope.to_body()
        )

    def handle_component_error(
        self, error: Any, context: ContextLike = None
    ) -> ComponentErrorResult:
        """Handle ``error`` raised while rendering a component."""
        structured = self.handle(error, context)
        return ComponentErrorResult(
            user_message=structured.user_message or "An error occurred",
            should_retry=structured.is_retryable,
            error_id=structured.request_id or "unknown",
        )

    def _handle_process_failure(
        self, kind: str, error: Any, context: ContextLike
    ) -> StructuredError:
        base = ErrorContext.coerce(context)
        tagged = base.model_copy(
            update={"additional_data": {"type": kind, **(base.additional_data or {})}}
        )
        return self.handle(error, tagged)

    def handle_unhandled_rejection(
        self, reason: Any, context: ContextLike = None
    ) -> StructuredError:
        """Handle a failure nobody awaited, tagged ``unhandled_rejection``."""
        return self._handle_process_failure("unhandled_rejection", reason, context)

    def handle_uncaught_exception(
        self, error: Any, context: ContextLike = None
    ) -> StructuredError:
        """Handle an exception nobody caught, tagged ``uncaught_exception``."""
        return self._handle_process_failure("uncaught_exception", error, context)
