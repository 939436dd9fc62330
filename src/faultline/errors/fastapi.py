# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
FastAPI integration.

:class:`RequestContextMiddleware` runs each request under a logger context
built from the request, and :func:`register_exception_handlers` turns
failures escaping a route into the standard error envelope.

Example:
    ```python
    from fastapi import FastAPI
    from faultline.errors import ErrorHandler
    from faultline.errors.fastapi import (
        RequestContextMiddleware,
        register_exception_handlers,
    )
    from faultline.logging import get_logger

    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app, ErrorHandler(get_logger(__name__)))
    ```
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from faultline.context.helpers import with_context
from faultline.errors.context import ErrorContext
from faultline.errors.handler import ErrorHandler
from faultline.exceptions import FaultlineError
from faultline.logging.context import LoggerContextManager, logger_context_manager
from faultline.logging.crypto import IPHasher
from faultline.logging.utils import generate_request_id

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Run each request under a logger context describing it.

    The context carries the request id (from ``X-Request-ID`` or generated),
    the hashed client address, the path, the method and the user agent. The
    request id is echoed back in the response header, and the matching
    :class:`ErrorContext` is stored on ``request.state.error_context``.
    """

    def __init__(
        self,
        app: ASGIApp,
        request_id_header: str = REQUEST_ID_HEADER,
        ip_hasher: IPHasher | None = None,
        context_manager: LoggerContextManager | None = None,
    ) -> None:
        super().__init__(app)
        self.request_id_header = request_id_header
        self.ip_hasher = ip_hasher or IPHasher()
        self.context_manager = context_manager or logger_context_manager

    def build_context(self, request: Request) -> dict[str, Any]:
        """Extract the logger context from the request."""
        client_host = request.client.host if request.client else None
        context: dict[str, Any] = {
            "request_id": request.headers.get(self.request_id_header)
            or generate_request_id(),
            "path": request.url.path,
            "method": request.method,
            "hashed_ip": self.ip_hasher.hash_ip(client_host),
        }
        user_agent = request.headers.get("user-agent")
        if user_agent:
            context["user_agent"] = user_agent
        return context

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        context = self.build_context(request)
        request.state.request_id = context["request_id"]
        request.state.error_context = ErrorContext(
            **context, timestamp=datetime.now(UTC).isoformat()
        )

        response = await with_context(
            context, lambda: call_next(request), storage=self.context_manager.storage
        )
        response.headers[self.request_id_header] = context["request_id"]
        return response


def request_error_context(request: Request) -> ErrorContext:
    """Return the error context of ``request``.

    Uses the context stored by :class:`RequestContextMiddleware`, or builds a
    minimal one when the middleware is not installed.
    """
    context = getattr(request.state, "error_context", None)
    if isinstance(context, ErrorContext):
        return context
    return ErrorContext(
        request_id=request.headers.get(REQUEST_ID_HEADER),
        path=request.url.path,
        method=request.method,
        timestamp=datetime.now(UTC).isoformat(),
    )


def register_exception_handlers(app: FastAPI, handler: ErrorHandler) -> None:
    """Route failures escaping a route through ``handler.handle_api_error``.

    Package exceptions and any other ``Exception`` both produce the error
    envelope with the classified status code.
    """

    async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
        context = request_error_context(request)
        response = handler.handle_api_error(exc, context).to_response()
        if context.request_id:
            response.headers[REQUEST_ID_HEADER] = context.request_id
        return response

    app.add_exception_handler(FaultlineError, handle_exception)
    app.add_exception_handler(Exception, handle_exception)
