# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Helpers that route failures from common call sites through an ErrorHandler.
"""

from __future__ import annotations

import inspect
import traceback
from collections.abc import Awaitable, Callable, Mapping
from datetime import UTC, datetime
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from faultline.errors.context import ErrorContext
from faultline.errors.handler import ApiErrorResponse, ContextLike, ErrorHandler
from faultline.utils import safe_getattr, safe_str

P = ParamSpec("P")
R = TypeVar("R")

_API_CONTEXT_FIELDS = {
    "request_id": ("request_id", "requestId"),
    "path": ("path",),
    "method": ("method",),
    "hashed_ip": ("hashed_ip", "hashedIP"),
    "timestamp": ("timestamp",),
}


def with_error_handling(
    fn: Callable[P, Awaitable[R]],
    handler: ErrorHandler,
    context: ContextLike = None,
) -> Callable[P, Awaitable[R]]:
    """Wrap a coroutine function so failures are handled, then re-raised.

    Args:
        fn: Coroutine function to wrap
        handler: Handler receiving failures
        context: Context passed with every failure

    Returns:
        The wrapped coroutine function

    Raises:
        TypeError: If ``fn`` is not a coroutine function
    """
    if not inspect.iscoroutinefunction(fn):
        raise TypeError(f"{safe_str(fn)} is not a coroutine function")

    @wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await fn(*args, **kwargs)
        except Exception as e:
            handler.handle(e, context)
            raise

    return wrapper


async def safe_execute(
    fn: Callable[[], Awaitable[R]],
    handler: ErrorHandler,
    context: ContextLike = None,
    fallback: R | None = None,
) -> R | None:
    """Await ``fn()``; on failure handle it and return ``fallback``."""
    try:
        return await fn()
    except Exception as e:
        handler.handle(e, context)
        return fallback


def _component_stack(error: Any, info: Any) -> str | None:
    if info is None:
        if isinstance(error, BaseException) and error.__traceback__ is not None:
            return "".join(traceback.format_tb(error.__traceback__))
        return None
    if isinstance(info, Mapping):
        stack = info.get("component_stack", info.get("componentStack"))
    else:
        stack = safe_getattr(info, "component_stack")
    return None if stack is None else safe_str(stack)


def create_error_boundary_handler(
    handler: ErrorHandler,
) -> Callable[[Any, Any], None]:
    """Return a callback for rendering layers that catch errors per component.

    The callback accepts the failure and an optional info object carrying a
    ``component_stack`` (mapping key or attribute). Without info, the
    failure's own traceback is used.
    """

    def on_error(error: Any, info: Any = None) -> None:
        handler.handle(
            error,
            ErrorContext(
                additional_data={
                    "component_stack": _component_stack(error, info),
                    "type": "react_error_boundary",
                }
            ),
        )

    return on_error


def create_api_handler(
    handler: ErrorHandler,
) -> Callable[..., ApiErrorResponse]:
    """Return a callback turning a failure and a loose request bag into a response.

    The bag may use snake or camel case for ``request_id``, ``path``,
    ``method``, ``hashed_ip`` and ``timestamp``. Values are stringified and
    the timestamp defaults to now. A bag that is not a mapping is ignored.
    """

    def on_error(error: Any, bag: Any = None) -> ApiErrorResponse:
        if not isinstance(bag, Mapping):
            bag = {}
        fields: dict[str, str] = {}
        for name, keys in _API_CONTEXT_FIELDS.items():
            for key in keys:
                value = bag.get(key)
                if value is not None:
                    fields[name] = safe_str(value)
                    break
        fields.setdefault("timestamp", datetime.now(UTC).isoformat())
        return handler.handle_api_error(error, ErrorContext(**fields))

    return on_error
