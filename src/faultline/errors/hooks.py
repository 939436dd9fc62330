# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Process-wide hooks for failures nobody handled.

:func:`install_exception_hooks` routes uncaught exceptions (main thread and
worker threads) to :meth:`ErrorHandler.handle_uncaught_exception` and, for a
given event loop, unretrieved task exceptions to
:meth:`ErrorHandler.handle_unhandled_rejection`.
"""

from __future__ import annotations

import asyncio
import sys
import threading
from collections.abc import Callable
from types import TracebackType
from typing import Any

from faultline.errors.context import ErrorContext
from faultline.errors.handler import ErrorHandler


def install_exception_hooks(
    handler: ErrorHandler, loop: asyncio.AbstractEventLoop | None = None
) -> Callable[[], None]:
    """Install the hooks and return a callable that restores the previous ones.

    Previously installed hooks still run after the handler.

    Args:
        handler: Handler receiving the failures
        loop: Event loop whose exception handler is replaced; loops are left
            alone when omitted

    Returns:
        A function restoring the hooks that were active before the call
    """
    previous_excepthook = sys.excepthook
    previous_threading_hook = threading.excepthook
    previous_loop_handler = loop.get_exception_handler() if loop is not None else None

    def excepthook(
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        if not issubclass(exc_type, KeyboardInterrupt):
            handler.handle_uncaught_exception(exc)
        previous_excepthook(exc_type, exc, tb)

    def threading_excepthook(args: threading.ExceptHookArgs) -> None:
        if args.exc_value is not None and not issubclass(args.exc_type, SystemExit):
            thread_name = args.thread.name if args.thread is not None else None
            handler.handle_uncaught_exception(
                args.exc_value, ErrorContext(additional_data={"thread": thread_name})
            )
        previous_threading_hook(args)

    def loop_exception_handler(
        event_loop: asyncio.AbstractEventLoop, context: dict[str, Any]
    ) -> None:
        reason = context.get("exception") or context.get("message")
        handler.handle_unhandled_rejection(
            reason,
            ErrorContext(additional_data={"asyncio_message": context.get("message")}),
        )
        if previous_loop_handler is not None:
            previous_loop_handler(event_loop, context)

    sys.excepthook = excepthook
    threading.excepthook = threading_excepthook
    if loop is not None:
        loop.set_exception_handler(loop_exception_handler)

    def restore() -> None:
        sys.excepthook = previous_excepthook
        threading.excepthook = previous_threading_hook
        if loop is not None:
            loop.set_exception_handler(previous_loop_handler)

    return restore
