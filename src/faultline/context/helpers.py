# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""Asyncio helpers that keep a context attached to scheduled work."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeVar

from faultline.context.storage import ContextStorage

T = TypeVar("T")


def _storage_or_default(storage: ContextStorage[Any] | None) -> ContextStorage[Any]:
    if storage is not None:
        return storage
    # faultline.logging.context imports faultline.context
    from faultline.logging.context import logger_context_manager

    return logger_context_manager.storage


async def with_context(
    context: Any,
    operation: Callable[[], Awaitable[T]],
    storage: ContextStorage[Any] | None = None,
) -> T:
    """Await ``operation()`` with ``context`` as the current context.

    The task is created inside ``run`` so a native storage propagates the
    value through every await of the operation.

    Args:
        context: Context value to install
        operation: Zero-argument coroutine function
        storage: Storage to use; the logger context storage by default

    Returns:
        The operation's result
    """
    storage = _storage_or_default(storage)
    task = storage.run(context, lambda: asyncio.ensure_future(operation()))
    return await task


async def gather_with_context(
    context: Any,
    operations: Iterable[Callable[[], Awaitable[T]]],
    storage: ContextStorage[Any] | None = None,
) -> list[T]:
    """Run several coroutine functions concurrently under one context."""
    storage = _storage_or_default(storage)
    tasks = [
        storage.run(context, lambda op=op: asyncio.ensure_future(op()))
        for op in operations
    ]
    return list(await asyncio.gather(*tasks))


def call_later_with_context(
    context: Any,
    callback: Callable[[], Any],
    delay: float,
    loop: asyncio.AbstractEventLoop | None = None,
    storage: ContextStorage[Any] | None = None,
) -> asyncio.TimerHandle:
    """Schedule ``callback`` after ``delay`` seconds, bound to ``context``."""
    storage = _storage_or_default(storage)
    loop = loop or asyncio.get_running_loop()
    return loop.call_later(delay, storage.bind(callback, context))
