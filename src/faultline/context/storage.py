# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Runtime-portable context storage.

A context storage scopes a value to the dynamic extent of a callback so code
further down the call tree can read it without the value being threaded
through every signature. Two interchangeable implementations exist:

* :class:`NativeContextStorage` uses :mod:`contextvars`, so asyncio tasks and
  ``contextvars.copy_context()`` runs inherit the value;
* :class:`FallbackContextStorage` keeps a single current-value slot per thread
  and saves/restores it around each callback, for constrained runtimes.

Callers depend only on :class:`ContextStorage` and obtain an instance from
:func:`create_context_storage`.
"""

from __future__ import annotations

import contextvars
import logging
import threading
from collections.abc import Callable
from functools import wraps
from typing import Any, Generic, Protocol, TypeVar

from faultline.context.runtime import RuntimeEnvironment, detect_runtime_environment

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)


class ContextStorage(Protocol[T]):
    """Protocol shared by every context storage backend."""

    def run(self, value: T, callback: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """Call ``callback`` with ``value`` as the current context.

        The previous context (possibly absent) is restored when the callback
        returns or raises.
        """
        ...

    def get_store(self) -> T | None:
        """Return the current context, or None outside any ``run``."""
        ...

    def bind(self, fn: Callable[..., R], value: T | None = None) -> Callable[..., R]:
        """Return ``fn`` wrapped to always run under a fixed context.

        Without ``value`` the context current at bind time is captured. When
        there is nothing to capture ``fn`` is returned unchanged.
        """
        ...


class _BindMixin(Generic[T]):
    """``bind`` in terms of ``run`` and ``get_store``."""

    def bind(self, fn: Callable[..., R], value: T | None = None) -> Callable[..., R]:
        bound = value if value is not None else self.get_store()  # type: ignore[attr-defined]
        if bound is None:
            return fn

        @wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> R:
            return self.run(bound, fn, *args, **kwargs)  # type: ignore[attr-defined]

        return wrapper


class FallbackContextStorage(_BindMixin[T]):
    """Save/restore implementation for runtimes without ``contextvars``.

    The slot is private to the instance and to the calling thread. Within a
    thread, nested ``run`` calls form a strict stack. Values do not follow
    work scheduled onto an event loop; use :meth:`bind` for callbacks that
    run later.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def run(self, value: T, callback: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        previous = getattr(self._local, "current", None)
        self._local.current = value
        try:
            return callback(*args, **kwargs)
        finally:
            self._local.current = previous

    def get_store(self) -> T | None:
        return getattr(self._local, "current", None)


class NativeContextStorage(_BindMixin[T]):
    """``contextvars`` implementation used on full runtimes."""

    def __init__(self, name: str = "faultline_context") -> None:
        self._var: contextvars.ContextVar[T | None] = contextvars.ContextVar(name, default=None)

    def run(self, value: T, callback: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        token = self._var.set(value)
        try:
            return callback(*args, **kwargs)
        finally:
            self._var.reset(token)

    def get_store(self) -> T | None:
        return self._var.get()


def create_context_storage(
    name: str = "faultline_context",
    runtime: RuntimeEnvironment | None = None,
) -> ContextStorage[Any]:
    """Create the context storage appropriate for the current runtime.

    Args:
        name: Name of the underlying context variable on full runtimes
        runtime: Runtime to build for; detected when omitted

    Returns:
        A native storage on full runtimes, a fallback storage on edge runtimes
        or when the native primitive cannot be created
    """
    runtime = runtime or detect_runtime_environment()
    if runtime is RuntimeEnvironment.EDGE:
        return FallbackContextStorage()

    try:
        return NativeContextStorage(name)
    except Exception as e:
        logger.warning(
            "Native context storage unavailable, using fallback: %s", e, exc_info=True
        )
        return FallbackContextStorage()
