# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""Conversions that never raise, for code that must stay total."""

from __future__ import annotations

from typing import Any


def safe_str(value: Any) -> str:
    """Convert any value to a string without ever raising.

    ``str`` is tried first, then ``repr``; objects whose both conversions
    fail become ``<unprintable TypeName>``.
    """
    try:
        return str(value)
    except Exception:
        pass
    try:
        return repr(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"


def safe_getattr(obj: Any, name: str, default: Any = None) -> Any:
    """``getattr`` that also absorbs errors raised by properties."""
    try:
        return getattr(obj, name, default)
    except Exception:
        return default
