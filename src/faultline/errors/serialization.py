# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""Log-friendly representation of failures."""

from __future__ import annotations

import traceback
from typing import Any

from faultline.utils import safe_getattr, safe_str


def _type_tag(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, int | float | complex):
        return "number"
    if callable(value):
        return "function"
    return "object"


def _format_stack(error: BaseException) -> str | None:
    if error.__traceback__ is None:
        return None
    try:
        return "".join(traceback.format_exception(error))
    except Exception:
        return None


def _serialize(error: Any, seen: set[int]) -> dict[str, Any]:
    seen.add(id(error))
    if isinstance(error, BaseException):
        result: dict[str, Any] = {
            "name": type(error).__name__,
            "message": safe_str(error),
            "stack": _format_stack(error),
        }
        cause = error.__cause__
    else:
        name = safe_getattr(error, "name")
        message = safe_getattr(error, "message")
        if not (isinstance(name, str) and isinstance(message, str)):
            return {"message": safe_str(error), "type": _type_tag(error)}
        result = {"name": name, "message": message, "stack": safe_getattr(error, "stack")}
        cause = safe_getattr(error, "cause")
    if cause is not None and id(cause) not in seen:
        result["cause"] = _serialize(cause, seen)
    return result


def serialize_error(error: Any) -> dict[str, Any]:
    """Serialize any value describing a failure.

    Exceptions yield ``name``, ``message``, ``stack`` (the formatted
    traceback, None when never raised) and ``cause`` when chained. Objects
    exposing string ``name`` and ``message`` attributes yield those, their
    ``stack`` and their ``cause`` when set. Anything else yields its string
    form and a type tag (``string``, ``number``, ``boolean``, ``null``,
    ``function`` or ``object``). Cyclic cause chains are cut.

    Never raises.
    """
    return _serialize(error, set())
