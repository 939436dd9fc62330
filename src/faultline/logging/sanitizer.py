# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Log entry sanitization.

:class:`Sanitizer` turns a message and an arbitrary payload into a log-safe
copy:

* values at redaction paths are replaced with ``[REDACTED]``;
* control characters are escaped so a value cannot forge extra log lines;
* non-JSON values (datetimes, UUIDs, enums, pydantic models, exceptions)
  become JSON-safe values;
* cycles are cut; when limits are configured, excessive depth, oversized
  containers and long strings are cut too.

The input is never modified and sanitization never raises.
"""

from __future__ import annotations

import datetime
import enum
import logging
import re
import uuid
from collections.abc import Iterable, Mapping, Set
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Final

from pydantic import BaseModel

from faultline.logging.protocols import SanitizedLogEntry
from faultline.logging.redaction import (
    DEFAULT_REDACTION_RULES,
    REDACT_PATHS,
    REDACTED,
    RedactionRules,
)
from faultline.utils import safe_getattr, safe_str

logger = logging.getLogger(__name__)

CIRCULAR_REFERENCE: Final = {"_circular_reference": True}
MAX_DEPTH_REACHED: Final = {"_truncated": "max_depth_reached"}
TRUNCATED_SUFFIX: Final = "... [TRUNCATED]"

_CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def _escape_control(match: re.Match[str]) -> str:
    return f"\\u{ord(match.group(0)):04X}"


def sanitize_newlines(value: str) -> str:
    """Escape CR and LF so a value cannot start a new log line."""
    return value.replace("\r\n", "\\r\\n").replace("\r", "\\r").replace("\n", "\\n")


def sanitize_control_characters(value: str) -> str:
    """Escape C0/C1 control characters as ``\\uXXXX``."""
    return _CONTROL_CHARACTERS.sub(_escape_control, value)


def sanitize_text(value: str) -> str:
    """Apply newline then control character escaping."""
    return sanitize_control_characters(sanitize_newlines(value))


@dataclass
class Sanitizer:
    """Redacting sanitizer for structured log payloads.

    Size limits are off unless ``max_depth``, ``max_keys`` or
    ``max_string_length`` is given.
    """

    rules: RedactionRules = DEFAULT_REDACTION_RULES
    censor: str = REDACTED
    max_depth: int | None = None
    max_keys: int | None = None
    max_string_length: int | None = None

    @classmethod
    def from_paths(cls, paths: Iterable[str] = REDACT_PATHS, **options: Any) -> Sanitizer:
        """Build a sanitizer for a caller-maintained redaction table."""
        return cls(rules=RedactionRules.from_paths(paths), **options)

    def sanitize(self, message: str, data: Any = None) -> SanitizedLogEntry:
        """Return a sanitized copy of a log message and its payload.

        Args:
            message: Rendered log message
            data: Structured payload

        Returns:
            The sanitized message and payload
        """
        clean_message = sanitize_text(self._truncate(safe_str(message)))
        if data is None:
            return SanitizedLogEntry(clean_message, None)
        try:
            clean_data = self._clean(data, (), 0, set())
        except Exception as e:
            logger.warning("Could not sanitize log payload: %s", safe_str(e))
            clean_data = {"_unserializable": True}
        return SanitizedLogEntry(clean_message, clean_data)

    __call__ = sanitize

    def _truncate(self, value: str) -> str:
        limit = self.max_string_length
        if limit is not None and len(value) > limit:
            return value[:limit] + TRUNCATED_SUFFIX
        return value

    def _clean(self, value: Any, path: tuple[str, ...], depth: int, seen: set[int]) -> Any:
        if self.rules.matches(path):
            return self.censor
        if self.max_depth is not None and depth >= self.max_depth:
            return dict(MAX_DEPTH_REACHED)

        if isinstance(value, enum.Enum):
            value = value.value
        if value is None or isinstance(value, bool | int | float):
            return value
        if isinstance(value, str):
            return sanitize_text(self._truncate(value))

        if isinstance(value, Mapping):
            return self._clean_mapping(value, path, depth, seen)
        if isinstance(value, list | tuple | Set):
            return self._clean_sequence(value, path, depth, seen)

        return self._clean(self._to_jsonable(value), path, depth, seen)

    def _clean_mapping(
        self, value: Mapping[Any, Any], path: tuple[str, ...], depth: int, seen: set[int]
    ) -> dict[str, Any]:
        if id(value) in seen:
            return dict(CIRCULAR_REFERENCE)
        seen.add(id(value))
        try:
            items = list(value.items())
            result: dict[str, Any] = {}
            for key, item in items[: self.max_keys]:
                raw_key = safe_str(key)
                result[sanitize_text(raw_key)] = self._clean(
                    item, (*path, raw_key), depth + 1, seen
                )
            if self.max_keys is not None and len(items) > self.max_keys:
                result["_truncated"] = f"{len(items) - self.max_keys} more keys"
            return result
        finally:
            seen.discard(id(value))

    def _clean_sequence(
        self, value: Iterable[Any], path: tuple[str, ...], depth: int, seen: set[int]
    ) -> list[Any]:
        if id(value) in seen:
            return [dict(CIRCULAR_REFERENCE)]
        seen.add(id(value))
        try:
            items = list(value)
            result = [
                self._clean(item, path, depth + 1, seen) for item in items[: self.max_keys]
            ]
            if self.max_keys is not None and len(items) > self.max_keys:
                result.append({"_truncated": f"{len(items) - self.max_keys} more items"})
            return result
        finally:
            seen.discard(id(value))

    @staticmethod
    def _to_jsonable(value: Any) -> Any:
        """Convert special types to JSON-serializable values."""
        if isinstance(value, datetime.datetime | datetime.date | datetime.time):
            return value.isoformat()
        if isinstance(value, uuid.UUID | Decimal):
            return str(value)
        if isinstance(value, BaseModel):
            try:
                return value.model_dump(mode="json")
            except Exception:
                return safe_str(value)
        if isinstance(value, BaseException):
            return {"name": type(value).__name__, "message": safe_str(value)}
        if isinstance(value, bytes | bytearray):
            return safe_str(bytes(value))
        attributes = safe_getattr(value, "__dict__")
        if isinstance(attributes, dict) and attributes:
            return {k: v for k, v in attributes.items() if not k.startswith("_")}
        return safe_str(value)


_default_sanitizer = Sanitizer()


def sanitize_log_entry(message: str, data: Any = None) -> SanitizedLogEntry:
    """Sanitize a log entry with the standard redaction table."""
    return _default_sanitizer.sanitize(message, data)
