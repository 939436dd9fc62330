# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Caller-supplied diagnostic context attached to a failure.

:class:`ErrorContext` is immutable. Code that needs to add information builds
a new context with :meth:`ErrorContext.with_additional_data`, so a context
handed to the error handler is never changed behind the caller's back.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from faultline.utils import safe_str

_STRING_FIELDS = (
    "request_id",
    "user_id",
    "session_id",
    "path",
    "method",
    "user_agent",
    "hashed_ip",
    "timestamp",
)


class ErrorContext(BaseModel):
    """Correlation and diagnostic metadata for one failure.

    All fields are optional. ``hashed_ip`` holds the output of
    :class:`~faultline.logging.crypto.IPHasher`, never a raw address.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    request_id: str | None = None
    user_id: str | None = None
    session_id: str | None = None
    path: str | None = None
    method: str | None = None
    user_agent: str | None = None
    hashed_ip: str | None = Field(default=None, alias="hashedIP")
    timestamp: str | None = None
    additional_data: dict[str, Any] | None = None

    def with_additional_data(self, **data: Any) -> ErrorContext:
        """Return a copy whose ``additional_data`` is extended with ``data``.

        Keys in ``data`` replace existing keys of the same name.
        """
        return self.model_copy(
            update={"additional_data": {**(self.additional_data or {}), **data}}
        )

    def to_log_dict(self) -> dict[str, Any]:
        """Return the populated fields keyed by their Python names."""
        return self.model_dump(exclude_none=True)

    @classmethod
    def coerce(cls, value: Any) -> ErrorContext:
        """Build a context from ``None``, a mapping or an existing context.

        Never raises: string fields holding other types are stringified, and
        anything that still does not validate is kept as opaque additional
        data.
        """
        if value is None:
            return cls()
        if isinstance(value, ErrorContext):
            return value
        if not isinstance(value, Mapping):
            return cls(additional_data={"context": safe_str(value)})

        data = {safe_str(k): v for k, v in value.items()}
        try:
            return cls.model_validate(data)
        except ValidationError:
            pass

        for name in _STRING_FIELDS:
            for key in (name, cls.model_fields[name].alias):
                if key in data and data[key] is not None and not isinstance(data[key], str):
                    data[key] = safe_str(data[key])
        extra = data.get("additional_data", data.get("additionalData"))
        if extra is not None and not isinstance(extra, Mapping):
            data.pop("additional_data", None)
            data["additionalData"] = {"value": extra}
        try:
            return cls.model_validate(data)
        except ValidationError:
            return cls(additional_data={"context": safe_str(value)})
