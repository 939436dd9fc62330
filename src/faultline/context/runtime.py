# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Runtime environment detection.

faultline distinguishes three kinds of host:

* ``edge``: a constrained runtime (WASI and similar sandboxes) where context
  propagation must not rely on ``contextvars``;
* ``server``: a full CPython-style runtime;
* ``browser``: a user-facing runtime such as Pyodide.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeEnvironment(str, Enum):
    """Kinds of host runtime."""

    EDGE = "edge"
    SERVER = "server"
    BROWSER = "browser"


_PLATFORM_RUNTIMES: dict[str, RuntimeEnvironment] = {
    "wasi": RuntimeEnvironment.EDGE,
    "emscripten": RuntimeEnvironment.BROWSER,
}


class RuntimeSettings(BaseSettings):
    """Explicit runtime override, read from ``FAULTLINE_RUNTIME``."""

    model_config = SettingsConfigDict(
        env_prefix="FAULTLINE_",
        extra="ignore",
        case_sensitive=False,
    )

    runtime: RuntimeEnvironment | None = Field(
        default=None, description="Force a runtime instead of probing the host"
    )

    @field_validator("runtime", mode="before")
    @classmethod
    def validate_runtime(cls, v: Any) -> RuntimeEnvironment | None:
        """Ignore unknown runtime names so probing takes over."""
        if v is None or isinstance(v, RuntimeEnvironment):
            return v
        try:
            return RuntimeEnvironment(str(v).strip().lower())
        except ValueError:
            return None


def detect_runtime_environment(settings: RuntimeSettings | None = None) -> RuntimeEnvironment:
    """Identify the current runtime.

    An explicit ``FAULTLINE_RUNTIME`` wins; otherwise the platform tag of the
    interpreter is probed.

    Args:
        settings: Optional settings; loaded from the environment when omitted

    Returns:
        The detected runtime environment
    """
    settings = settings or RuntimeSettings()
    if settings.runtime is not None:
        return settings.runtime
    return _PLATFORM_RUNTIMES.get(sys.platform, RuntimeEnvironment.SERVER)


def is_edge_runtime(settings: RuntimeSettings | None = None) -> bool:
    """Whether the code runs in a constrained (edge) runtime."""
    return detect_runtime_environment(settings) is RuntimeEnvironment.EDGE
