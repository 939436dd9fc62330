# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""Small helpers shared by the structured logging components."""

from __future__ import annotations

import os
import uuid
from typing import Any, Final

from faultline.logging.config import DEFAULT_ENV_LABEL, LoggingSettings

LOG_SCHEMA_VERSION: Final = "1.0.0"


def generate_request_id() -> str:
    """Generate a unique request identifier of the form ``req_<uuid4>``."""
    return f"req_{uuid.uuid4()}"


def create_base_properties(settings: LoggingSettings | None = None) -> dict[str, Any]:
    """Return the properties attached to every log record.

    Args:
        settings: Optional settings; loaded from the environment when omitted

    Returns:
        Application name, runtime mode, process id, version and schema version
    """
    settings = settings or LoggingSettings.load()
    return {
        "app": settings.app_name,
        "env": settings.env or DEFAULT_ENV_LABEL,
        "pid": os.getpid(),
        "version": settings.app_version,
        "log_schema_version": LOG_SCHEMA_VERSION,
    }
