# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""Logging-specific errors."""

from __future__ import annotations

from faultline.exceptions import FaultlineError


class LoggingError(FaultlineError):
    """Base exception for all logging-related errors."""

    default_code = "LOGGING_ERROR"


class ConfigurationError(LoggingError):
    """Raised when the logging configuration cannot be used as given."""

    default_code = "LOGGING_CONFIGURATION"
