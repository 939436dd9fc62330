# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline

"""
faultline: failure classification, redaction-safe structured logging and
request context propagation.
"""

from __future__ import annotations

from faultline.errors import (
    ErrorCategory,
    ErrorClassifier,
    ErrorContext,
    ErrorHandler,
    ErrorSeverity,
    StructuredError,
    classify_error,
    serialize_error,
)
from faultline.exceptions import FaultlineError
from faultline.logging import LogLevel, Sanitizer, StructuredLogger, get_logger

__version__ = "0.1.0"

__all__ = [
    "ErrorCategory",
    "ErrorClassifier",
    "ErrorContext",
    "ErrorHandler",
    "ErrorSeverity",
    "FaultlineError",
    "LogLevel",
    "Sanitizer",
    "StructuredError",
    "StructuredLogger",
    "classify_error",
    "get_logger",
    "serialize_error",
]
