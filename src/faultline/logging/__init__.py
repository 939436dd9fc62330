# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline

"""
Public API for the faultline logging system.

Structured, redaction-safe logging with request-scoped context.
"""

from __future__ import annotations

from faultline.logging.config import (
    LoggingSettings,
    get_client_log_level,
    get_log_level_from_env,
)
from faultline.logging.context import (
    ContextualLogger,
    LoggerContextManager,
    create_contextual_logger,
    get_logger_context,
    logger_context_manager,
    merge_logger_context,
    run_with_logger_context,
)
from faultline.logging.crypto import IPHasher
from faultline.logging.errors import ConfigurationError, LoggingError
from faultline.logging.level import (
    SEVERITY_NUMBERS,
    UNKNOWN_LEVEL_SEVERITY,
    LogLevel,
    get_log_level_value,
    is_log_level_enabled,
)
from faultline.logging.logger import StructuredLogger, configure_logging, get_logger
from faultline.logging.protocols import (
    LoggerProtocol,
    SanitizedLogEntry,
    SanitizerProtocol,
)
from faultline.logging.redaction import REDACT_PATHS, REDACTED, RedactionRules
from faultline.logging.sanitizer import Sanitizer, sanitize_log_entry
from faultline.logging.utils import create_base_properties, generate_request_id

__all__ = [
    # Core interfaces
    "LoggerProtocol",
    "SanitizerProtocol",
    "SanitizedLogEntry",
    # Levels
    "LogLevel",
    "SEVERITY_NUMBERS",
    "UNKNOWN_LEVEL_SEVERITY",
    "get_log_level_value",
    "is_log_level_enabled",
    # Implementation
    "StructuredLogger",
    "Sanitizer",
    "RedactionRules",
    "REDACT_PATHS",
    "REDACTED",
    "IPHasher",
    "LoggingError",
    "ConfigurationError",
    # Context
    "ContextualLogger",
    "LoggerContextManager",
    "logger_context_manager",
    "merge_logger_context",
    "run_with_logger_context",
    "get_logger_context",
    "create_contextual_logger",
    # Settings
    "LoggingSettings",
    "get_log_level_from_env",
    "get_client_log_level",
    # Factory functions
    "configure_logging",
    "get_logger",
    "sanitize_log_entry",
    "create_base_properties",
    "generate_request_id",
]
