# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline

"""
Error classification and handling for faultline.
"""

from __future__ import annotations

from faultline.errors.categories import ErrorCategory, ErrorSeverity
from faultline.errors.classifier import (
    CATEGORY_OUTCOMES,
    CLASSIFICATION_RULES,
    CategoryOutcome,
    ClassificationRule,
    ErrorClassifier,
    classify_error,
)
from faultline.errors.context import ErrorContext
from faultline.errors.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    DatabaseError,
    FaultlineError,
    NetworkError,
    NotFoundError,
    QueryError,
    RateLimitError,
    ValidationError,
)
from faultline.errors.handler import (
    ApiErrorResponse,
    ComponentErrorResult,
    ErrorEnvelope,
    ErrorHandler,
)
from faultline.errors.helpers import (
    create_api_handler,
    create_error_boundary_handler,
    safe_execute,
    with_error_handling,
)
from faultline.errors.hooks import install_exception_hooks
from faultline.errors.serialization import serialize_error
from faultline.errors.structured import StructuredError

__all__ = [
    # Taxonomy
    "ErrorCategory",
    "ErrorSeverity",
    # Classification
    "ClassificationRule",
    "CategoryOutcome",
    "CLASSIFICATION_RULES",
    "CATEGORY_OUTCOMES",
    "ErrorClassifier",
    "classify_error",
    "ErrorContext",
    "StructuredError",
    "serialize_error",
    # Handling
    "ErrorHandler",
    "ApiErrorResponse",
    "ErrorEnvelope",
    "ComponentErrorResult",
    "with_error_handling",
    "safe_execute",
    "create_error_boundary_handler",
    "create_api_handler",
    "install_exception_hooks",
    # Exceptions
    "FaultlineError",
    "ConfigurationError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "NetworkError",
    "DatabaseError",
    "QueryError",
    "RateLimitError",
]
