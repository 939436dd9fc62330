# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Application failure classes.

The class names match the names in the classification table, so raising one
of these always lands in the intended category regardless of the message.
"""

from __future__ import annotations

from faultline.exceptions import FaultlineError
from faultline.logging.errors import ConfigurationError


class ValidationError(FaultlineError):
    """Input failed validation."""

    default_code = "VALIDATION_ERROR"


class AuthenticationError(FaultlineError):
    """The caller could not be authenticated."""

    default_code = "AUTHENTICATION_ERROR"


class AuthorizationError(FaultlineError):
    """The caller is not allowed to perform the operation."""

    default_code = "AUTHORIZATION_ERROR"


class NotFoundError(FaultlineError):
    """The requested resource does not exist."""

    default_code = "NOT_FOUND"


class NetworkError(FaultlineError):
    """A network call failed or timed out."""

    default_code = "NETWORK_ERROR"


class DatabaseError(FaultlineError):
    """A database operation failed."""

    default_code = "DATABASE_ERROR"


class QueryError(DatabaseError):
    """A database query failed."""

    default_code = "QUERY_ERROR"


class RateLimitError(FaultlineError):
    """The caller exceeded a rate limit."""

    default_code = "RATE_LIMIT_EXCEEDED"


__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "ConfigurationError",
    "DatabaseError",
    "FaultlineError",
    "NetworkError",
    "NotFoundError",
    "QueryError",
    "RateLimitError",
    "ValidationError",
]
