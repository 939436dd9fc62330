# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Client address hashing.

Raw client addresses never enter a log record or an error context. They are
replaced with ``ip_<8 hex chars>``, a truncated HMAC-SHA256 keyed with
``FAULTLINE_IP_HASH_SECRET``.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets

from faultline.logging.config import LoggingSettings
from faultline.logging.errors import ConfigurationError

logger = logging.getLogger(__name__)

INVALID_IP: str = "ip_invalid"


class IPHasher:
    """Keyed, irreversible hashing of client addresses."""

    def __init__(self, settings: LoggingSettings | None = None) -> None:
        """Initialize the hasher.

        Args:
            settings: Optional settings; loaded from the environment when omitted

        Raises:
            ConfigurationError: If no secret is configured in production
        """
        settings = settings or LoggingSettings.load()
        secret = settings.ip_hash_secret
        if not secret:
            if settings.is_production:
                raise ConfigurationError(
                    "FAULTLINE_IP_HASH_SECRET is required in production"
                )
            logger.warning(
                "FAULTLINE_IP_HASH_SECRET not set. Generated temporary secret for "
                "IP hashing; hashes will not be stable across restarts."
            )
            secret = secrets.token_hex(32)
        self._secret = secret.encode("utf-8")

    def hash_ip(self, ip_address: str | None) -> str:
        """Hash a client address.

        Args:
            ip_address: IPv4 or IPv6 address as received from the transport

        Returns:
            ``ip_`` followed by the first 8 hex characters of the HMAC, or
            ``ip_invalid`` for empty input
        """
        if not ip_address or not isinstance(ip_address, str):
            return INVALID_IP

        normalized = self.normalize(ip_address)
        digest = hmac.new(self._secret, normalized.encode("utf-8"), hashlib.sha256)
        return f"ip_{digest.hexdigest()[:8]}"

    @staticmethod
    def normalize(ip_address: str) -> str:
        """Fold equivalent spellings of an address onto one form."""
        ip_address = ip_address.strip()
        if ip_address.startswith("::ffff:"):
            return ip_address[len("::ffff:"):]
        if ip_address == "::1":
            return "127.0.0.1"
        return ip_address
