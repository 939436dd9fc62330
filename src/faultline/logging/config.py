# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Configuration for the faultline logging system.

Settings are read from ``FAULTLINE_*`` environment variables. Log levels are
validated case-insensitively and never reject the configuration: an unknown
level falls back to the default so a typo cannot silence the application.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from faultline.context.runtime import RuntimeEnvironment, detect_runtime_environment
from faultline.logging.level import DEFAULT_LOG_LEVEL, LogLevel

DEVELOPMENT_ENVIRONMENTS = frozenset({"development", "dev", "local"})
DEFAULT_ENV_LABEL = "development"


class LoggingSettings(BaseSettings):
    """
    Configuration settings for the faultline logging system.
    Loads from environment variables using Pydantic v2's env support.
    """

    model_config = SettingsConfigDict(
        env_prefix="FAULTLINE_",
        extra="ignore",
        case_sensitive=False,
        frozen=False,
    )

    log_level: LogLevel = Field(default=DEFAULT_LOG_LEVEL, description="Log level")
    public_log_level: LogLevel | None = Field(
        default=None, description="Log level for user-facing runtimes"
    )
    app_name: str = Field(default="faultline", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    env: str | None = Field(default=None, description="Runtime mode")
    json_format: bool = Field(default=True, description="Render logs as JSON")
    ip_hash_secret: str | None = Field(
        default=None, description="HMAC secret for client address hashing"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_level(cls, v: Any) -> LogLevel:
        """Parse the level, falling back to the default when invalid."""
        return LogLevel.parse(v) or DEFAULT_LOG_LEVEL

    @field_validator("public_log_level", mode="before")
    @classmethod
    def validate_public_level(cls, v: Any) -> LogLevel | None:
        """Parse the public level; an invalid value counts as unset."""
        return LogLevel.parse(v)

    @property
    def is_development(self) -> bool:
        """Whether the runtime mode is a development-like one; False when unset."""
        if self.env is None:
            return False
        return self.env.strip().lower() in DEVELOPMENT_ENVIRONMENTS

    @property
    def is_production(self) -> bool:
        return self.env is not None and self.env.strip().lower() == "production"

    @classmethod
    def load(cls) -> LoggingSettings:
        """
        Load logging settings from environment variables or defaults using Pydantic v2.
        Returns:
            LoggingSettings: Loaded and validated settings instance.
        """
        return cls()


def get_log_level_from_env(settings: LoggingSettings | None = None) -> LogLevel:
    """Return the general log level (``FAULTLINE_LOG_LEVEL``, default ``info``)."""
    settings = settings or LoggingSettings.load()
    return settings.log_level


def get_client_log_level(
    settings: LoggingSettings | None = None,
    runtime: RuntimeEnvironment | None = None,
) -> LogLevel:
    """Return the log level for code that may run in a user-facing runtime.

    Outside a browser-like runtime this is the general level. Inside one,
    ``FAULTLINE_PUBLIC_LOG_LEVEL`` is used; when it is not configured the
    level is ``debug`` in development and ``info`` otherwise.

    Args:
        settings: Optional settings; loaded from the environment when omitted
        runtime: Runtime to resolve for; detected when omitted

    Returns:
        The resolved log level
    """
    settings = settings or LoggingSettings.load()
    runtime = runtime or detect_runtime_environment()

    if runtime is not RuntimeEnvironment.BROWSER:
        return get_log_level_from_env(settings)

    if settings.public_log_level is not None:
        return settings.public_log_level

    return LogLevel.DEBUG if settings.is_development else DEFAULT_LOG_LEVEL
