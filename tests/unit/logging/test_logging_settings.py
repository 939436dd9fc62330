"""Tests for environment-driven logging configuration."""

from __future__ import annotations

import pytest

from faultline.context.runtime import RuntimeEnvironment
from faultline.logging.config import (
    LoggingSettings,
    get_client_log_level,
    get_log_level_from_env,
)
from faultline.logging.level import LogLevel


def test_defaults():
    settings = LoggingSettings()
    assert settings.log_level is LogLevel.INFO
    assert settings.public_log_level is None
    assert settings.app_name == "faultline"
    assert settings.env is None
    assert settings.json_format is True
    assert not settings.is_development
    assert not settings.is_production


@pytest.mark.parametrize(
    "env,expected",
    [
        ({}, LogLevel.INFO),
        ({"LOG_LEVEL": "DEBUG"}, LogLevel.DEBUG),
        ({"LOG_LEVEL": "error"}, LogLevel.ERROR),
        ({"LOG_LEVEL": "chatty"}, LogLevel.INFO),
    ],
)
def test_log_level_from_env(monkeypatch, env, expected):
    for k, v in env.items():
        monkeypatch.setenv(f"FAULTLINE_{k}", v)
    assert get_log_level_from_env() is expected


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("FAULTLINE_APP_NAME", "billing")
    monkeypatch.setenv("FAULTLINE_ENV", "production")
    monkeypatch.setenv("FAULTLINE_JSON_FORMAT", "false")
    settings = LoggingSettings.load()
    assert settings.app_name == "billing"
    assert settings.is_production
    assert settings.json_format is False


def test_client_level_outside_browser_uses_general_level():
    settings = LoggingSettings(log_level="warn", public_log_level="trace")
    assert get_client_log_level(settings, RuntimeEnvironment.SERVER) is LogLevel.WARN
    assert get_client_log_level(settings, RuntimeEnvironment.EDGE) is LogLevel.WARN


def test_client_level_in_browser_prefers_public_level():
    settings = LoggingSettings(log_level="warn", public_log_level="error")
    assert get_client_log_level(settings, RuntimeEnvironment.BROWSER) is LogLevel.ERROR


@pytest.mark.parametrize(
    "env,expected",
    [
        ("development", LogLevel.DEBUG),
        ("local", LogLevel.DEBUG),
        ("production", LogLevel.INFO),
        ("staging", LogLevel.INFO),
        (None, LogLevel.INFO),
    ],
)
def test_client_level_in_browser_defaults_by_mode(env, expected):
    settings = LoggingSettings(env=env)
    assert get_client_log_level(settings, RuntimeEnvironment.BROWSER) is expected


def test_invalid_public_level_counts_as_unset():
    settings = LoggingSettings(env="production", public_log_level="shout")
    assert settings.public_log_level is None
    assert get_client_log_level(settings, RuntimeEnvironment.BROWSER) is LogLevel.INFO


def test_client_level_in_browser_with_nothing_configured():
    assert get_client_log_level(runtime=RuntimeEnvironment.BROWSER) is LogLevel.INFO
