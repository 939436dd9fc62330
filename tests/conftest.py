"""Top-level pytest configuration for faultline."""

from __future__ import annotations

import os
from typing import Any

import pytest
import structlog

from faultline.errors import ErrorHandler

os.environ["PYTHONASYNCIODEBUG"] = "0"

pytest_plugins = [
    "pytest_asyncio",
]

FAULTLINE_ENV_VARS = (
    "FAULTLINE_LOG_LEVEL",
    "FAULTLINE_PUBLIC_LOG_LEVEL",
    "FAULTLINE_APP_NAME",
    "FAULTLINE_APP_VERSION",
    "FAULTLINE_ENV",
    "FAULTLINE_JSON_FORMAT",
    "FAULTLINE_RUNTIME",
    "FAULTLINE_IP_HASH_SECRET",
)


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Start every test from an unconfigured environment."""
    for key in FAULTLINE_ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class RecordingLogger:
    """Logger capability that keeps every call for inspection."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, Any]] = []

    def info(self, message: str, data: Any = None) -> None:
        self.records.append(("info", message, data))

    def warn(self, message: str, data: Any = None) -> None:
        self.records.append(("warn", message, data))

    def error(self, message: str, data: Any = None) -> None:
        self.records.append(("error", message, data))

    @property
    def levels(self) -> list[str]:
        return [level for level, _, _ in self.records]

    @property
    def last(self) -> tuple[str, str, Any]:
        return self.records[-1]


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def handler(recording_logger: RecordingLogger) -> ErrorHandler:
    return ErrorHandler(recording_logger)
