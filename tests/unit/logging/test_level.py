"""Tests for log levels and severity comparison."""

from __future__ import annotations

import logging

import pytest

from faultline.logging.level import (
    SEVERITY_NUMBERS,
    UNKNOWN_LEVEL_SEVERITY,
    LogLevel,
    get_log_level_value,
    is_log_level_enabled,
)


def test_severity_numbers_follow_opentelemetry():
    assert [SEVERITY_NUMBERS[level] for level in LogLevel] == [1, 5, 9, 13, 17, 21]
    assert LogLevel.WARN.severity == 13


@pytest.mark.parametrize("level", list(LogLevel))
def test_level_enables_itself(level):
    assert is_log_level_enabled(level, level)


def test_level_comparison():
    assert is_log_level_enabled("info", "error")
    assert not is_log_level_enabled("error", "info")
    assert is_log_level_enabled(LogLevel.TRACE, LogLevel.DEBUG)


def test_unknown_level_ranks_above_fatal():
    assert get_log_level_value("verbose") == UNKNOWN_LEVEL_SEVERITY
    assert UNKNOWN_LEVEL_SEVERITY >= SEVERITY_NUMBERS[LogLevel.FATAL]
    # an unknown target is always emitted, an unknown floor only passes unknowns
    assert is_log_level_enabled("fatal", "nonsense")
    assert not is_log_level_enabled("nonsense", "fatal")


def test_from_string_is_case_insensitive():
    assert LogLevel.from_string("WARN") is LogLevel.WARN
    assert LogLevel.from_string(" Debug ") is LogLevel.DEBUG


def test_from_string_rejects_unknown():
    with pytest.raises(ValueError):
        LogLevel.from_string("loud")


@pytest.mark.parametrize("value", ["loud", None, 3, ""])
def test_parse_is_lenient(value):
    assert LogLevel.parse(value) is None


def test_to_stdlib_level():
    assert LogLevel.INFO.to_stdlib_level() == logging.INFO
    assert LogLevel.FATAL.to_stdlib_level() == logging.CRITICAL
    assert LogLevel.TRACE.to_stdlib_level() < logging.DEBUG
