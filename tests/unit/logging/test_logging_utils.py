"""Tests for request ids and base properties."""

from __future__ import annotations

import os
import uuid

from faultline.logging.config import LoggingSettings
from faultline.logging.utils import (
    LOG_SCHEMA_VERSION,
    create_base_properties,
    generate_request_id,
)
from faultline.utils import safe_str


def test_generate_request_id():
    first, second = generate_request_id(), generate_request_id()
    assert first.startswith("req_")
    uuid.UUID(first[len("req_"):])
    assert first != second


def test_base_properties():
    settings = LoggingSettings(app_name="billing", app_version="2.1.0", env="staging")
    assert create_base_properties(settings) == {
        "app": "billing",
        "env": "staging",
        "pid": os.getpid(),
        "version": "2.1.0",
        "log_schema_version": LOG_SCHEMA_VERSION,
    }


def test_safe_str_falls_back_to_repr():
    class NoStr:
        def __str__(self):
            raise RuntimeError("boom")

        def __repr__(self):
            return "<NoStr>"

    assert safe_str(NoStr()) == "<NoStr>"


def test_base_properties_label_unset_mode_as_development():
    assert create_base_properties(LoggingSettings())["env"] == "development"
