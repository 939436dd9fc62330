"""Tests for the context storage backends."""

from __future__ import annotations

import threading
from unittest.mock import patch

import pytest

from faultline.context.runtime import RuntimeEnvironment
from faultline.context.storage import (
    FallbackContextStorage,
    NativeContextStorage,
    create_context_storage,
)


@pytest.fixture(params=[NativeContextStorage, FallbackContextStorage], ids=["native", "fallback"])
def storage(request):
    return request.param()


def test_absent_outside_run(storage):
    assert storage.get_store() is None


def test_run_returns_callback_result(storage):
    assert storage.run("ctx", lambda a, b=0: a + b, 1, b=2) == 3


def test_nested_run_restores(storage):
    observed = []

    def inner():
        observed.append(storage.get_store())

    def outer():
        observed.append(storage.get_store())
        storage.run("inner", inner)
        observed.append(storage.get_store())

    storage.run("outer", outer)

    assert observed == ["outer", "inner", "outer"]
    assert storage.get_store() is None


def test_restores_after_exception(storage):
    def fail():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        storage.run("ctx", fail)
    assert storage.get_store() is None


def test_bind_captures_current_value(storage):
    bound = storage.run("captured", storage.bind, storage.get_store)
    assert storage.get_store() is None
    assert bound() == "captured"
    assert storage.run("other", bound) == "captured"


def test_bind_explicit_value(storage):
    bound = storage.bind(storage.get_store, "explicit")
    assert bound() == "explicit"


def test_bind_without_value_returns_fn(storage):
    def fn():
        return None

    assert storage.bind(fn) is fn


def test_threads_do_not_share_values(storage):
    seen = []
    ready = threading.Event()
    release = threading.Event()

    def worker():
        def body():
            ready.set()
            release.wait(timeout=5)
            seen.append(storage.get_store())

        storage.run("worker", body)

    thread = threading.Thread(target=worker)
    thread.start()
    ready.wait(timeout=5)
    seen.append(storage.get_store())
    release.set()
    thread.join(timeout=5)

    assert seen == [None, "worker"]


def test_factory_selects_backend():
    assert isinstance(
        create_context_storage(runtime=RuntimeEnvironment.EDGE), FallbackContextStorage
    )
    assert isinstance(
        create_context_storage(runtime=RuntimeEnvironment.SERVER), NativeContextStorage
    )
    assert isinstance(
        create_context_storage(runtime=RuntimeEnvironment.BROWSER), NativeContextStorage
    )


def test_factory_falls_back_when_native_unavailable(caplog):
    with patch(
        "faultline.context.storage.contextvars.ContextVar",
        side_effect=RuntimeError("unsupported"),
    ):
        storage = create_context_storage(runtime=RuntimeEnvironment.SERVER)
    assert isinstance(storage, FallbackContextStorage)
    assert "fallback" in caplog.text
