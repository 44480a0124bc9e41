"""
Global pytest configuration and fixtures.

This file configures pytest behavior for all tests in the project.
"""

import pytest

from listenkit.config.settings import Settings, reset_settings
from listenkit.core.environment import HostEnvironment
from listenkit.core.events.subscribe import hub
from listenkit.core.events.runtime import initialize_runtime, reset_runtime
from listenkit.tests.mocks import LegacyNode, LegacyWindow


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "legacy: test runs against a legacy host")


@pytest.fixture(autouse=True)
def isolated_runtime(monkeypatch):
    """Give every test a fresh runtime and settings, free of LISTENKIT_* env."""
    monkeypatch.delenv("LISTENKIT_ALLOW_LEAKS", raising=False)
    monkeypatch.delenv("LISTENKIT_LOG_LEVEL", raising=False)
    reset_settings()
    reset_runtime()
    yield
    # Topic subscriptions live as slots on the shared hub
    vars(hub).clear()
    reset_runtime()
    reset_settings()


@pytest.fixture
def legacy_document():
    """Host document without a native listener API."""
    return LegacyNode("#document")


@pytest.fixture
def legacy_window(legacy_document):
    window = LegacyWindow(legacy_document)
    legacy_document.parent_window = window
    return window


@pytest.fixture
def legacy_runtime(legacy_window, legacy_document):
    """Runtime for an old script engine: normalizer and teardown both active."""
    environment = HostEnvironment(
        window=legacy_window,
        document=legacy_document,
        script_engine_version=5.6,
    )
    return initialize_runtime(environment, Settings())
