"""
Shared pytest fixtures for the statekeeper test suite.
These fixtures are available to all test files automatically.
"""

import os

import pytest

from src.statekeeper.core import config as config_module
from src.statekeeper.core.config import Config


def pytest_configure(config):
    """Register custom pytest markers for test categorization."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (<100ms, no external dependencies)"
    )
    config.addinivalue_line("markers", "property: mark test as property-based test (hypothesis)")
    config.addinivalue_line(
        "markers", "critical: mark test as critical (core state machine behaviour)"
    )
    config.addinivalue_line("markers", "smoke: mark test as smoke test (basic functionality)")


def pytest_collection_modifyitems(config, items):
    """Add markers to test items based on their location."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        elif "property" in path:
            item.add_marker(pytest.mark.property)


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Pin the settings singleton to defaults, ignoring files and environment."""
    for key in list(os.environ):
        if key.startswith(config_module.ENV_PREFIX):
            monkeypatch.delenv(key)
    monkeypatch.setattr(config_module, "_config", Config())
    yield config_module._config


@pytest.fixture
def idle_running_config():
    """Two-state machine toggled by go/stop."""
    return {
        "initial": "idle",
        "states": {
            "idle": {"transitions": {"go": "running"}},
            "running": {"transitions": {"stop": "idle"}},
        },
    }


@pytest.fixture
def chain_config():
    """Four states A -> B -> C -> D driven by 'next', with 'back' on some states."""
    return {
        "initial": "A",
        "states": {
            "A": {"transitions": {"next": "B"}},
            "B": {"transitions": {"next": "C", "back": "A"}},
            "C": {"transitions": {"next": "D", "back": "B"}},
            "D": {"transitions": {}},
        },
    }


@pytest.fixture
def dangling_config():
    """Configuration whose 'broken' event targets an undeclared state."""
    return {
        "initial": "start",
        "states": {
            "start": {"transitions": {"ok": "end", "broken": "nowhere"}},
            "end": {"transitions": {}},
        },
    }
