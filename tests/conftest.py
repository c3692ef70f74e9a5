"""Pytest configuration and shared fixtures."""

import os
import sys
import time
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

ENV_PREFIXES = ("HOTRELOAD_", "MY_APP_", "APP_")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove variables the tests bind so the host environment cannot leak in."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIXES) or key in {"HOST", "PORT", "TOKEN", "DEBUG", "URL"}:
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "config.yaml"


def wait_for(predicate, timeout: float = 5.0, interval: float = 0.05) -> bool:
    """Poll predicate until it is true or timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def waiter():
    return wait_for
