"""Root conftest — shared test configuration."""

import os

import pytest

from heartbeat.config import get_settings

# Ensure tests never hit a live RPC node through default settings
os.environ.setdefault("HEARTBEAT_RPC_URL", "http://rpc.test")
os.environ.setdefault("HEARTBEAT_NETWORK", "eip155:84532")


@pytest.fixture(autouse=True)
def _fresh_settings():
    """get_settings is lru_cached; tests that touch env need a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
