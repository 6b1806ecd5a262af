"""Heartbeat settings — defaults, env overrides, validation, caching."""

import pytest
from pydantic import ValidationError

from heartbeat.config import HeartbeatConfig, get_settings
from heartbeat.core.domain_types import Network


def test_defaults(monkeypatch):
    monkeypatch.delenv("HEARTBEAT_RPC_URL", raising=False)
    monkeypatch.delenv("HEARTBEAT_NETWORK", raising=False)
    config = HeartbeatConfig(_env_file=None)
    assert config.low_compute_multiplier is None
    assert config.network is Network.BASE
    assert config.rpc_url is None
    assert config.log_format == "json"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("HEARTBEAT_LOW_COMPUTE_MULTIPLIER", "2.5")
    monkeypatch.setenv("HEARTBEAT_NETWORK", "eip155:8453")
    config = HeartbeatConfig(_env_file=None)
    assert config.low_compute_multiplier == 2.5
    assert config.network is Network.BASE


@pytest.mark.parametrize("field,value", [
    ("low_compute_multiplier", 0),
    ("low_compute_multiplier", -3),
    ("rpc_timeout_seconds", -1),
])
def test_non_positive_values_rejected(field, value):
    with pytest.raises(ValidationError):
        HeartbeatConfig(_env_file=None, **{field: value})


def test_config_is_frozen():
    config = HeartbeatConfig(_env_file=None)
    with pytest.raises(ValidationError):
        config.low_compute_multiplier = 9


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
