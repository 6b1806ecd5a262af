"""Service test fixtures — controllable balance source for the context builder.

Invariants:
    - fake_balance is a fresh FakeBalanceSource per test
    - No fixture here touches the network

Design Decisions:
    - Fake injected through the balance_source keyword, not patched into the module:
      the builder's default reader stays untouched for tests that exercise it
"""

import pytest

from heartbeat.config import HeartbeatConfig

from tests.services.fake_balance import FakeBalanceSource

WALLET = "0x1111111111111111111111111111111111111111"


@pytest.fixture
def fake_balance():
    return FakeBalanceSource()


@pytest.fixture
def wallet():
    return WALLET


@pytest.fixture
def config():
    return HeartbeatConfig(_env_file=None, rpc_url="http://rpc.test")
