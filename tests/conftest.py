"""
conftest.py - Shared pytest fixtures for simulator tests

Provides ledgers at the points of the standard walkthrough:
- ledger:         initial balances
- stable_ledger:  after buying 1000 USDT (scenario A)
- crypto_ledger:  after spending it on 0.01 BTC (scenario B)
"""

import pytest

from tests.helpers import make_ledger


@pytest.fixture
def ledger():
    """Fresh ledger at the initial balances."""
    return make_ledger()


@pytest.fixture
def stable_ledger(ledger):
    """Scenario A: user bought 1000 USDT."""
    assert ledger.buy_stable(1000).success
    return ledger


@pytest.fixture
def crypto_ledger(stable_ledger):
    """Scenario B: user spent the 1000 USDT on 0.01 BTC."""
    assert stable_ledger.buy_crypto(1000).success
    return stable_ledger
