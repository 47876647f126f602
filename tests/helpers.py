"""
helpers.py - Shared test helpers

- make_ledger(): quiet ledger with a deterministic clock
- snapshot(): balances + history length for no-mutation assertions
- usd_total() / stable_total(): conservation sums
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Dict

from banksim import BankLedger, Currency, SimulatorConfig, DEFAULT_CONFIG


START_TIME = datetime(2025, 1, 1, 9, 30, 0)


def ticking_clock(start: datetime = START_TIME, step: timedelta = timedelta(seconds=1)) -> Callable[[], datetime]:
    """Clock that advances by step on every call, starting at start."""
    state = {'now': start - step}

    def clock() -> datetime:
        state['now'] += step
        return state['now']

    return clock


def make_ledger(config: SimulatorConfig = DEFAULT_CONFIG, **kwargs) -> BankLedger:
    kwargs.setdefault('clock', ticking_clock())
    return BankLedger("test", config=config, verbose=False, **kwargs)


def snapshot(ledger: BankLedger) -> Dict[str, Decimal]:
    state = ledger.balances_snapshot()
    state['history_length'] = len(ledger.history)
    return state


def usd_total(ledger: BankLedger) -> Decimal:
    """USD across bank + user."""
    return ledger.total_supply(Currency.USD, ["bank", "user"])


def stable_total(ledger: BankLedger) -> Decimal:
    """Stablecoin across bank + user + market."""
    return ledger.total_supply(Currency.STABLE, ["bank", "user", "market"])
