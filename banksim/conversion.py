"""
conversion.py - Currency conversion and rounding helpers

Pure arithmetic between the three currencies:
- USD <-> stablecoin at the configured peg (1:1)
- stablecoin <-> crypto at a given price

Rounding truncates to a fixed number of places per currency and is applied
by the ledger after every step that produces a balance, so chained
operations can differ from a single exact computation in the last digit.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_UP

from .config import DEFAULT_CONFIG, SimulatorConfig
from .core import ZERO, round_to


def crypto_from_stable(stable_amount: Decimal, price: Decimal) -> Decimal:
    """Crypto bought with stable_amount at price. Zero when price is not positive."""
    if price <= 0:
        return ZERO
    return stable_amount / price


def stable_from_crypto(crypto_amount: Decimal, price: Decimal) -> Decimal:
    return crypto_amount * price


def usd_to_stable(amount: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> Decimal:
    return amount * config.usd_to_stable_rate


def stable_to_usd(amount: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> Decimal:
    return amount * config.stable_to_usd_rate


def round_usd(value: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> Decimal:
    return round_to(value, config.precision.usd)


def round_stable(value: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> Decimal:
    return round_to(value, config.precision.stable)


def round_crypto(value: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> Decimal:
    return round_to(value, config.precision.crypto)


def round_liquidity(value: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> Decimal:
    return round_to(value, config.precision.liquidity)


def round_crypto_up(value: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> Decimal:
    """Round up to crypto precision, for crypto that must cover a target amount."""
    return round_to(value, config.precision.crypto, ROUND_UP)
