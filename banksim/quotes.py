"""
quotes.py - Read-only trade previews

Forms show the user what a trade would yield before it runs ("You will
receive ~0.01 BTC"). These functions compute those figures from a
LedgerView without mutating anything. All conversions return zero when the
price is not positive.
"""

from __future__ import annotations
from decimal import Decimal
from typing import Any

from .conversion import crypto_from_stable, round_crypto_up, round_liquidity, stable_from_crypto
from .core import (
    LedgerView, Currency, USER_WALLET, ZERO, to_decimal,
)


def _amount(value: Any) -> Decimal:
    # Previews treat unusable input as zero rather than failing
    amount = to_decimal(value)
    return amount if amount is not None else ZERO


def max_spend_usd(view: LedgerView) -> Decimal:
    """Upper bound of the USD spend slider."""
    return max(ZERO, view.get_balance(USER_WALLET, Currency.USD))


def max_spend_stable(view: LedgerView) -> Decimal:
    """Upper bound of the stablecoin spend slider."""
    return max(ZERO, view.get_balance(USER_WALLET, Currency.STABLE))


def max_sell_crypto(view: LedgerView) -> Decimal:
    """Upper bound of the crypto sell slider."""
    return max(ZERO, view.get_balance(USER_WALLET, Currency.CRYPTO))


def crypto_if_buy(view: LedgerView, stable_amount: Any) -> Decimal:
    """Crypto received for stable_amount at the current price (unrounded)."""
    return crypto_from_stable(_amount(stable_amount), view.crypto_price)


def stable_if_sell(view: LedgerView, crypto_amount: Any) -> Decimal:
    """Stablecoin received for crypto_amount, rounded as the sale would be."""
    if view.crypto_price <= 0:
        return ZERO
    return round_liquidity(stable_from_crypto(_amount(crypto_amount), view.crypto_price))


def crypto_if_buy_with_usd(view: LedgerView, usd_amount: Any) -> Decimal:
    """Crypto received for usd_amount through the 1:1 peg (unrounded)."""
    return crypto_from_stable(_amount(usd_amount), view.crypto_price)


def crypto_to_sell_for_usd(view: LedgerView, usd_amount: Any) -> Decimal:
    """Crypto that must be sold to receive usd_amount, rounded up as the sale would be."""
    return round_crypto_up(crypto_from_stable(_amount(usd_amount), view.crypto_price))
