"""
formatting.py - Display formatting for balances

Grouped amounts ("$10,000", "1,234.5 USDT") keep at most 3 fraction
digits with trailing zeros dropped. Crypto amounts are fixed-point with at
least 6 places ("0.01000000 BTC").
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

from .config import DEFAULT_CONFIG
from .core import to_decimal


CURRENCY_TYPE_USD = 'usd'
CURRENCY_TYPE_STABLE = 'stable'
CURRENCY_TYPE_CRYPTO = 'crypto'
CURRENCY_TYPE_DEFAULT = 'default'


def _localize(amount: Any) -> str:
    """Group thousands, at most 3 fraction digits."""
    value = to_decimal(amount)
    if value is None:
        return str(amount)
    value = value.quantize(Decimal("0.001"), rounding=ROUND_HALF_UP).normalize()
    if value == value.to_integral_value():
        value = value.quantize(Decimal(1))
    return f"{value:,f}"


def _fixed(amount: Any, places: int) -> str:
    value = to_decimal(amount)
    if value is None:
        return str(amount)
    return f"{value.quantize(Decimal(10) ** -places, rounding=ROUND_HALF_UP):f}"


def format_usd(amount: Any) -> str:
    return f"${_localize(amount)}"


def format_stable(amount: Any, symbol: str = DEFAULT_CONFIG.stable_symbol) -> str:
    return f"{_localize(amount)} {symbol}"


def _crypto_value(amount: Any, decimals: int) -> str:
    return _fixed(amount, max(decimals, 6))


def format_crypto(
    amount: Any,
    decimals: int = DEFAULT_CONFIG.precision.crypto,
    symbol: str = DEFAULT_CONFIG.crypto_symbol,
) -> str:
    return f"{_crypto_value(amount, decimals)} {symbol}"


def _usd_equivalent(amount: Any, price: Any) -> str:
    value = to_decimal(amount)
    rate = to_decimal(price)
    if value is None or rate is None:
        return "0.00"
    return _fixed(value * rate, 2)


def format_crypto_with_usd(
    amount: Any,
    price: Any,
    decimals: int = DEFAULT_CONFIG.precision.crypto,
    symbol: str = DEFAULT_CONFIG.crypto_symbol,
) -> str:
    """'0.01000000 BTC - Equivalent: $1000.00 USD'"""
    return f"{format_crypto(amount, decimals, symbol)} - Equivalent: ${_usd_equivalent(amount, price)} USD"


def format_crypto_with_usd_separate(
    amount: Any,
    price: Any,
    decimals: int = DEFAULT_CONFIG.precision.crypto,
    symbol: str = DEFAULT_CONFIG.crypto_symbol,
) -> Dict[str, str]:
    """Same as format_crypto_with_usd, split for two-line balance cards."""
    return {
        'main_value': f"{_crypto_value(amount, decimals)} {symbol}",
        'usd_equivalent': f"Equivalent: ${_usd_equivalent(amount, price)} USD",
    }


def get_currency_type(currency: str) -> str:
    """Map a currency code to its display family."""
    if currency == 'USD':
        return CURRENCY_TYPE_USD
    if currency in ('USDT', 'STABLE'):
        return CURRENCY_TYPE_STABLE
    if currency in ('BTC', 'CRYPTO'):
        return CURRENCY_TYPE_CRYPTO
    return CURRENCY_TYPE_DEFAULT


def format_currency(amount: Any, currency_type: str, crypto_price: Optional[Any] = None):
    """
    Format an amount by display family.

    Crypto with a price returns the dict from format_crypto_with_usd_separate;
    every other case returns a string.
    """
    if currency_type == CURRENCY_TYPE_USD:
        return format_usd(amount)
    if currency_type == CURRENCY_TYPE_STABLE:
        return format_stable(amount)
    if currency_type == CURRENCY_TYPE_CRYPTO:
        if crypto_price:
            return format_crypto_with_usd_separate(amount, crypto_price)
        return format_crypto(amount)
    return _localize(amount)
