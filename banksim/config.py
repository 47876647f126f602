"""
config.py - Simulator configuration

Centralizes the static numbers the simulator runs on: initial balances,
per-transaction limits, rounding precision per currency, conversion rates,
price slider bounds, display symbols and error messages.

SimulatorConfig is frozen. Build a variant with dataclasses.replace():

    from dataclasses import replace
    cfg = replace(DEFAULT_CONFIG, initial_crypto_price=Decimal("50000"))
    ledger = BankLedger("main", config=cfg)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class InitialBalances:
    """Balances restored by BankLedger.reset()."""
    bank_usd: Decimal = Decimal("1000000")
    bank_stable: Decimal = Decimal("1000000")
    user_usd: Decimal = Decimal("10000")
    user_stable: Decimal = Decimal("0")
    user_crypto: Decimal = Decimal("0")
    market_liquidity: Decimal = Decimal("5000000")


@dataclass(frozen=True)
class TransactionLimits:
    """
    Per-transaction ceilings (enforced) and balance caps (display only).

    The balance caps bound the UI sliders; no operation checks them.
    """
    max_per_transaction_usd: Decimal = Decimal("500000")
    max_per_transaction_stable: Decimal = Decimal("500000")
    max_per_transaction_crypto: Decimal = Decimal("1000000")
    max_user_balance_usd: Decimal = Decimal("200000")
    max_user_balance_stable: Decimal = Decimal("100000")
    max_bank_balance: Decimal = Decimal("5000000")


@dataclass(frozen=True)
class Precision:
    """Decimal places kept after every balance-producing step."""
    usd: int = 2
    stable: int = 6
    crypto: int = 8
    liquidity: int = 2


@dataclass(frozen=True)
class PriceBounds:
    """Crypto price slider range."""
    min_price: Decimal = Decimal("0")
    max_price: Decimal = Decimal("1000000")
    step: Decimal = Decimal("1000")


DEFAULT_ERROR_MESSAGES: Mapping[str, str] = MappingProxyType({
    'INVALID_AMOUNT': 'Enter a positive amount.',
    'TOO_MANY_DECIMALS': 'Amount allows at most {places} decimal places.',
    'INVALID_PRICE': 'Crypto price must be positive.',
    'ZERO_PROCEEDS': 'Sale proceeds round to zero.',
    'ZERO_CRYPTO': 'Amount is too small to buy any BTC.',
    'INSUFFICIENT_USER_USD': 'Insufficient user USD.',
    'INSUFFICIENT_USER_STABLE': 'Insufficient user stablecoins.',
    'INSUFFICIENT_USER_CRYPTO': 'Insufficient BTC balance.',
    'INSUFFICIENT_BANK_USD': 'Bank has insufficient USD.',
    'INSUFFICIENT_BANK_STABLE': 'Bank has insufficient stablecoin reserves.',
    'INSUFFICIENT_MARKET_LIQUIDITY': 'Insufficient market liquidity.',
    'TRANSACTION_LIMIT_USD': 'Per-transaction limit is 500,000 USD.',
    'TRANSACTION_LIMIT_STABLE': 'Per-transaction limit is 500,000 USDT.',
    'TRANSACTION_LIMIT_CRYPTO': 'Per-transaction limit is 1,000,000 USDT.',
    'COMPENSATION_FAILED': '{leg_error} Undo of the first leg also failed: {undo_error}',
})


@dataclass(frozen=True)
class SimulatorConfig:
    """Configuration for a BankLedger. Modify via replace() to experiment."""
    initial_balances: InitialBalances = field(default_factory=InitialBalances)
    initial_crypto_price: Decimal = Decimal("100000")
    limits: TransactionLimits = field(default_factory=TransactionLimits)
    precision: Precision = field(default_factory=Precision)
    price_bounds: PriceBounds = field(default_factory=PriceBounds)

    # Fixed 1:1 peg
    usd_to_stable_rate: Decimal = Decimal("1")
    stable_to_usd_rate: Decimal = Decimal("1")

    stable_symbol: str = "USDT"
    crypto_symbol: str = "BTC"

    error_messages: Mapping[str, str] = field(default_factory=lambda: DEFAULT_ERROR_MESSAGES)

    def message(self, key: str, **kwargs) -> str:
        """Look up an error message, formatting any placeholders."""
        text = self.error_messages[key]
        return text.format(**kwargs) if kwargs else text


DEFAULT_CONFIG = SimulatorConfig()
