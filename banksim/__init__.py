"""
banksim - Bank / Stablecoin / Crypto Exchange Simulator

An in-memory ledger of a bank holding USD and a stablecoin, one user, and a
synthetic crypto market. The user trades USD <-> stablecoin with the bank and
stablecoin <-> crypto with the market; every trade is validated first and then
applied in full or not at all.

Usage:
    from banksim import BankLedger, buy_crypto_with_usd

    ledger = BankLedger("main", verbose=False)

    result = ledger.buy_stable(1000)           # USD -> USDT with the bank
    assert result.success

    result = ledger.buy_crypto(5000)           # USDT -> BTC with the market
    if not result.success:
        print(result.error)                    # "Insufficient user stablecoins."

    buy_crypto_with_usd(ledger, 100)           # USD -> USDT -> BTC in two legs
    for record in ledger.history:              # most recent first
        print(record.timestamp, record.type.value, record.details)
"""

# Core types
from .core import (
    LedgerView,
    Move,
    TransactionRecord,
    ValidationResult,
    OperationResult,
    VALID,
    Currency,
    TransactionType,
    ErrorKind,
    ViewMode,
    LedgerError,
    WalletNotRegistered,
    CurrencyNotSupported,
    BANK_WALLET,
    USER_WALLET,
    MARKET_WALLET,
    SYSTEM_WALLET,
    to_decimal,
    round_to,
)

# Configuration
from .config import (
    SimulatorConfig,
    InitialBalances,
    TransactionLimits,
    Precision,
    PriceBounds,
    DEFAULT_CONFIG,
)

# Ledger
from .ledger import BankLedger

# Composed operations
from .composed import buy_crypto_with_usd, sell_crypto_for_usd

# Validation
from .validation import (
    rule,
    run_validations,
    validate_positive_amount,
    validate_amount_precision,
    validate_usd_transaction_limit,
    validate_stable_transaction_limit,
    validate_crypto_transaction_limit,
    validate_user_usd_balance,
    validate_user_stable_balance,
    validate_user_crypto_balance,
    validate_bank_usd_balance,
    validate_bank_stable_balance,
    validate_market_liquidity,
)

# Conversion
from .conversion import (
    crypto_from_stable,
    stable_from_crypto,
    usd_to_stable,
    stable_to_usd,
    round_usd,
    round_stable,
    round_crypto,
    round_liquidity,
    round_crypto_up,
)

# Quotes
from .quotes import (
    max_spend_usd,
    max_spend_stable,
    max_sell_crypto,
    crypto_if_buy,
    stable_if_sell,
    crypto_if_buy_with_usd,
    crypto_to_sell_for_usd,
)

# Formatting and rendering
from .formatting import (
    format_usd,
    format_stable,
    format_crypto,
    format_crypto_with_usd,
    format_crypto_with_usd_separate,
    get_currency_type,
    format_currency,
)
from .report import (
    render_balance_card,
    render_market_panel,
    render_history,
    render_dashboard,
)

__all__ = [
    # Core
    'LedgerView', 'Move', 'TransactionRecord', 'ValidationResult', 'OperationResult', 'VALID',
    'Currency', 'TransactionType', 'ErrorKind', 'ViewMode',
    'LedgerError', 'WalletNotRegistered', 'CurrencyNotSupported',
    'BANK_WALLET', 'USER_WALLET', 'MARKET_WALLET', 'SYSTEM_WALLET',
    'to_decimal', 'round_to',
    # Configuration
    'SimulatorConfig', 'InitialBalances', 'TransactionLimits', 'Precision', 'PriceBounds',
    'DEFAULT_CONFIG',
    # Ledger
    'BankLedger',
    # Composed
    'buy_crypto_with_usd', 'sell_crypto_for_usd',
    # Validation
    'rule', 'run_validations', 'validate_positive_amount', 'validate_amount_precision',
    'validate_usd_transaction_limit', 'validate_stable_transaction_limit',
    'validate_crypto_transaction_limit',
    'validate_user_usd_balance', 'validate_user_stable_balance', 'validate_user_crypto_balance',
    'validate_bank_usd_balance', 'validate_bank_stable_balance', 'validate_market_liquidity',
    # Conversion
    'crypto_from_stable', 'stable_from_crypto', 'usd_to_stable', 'stable_to_usd',
    'round_usd', 'round_stable', 'round_crypto', 'round_liquidity', 'round_crypto_up',
    # Quotes
    'max_spend_usd', 'max_spend_stable', 'max_sell_crypto',
    'crypto_if_buy', 'stable_if_sell', 'crypto_if_buy_with_usd', 'crypto_to_sell_for_usd',
    # Formatting and rendering
    'format_usd', 'format_stable', 'format_crypto', 'format_crypto_with_usd',
    'format_crypto_with_usd_separate', 'get_currency_type', 'format_currency',
    'render_balance_card', 'render_market_panel', 'render_history', 'render_dashboard',
]

__version__ = '1.0.0'
