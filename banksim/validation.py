"""
validation.py - Pure validation rules for ledger operations

Every rule returns a ValidationResult and never raises. Rules are grouped
by the order in which operations apply them:

1. validate_positive_amount,
   validate_amount_precision          (usable amount at the trade's precision)
2. validate_*_transaction_limit       (per-transaction ceilings)
3. validate_user_*_balance            (user side can cover the amount)
4. validate_bank_*_balance,
   validate_market_liquidity          (counterparty can cover the amount)

Operations compose rules with rule() and evaluate them with
run_validations(), which stops at the first failure.

Example:
    result = run_validations([
        rule(validate_positive_amount, amount),
        rule(validate_usd_transaction_limit, amount),
        rule(validate_user_usd_balance, amount, ledger.user_usd),
    ])
    if not result.is_valid:
        print(result.error)
"""

from __future__ import annotations
from decimal import Decimal
from typing import Any, Callable, Iterable

from .config import DEFAULT_CONFIG, SimulatorConfig
from .core import VALID, ErrorKind, ValidationResult, round_to, to_decimal


Rule = Callable[[], ValidationResult]


def validate_positive_amount(amount: Any, config: SimulatorConfig = DEFAULT_CONFIG) -> ValidationResult:
    """Fail if the amount is missing, not a number, zero or negative."""
    value = to_decimal(amount)
    if value is None or value <= 0:
        return ValidationResult.invalid(config.message('INVALID_AMOUNT'), ErrorKind.INVALID_AMOUNT)
    return VALID


def validate_amount_precision(
    amount: Decimal,
    places: int,
    config: SimulatorConfig = DEFAULT_CONFIG,
) -> ValidationResult:
    """
    Fail if the amount has more decimal places than places.

    places is the coarsest precision among the cells the trade touches, so
    an accepted amount is debited and credited without truncation.
    """
    if amount != round_to(amount, places):
        return ValidationResult.invalid(
            config.message('TOO_MANY_DECIMALS', places=places), ErrorKind.INVALID_AMOUNT
        )
    return VALID


def _validate_transaction_limit(amount: Decimal, limit: Decimal, error: str) -> ValidationResult:
    if amount > limit:
        return ValidationResult.invalid(error, ErrorKind.TRANSACTION_LIMIT_EXCEEDED)
    return VALID


def validate_usd_transaction_limit(amount: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> ValidationResult:
    return _validate_transaction_limit(
        amount, config.limits.max_per_transaction_usd, config.message('TRANSACTION_LIMIT_USD')
    )


def validate_stable_transaction_limit(amount: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> ValidationResult:
    return _validate_transaction_limit(
        amount, config.limits.max_per_transaction_stable, config.message('TRANSACTION_LIMIT_STABLE')
    )


def validate_crypto_transaction_limit(amount: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> ValidationResult:
    """Ceiling on the stablecoin side of a crypto trade."""
    return _validate_transaction_limit(
        amount, config.limits.max_per_transaction_crypto, config.message('TRANSACTION_LIMIT_CRYPTO')
    )


def _validate_balance(amount: Decimal, balance: Decimal, error: str, kind: ErrorKind) -> ValidationResult:
    if amount > balance:
        return ValidationResult.invalid(error, kind)
    return VALID


def validate_user_usd_balance(amount: Decimal, balance: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> ValidationResult:
    return _validate_balance(
        amount, balance, config.message('INSUFFICIENT_USER_USD'), ErrorKind.INSUFFICIENT_USER_BALANCE
    )


def validate_user_stable_balance(amount: Decimal, balance: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> ValidationResult:
    return _validate_balance(
        amount, balance, config.message('INSUFFICIENT_USER_STABLE'), ErrorKind.INSUFFICIENT_USER_BALANCE
    )


def validate_user_crypto_balance(amount: Decimal, balance: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> ValidationResult:
    return _validate_balance(
        amount, balance, config.message('INSUFFICIENT_USER_CRYPTO'), ErrorKind.INSUFFICIENT_USER_BALANCE
    )


def validate_bank_usd_balance(amount: Decimal, balance: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> ValidationResult:
    return _validate_balance(
        amount, balance, config.message('INSUFFICIENT_BANK_USD'),
        ErrorKind.INSUFFICIENT_COUNTERPARTY_BALANCE,
    )


def validate_bank_stable_balance(amount: Decimal, balance: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> ValidationResult:
    return _validate_balance(
        amount, balance, config.message('INSUFFICIENT_BANK_STABLE'),
        ErrorKind.INSUFFICIENT_COUNTERPARTY_BALANCE,
    )


def validate_market_liquidity(amount: Decimal, liquidity: Decimal, config: SimulatorConfig = DEFAULT_CONFIG) -> ValidationResult:
    return _validate_balance(
        amount, liquidity, config.message('INSUFFICIENT_MARKET_LIQUIDITY'),
        ErrorKind.INSUFFICIENT_COUNTERPARTY_BALANCE,
    )


def rule(validator: Callable[..., ValidationResult], *args, **kwargs) -> Rule:
    """Defer a validator call until the runner reaches it."""
    return lambda: validator(*args, **kwargs)


def run_validations(rules: Iterable[Rule]) -> ValidationResult:
    """
    Evaluate rules in order and return the first failure.

    Rules after the first failure are never evaluated. Returns VALID when
    every rule passes (or the sequence is empty).
    """
    for r in rules:
        result = r()
        if not result.is_valid:
            return result
    return VALID
