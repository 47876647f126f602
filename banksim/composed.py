"""
composed.py - USD <-> crypto trades composed from two ledger operations

The simplified view lets the user trade USD for crypto directly. Under the
hood each trade runs two single-pair operations (legs) on the ledger:

    buy_crypto_with_usd:   buy_stable(usd)        then  buy_crypto(stable)
    sell_crypto_for_usd:   sell_crypto(crypto)    then  sell_stable(usd)

Legs are individually all-or-nothing, but the pair is not a transaction.
If the second leg fails the first one is undone by a compensating
operation (sell_stable / buy_crypto). Compensation is best-effort: when it
fails too, the result carries ErrorKind.COMPENSATION_FAILED and the ledger
is left with the first leg applied.

Both functions hold ledger.lock across all legs.
"""

from __future__ import annotations
from decimal import Decimal
from typing import Any

from .conversion import crypto_from_stable, round_crypto_up, usd_to_stable
from .core import ErrorKind, OperationResult, ValidationResult, to_decimal
from .ledger import BankLedger, STABLE_MARKET_CELLS, USD_STABLE_CELLS
from .validation import (
    rule, run_validations,
    validate_positive_amount, validate_amount_precision, validate_usd_transaction_limit,
    validate_user_usd_balance, validate_user_crypto_balance,
    validate_bank_stable_balance, validate_market_liquidity,
)


def _second_leg_failed(
    ledger: BankLedger,
    first: OperationResult,
    second: OperationResult,
    undo: OperationResult,
) -> OperationResult:
    """Combine a failed second leg with the outcome of its compensation."""
    records = first.records + undo.records
    if undo.success:
        if ledger.verbose:
            print(f"⚠️  COMPENSATED: first leg undone after: {second.error}")
        return OperationResult.fail(second.error, second.error_kind, records=records, compensated=True)

    message = ledger.config.message('COMPENSATION_FAILED', leg_error=second.error, undo_error=undo.error)
    if ledger.verbose:
        print(f"✗ COMPENSATION FAILED: {message}")
    return OperationResult.fail(message, ErrorKind.COMPENSATION_FAILED, records=records)


def buy_crypto_with_usd(ledger: BankLedger, usd_amount: Any) -> OperationResult:
    """
    Spend USD on crypto via the stablecoin.

    Validations before any leg runs: positive, precision (cents), USD limit,
    user USD, bank stablecoin reserve, market liquidity.

    Returns:
        On success, received is the crypto credited and records holds the
        BUY_STABLE and BUY_CRYPTO records in that order.
    """
    cfg = ledger.config
    with ledger.lock:
        usd = to_decimal(usd_amount)
        places = ledger._trade_places(USD_STABLE_CELLS + STABLE_MARKET_CELLS)
        check = run_validations([
            rule(validate_positive_amount, usd_amount, cfg),
            rule(validate_amount_precision, usd, places, cfg),
            rule(validate_usd_transaction_limit, usd, cfg),
            rule(validate_user_usd_balance, usd, ledger.user_usd, cfg),
            rule(validate_bank_stable_balance, usd, ledger.bank_stable, cfg),
            rule(validate_market_liquidity, usd, ledger.market_liquidity, cfg),
        ])
        if not check.is_valid:
            return ledger._reject("buy_crypto_with_usd", check)

        first = ledger.buy_stable(usd)
        if not first.success:
            return first

        stable = usd_to_stable(usd, cfg)
        second = ledger.buy_crypto(stable)
        if not second.success:
            undo = ledger.sell_stable(stable)
            return _second_leg_failed(ledger, first, second, undo)

        return OperationResult.ok(received=second.received, records=first.records + second.records)


def sell_crypto_for_usd(ledger: BankLedger, usd_amount: Any) -> OperationResult:
    """
    Sell enough crypto to realize exactly usd_amount, via the stablecoin.

    The crypto sold is usd / price rounded up to crypto precision, so the
    sale proceeds cover usd_amount. The second leg sells usd_amount worth of
    stablecoin; any surplus from rounding up stays with the user as
    stablecoin.

    Validations before any leg runs: positive, precision (cents), USD limit,
    market liquidity, positive price, user crypto.

    Returns:
        On success, received is the USD credited (usd_amount) and records
        holds the SELL_CRYPTO and SELL_STABLE records in that order.
    """
    cfg = ledger.config
    with ledger.lock:
        usd = to_decimal(usd_amount)
        check = run_validations([
            rule(validate_positive_amount, usd_amount, cfg),
            rule(validate_amount_precision, usd, ledger._trade_places(USD_STABLE_CELLS), cfg),
            rule(validate_usd_transaction_limit, usd, cfg),
            rule(validate_market_liquidity, usd, ledger.market_liquidity, cfg),
        ])
        if check.is_valid and ledger.crypto_price <= 0:
            check = ValidationResult.invalid(cfg.message('INVALID_PRICE'), ErrorKind.INVALID_AMOUNT)
        if not check.is_valid:
            return ledger._reject("sell_crypto_for_usd", check)

        stable = usd_to_stable(usd, cfg)
        crypto_needed = round_crypto_up(crypto_from_stable(stable, ledger.crypto_price), cfg)
        check = validate_user_crypto_balance(crypto_needed, ledger.user_crypto, cfg)
        if not check.is_valid:
            return ledger._reject("sell_crypto_for_usd", check)

        first = ledger.sell_crypto(crypto_needed)
        if not first.success:
            return first

        second = ledger.sell_stable(stable)
        if not second.success:
            proceeds: Decimal = first.received
            undo = ledger.buy_crypto(proceeds)
            return _second_leg_failed(ledger, first, second, undo)

        return OperationResult.ok(received=second.received, records=first.records + second.records)
