"""
Core types and pure functions for the bank / stablecoin / crypto simulator.

This module provides the foundational data structures and protocols:
1. Protocols: LedgerView for read-only ledger access
2. Immutable data structures: Move, TransactionRecord, ValidationResult, OperationResult
3. Exceptions: LedgerError and domain-specific error types
4. Enums: Currency, TransactionType, ErrorKind, ViewMode
5. Amount helpers: to_decimal() coercion and round_to() truncation

All functions in this module are pure. No function can mutate ledger state directly.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_EVEN, ROUND_UP, getcontext
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Tuple, runtime_checkable


# ============================================================================
# DECIMAL CONTEXT CONFIGURATION
# ============================================================================
#
# Balances are Decimal so that truncation to 2/6/8 places is exact.
# prec=50 leaves ample headroom for price * quantity intermediates.
#
_SIM_DECIMAL_CONTEXT = getcontext()
_SIM_DECIMAL_CONTEXT.prec = 50
_SIM_DECIMAL_CONTEXT.rounding = ROUND_HALF_EVEN


# ============================================================================
# CONSTANTS
# ============================================================================

# Wallets. The system wallet issues and redeems crypto on behalf of the
# outside market and is exempt from every check.
BANK_WALLET = "bank"
USER_WALLET = "user"
MARKET_WALLET = "market"
SYSTEM_WALLET = "system"

WALLETS = (BANK_WALLET, USER_WALLET, MARKET_WALLET, SYSTEM_WALLET)

ZERO = Decimal("0")


# ============================================================================
# ENUMS
# ============================================================================

class Currency(Enum):
    """Balance denominations held by the ledger."""
    USD = "USD"
    STABLE = "STABLE"   # Generic stablecoin (USDT, USDC, ...)
    CRYPTO = "CRYPTO"   # Generic crypto (BTC, ETH, ...)


class TransactionType(Enum):
    """Kinds of history records. Values are the display labels."""
    BUY_STABLE = "Buy USDT"
    SELL_STABLE = "Sell USDT"
    BUY_CRYPTO = "Buy BTC"
    SELL_CRYPTO = "Sell BTC"


class ErrorKind(Enum):
    """
    Classification of an operation failure.

    INVALID_AMOUNT: amount is zero, negative, not a usable number, or has
                    more decimal places than the trade can carry.
    TRANSACTION_LIMIT_EXCEEDED: amount above the per-transaction ceiling.
    INSUFFICIENT_USER_BALANCE: the user's side cannot cover the amount.
    INSUFFICIENT_COUNTERPARTY_BALANCE: bank reserve or market liquidity too low.
    COMPENSATION_FAILED: a composed operation's second leg failed and the
                         undo of the first leg failed too; the ledger is
                         left partially executed.
    """
    INVALID_AMOUNT = "invalid_amount"
    TRANSACTION_LIMIT_EXCEEDED = "transaction_limit_exceeded"
    INSUFFICIENT_USER_BALANCE = "insufficient_user_balance"
    INSUFFICIENT_COUNTERPARTY_BALANCE = "insufficient_counterparty_balance"
    COMPENSATION_FAILED = "compensation_failed"


class ViewMode(Enum):
    """Dashboard presentation modes."""
    DETAILED = "detailed"
    SIMPLIFIED = "simplified"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LedgerError(Exception):
    """Base exception for programming errors against the ledger."""
    pass


class WalletNotRegistered(LedgerError):
    """Raised when addressing a wallet the ledger does not hold."""
    pass


class CurrencyNotSupported(LedgerError):
    """Raised when a currency argument is not a Currency member or code."""
    pass


# ============================================================================
# AMOUNT HELPERS
# ============================================================================

def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Coerce user input into a finite Decimal.

    Accepts int, float, Decimal and numeric strings. Returns None for
    anything that is not a usable number: None, bools, empty or
    non-numeric strings, NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        # str() keeps the shortest repr, so 0.1 stays 0.1
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip().replace(",", "").replace("_", ""))
        except InvalidOperation:
            return None
    else:
        return None
    if not result.is_finite():
        return None
    return result


def round_to(value: Decimal, places: int, rounding: str = ROUND_DOWN) -> Decimal:
    """
    Quantize a Decimal to a fixed number of decimal places.

    Balances truncate (ROUND_DOWN), which never credits more than the exact
    result. ROUND_UP is used where an amount must cover a target.
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    quantizer = Decimal(10) ** -places
    return value.quantize(quantizer, rounding=rounding)


def normalize_decimal(d: Decimal) -> str:
    """
    Render a Decimal without trailing zeros or scientific notation.

    Decimal("1000.00") -> "1000", Decimal("0.0050") -> "0.005".
    """
    normalized = d.normalize()
    if normalized == normalized.to_integral_value():
        return str(int(normalized))
    return format(normalized, 'f')


def coerce_currency(currency: Any) -> Currency:
    """Accept a Currency member or its code ("USD", "STABLE", "CRYPTO")."""
    if isinstance(currency, Currency):
        return currency
    try:
        return Currency(str(currency).upper())
    except ValueError:
        raise CurrencyNotSupported(f"Currency {currency!r} not supported") from None


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class LedgerView(Protocol):
    """
    Read-only interface to ledger state.

    Quotes and renderers accept a LedgerView to declare that they only
    read. BankLedger implements this protocol; tests use FakeView.
    """

    @property
    def crypto_price(self) -> Decimal:
        """Current USD price per unit of crypto."""
        ...

    def get_balance(self, wallet_id: str, currency: Currency) -> Decimal:
        """Balance of a currency in a wallet (Decimal("0") if never set)."""
        ...

    @property
    def history(self) -> Tuple['TransactionRecord', ...]:
        """Transaction records, most recent first."""
        ...


# ============================================================================
# CORE DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True, slots=True)
class Move:
    """
    A single transfer of value between two wallets.

    Attributes:
        quantity: Amount to transfer (finite, strictly positive Decimal).
        currency: Currency being transferred.
        source: Wallet debited.
        dest: Wallet credited.
    """
    quantity: Decimal
    currency: Currency
    source: str
    dest: str

    def __post_init__(self):
        if not self.source or not self.source.strip():
            raise ValueError("Move source cannot be empty")
        if not self.dest or not self.dest.strip():
            raise ValueError("Move dest cannot be empty")
        if not isinstance(self.currency, Currency):
            raise ValueError(f"Move currency must be Currency, got {type(self.currency)}")
        if not isinstance(self.quantity, Decimal):
            raise ValueError(f"Move quantity must be Decimal, got {type(self.quantity)}")
        if not self.quantity.is_finite():
            raise ValueError(f"Move quantity must be finite, got {self.quantity}")
        if self.quantity <= 0:
            raise ValueError("Move quantity must be positive")
        if self.source == self.dest:
            raise ValueError("Source and dest must be different")

    def __repr__(self) -> str:
        return f"Move({self.quantity} {self.currency.value}: {self.source}→{self.dest})"


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """
    An executed, immutable history entry.

    Attributes:
        id: Creation-time-derived identifier, unique per append
        type: What kind of trade this was
        details: Human-readable description
        created_at: Wall-clock time of creation
        moves: Balance transfers the record applied
    """
    id: str
    type: TransactionType
    details: str
    created_at: datetime
    moves: Tuple[Move, ...] = ()

    @property
    def timestamp(self) -> str:
        """Wall-clock display string, e.g. '09:30:15 AM'."""
        return self.created_at.strftime("%I:%M:%S %p")

    def __repr__(self) -> str:
        return f"TransactionRecord({self.id}, {self.type.value}: {self.details})"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of a single validation rule or a rule chain."""
    is_valid: bool
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def invalid(cls, error: str, error_kind: ErrorKind) -> 'ValidationResult':
        return cls(False, error, error_kind)


VALID = ValidationResult(True)


@dataclass(frozen=True, slots=True)
class OperationResult:
    """
    Outcome of a ledger operation. Operations never raise for bad input;
    they return one of these.

    Attributes:
        success: True if every mutation was applied
        error: Display message when success is False
        error_kind: Classification when success is False
        received: Amount credited to the user in the target currency
        record: The history record appended (last leg for composed operations)
        records: Every history record appended, in execution order
        compensated: True when a composed operation undid its first leg
    """
    success: bool
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    received: Optional[Decimal] = None
    record: Optional[TransactionRecord] = None
    records: Tuple[TransactionRecord, ...] = field(default_factory=tuple)
    compensated: bool = False

    @classmethod
    def ok(
        cls,
        received: Optional[Decimal] = None,
        records: Tuple[TransactionRecord, ...] = (),
    ) -> 'OperationResult':
        records = tuple(records)
        return cls(
            success=True,
            received=received,
            record=records[-1] if records else None,
            records=records,
        )

    @classmethod
    def fail(
        cls,
        error: str,
        error_kind: ErrorKind,
        records: Tuple[TransactionRecord, ...] = (),
        compensated: bool = False,
    ) -> 'OperationResult':
        return cls(
            success=False,
            error=error,
            error_kind=error_kind,
            records=tuple(records),
            compensated=compensated,
        )

    @classmethod
    def from_validation(cls, result: ValidationResult) -> 'OperationResult':
        return cls.fail(result.error, result.error_kind)

    def as_dict(self) -> Dict[str, Any]:
        """The {success, error} shape the presentation layer consumes."""
        if self.success:
            return {"success": True}
        return {"success": False, "error": self.error}
