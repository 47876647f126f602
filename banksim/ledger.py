"""
ledger.py - Stateful bank / user / market ledger

BankLedger is the central state manager for the simulator. It is the only
module that mutates balances, so every change is validated and recorded.

Key responsibilities:
    - Implements LedgerView protocol for read-only access by quotes and renderers
    - Runs the single-pair operations (buy/sell stablecoin, buy/sell crypto):
      validate, then apply all moves and append one history record, or apply nothing
    - Rounds every balance-producing step to the cell's precision
    - Offers unchecked direct setters for manual overrides, reset(), clone()
      and conservation checks
"""

from __future__ import annotations
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
import threading

from .config import DEFAULT_CONFIG, SimulatorConfig
from .conversion import (
    crypto_from_stable, stable_from_crypto, usd_to_stable, stable_to_usd,
    round_crypto, round_liquidity,
)
from .core import (
    # Types
    Currency, Move, TransactionRecord, TransactionType, ErrorKind,
    OperationResult, ValidationResult,
    # Constants
    BANK_WALLET, USER_WALLET, MARKET_WALLET, SYSTEM_WALLET, WALLETS, ZERO,
    # Exceptions
    WalletNotRegistered,
    # Helper functions
    coerce_currency, normalize_decimal, round_to, to_decimal,
)
from .validation import (
    rule, run_validations,
    validate_positive_amount, validate_amount_precision,
    validate_usd_transaction_limit, validate_stable_transaction_limit,
    validate_crypto_transaction_limit,
    validate_user_usd_balance, validate_user_stable_balance, validate_user_crypto_balance,
    validate_bank_usd_balance, validate_bank_stable_balance, validate_market_liquidity,
)


# Cells an amount passes through, per trade pair
USD_STABLE_CELLS = (
    (USER_WALLET, Currency.USD), (BANK_WALLET, Currency.USD),
    (BANK_WALLET, Currency.STABLE), (USER_WALLET, Currency.STABLE),
)
STABLE_MARKET_CELLS = ((USER_WALLET, Currency.STABLE), (MARKET_WALLET, Currency.STABLE))
CRYPTO_CELLS = ((USER_WALLET, Currency.CRYPTO), (SYSTEM_WALLET, Currency.CRYPTO))


class BankLedger:
    """
    In-memory ledger of a bank, one user and a synthetic market.

    Implements the LedgerView protocol, allowing the ledger to be passed to
    quote and rendering functions that only read.

    Balances live in cells keyed by (wallet, currency):
        bank/USD, bank/STABLE      - bank reserves
        user/USD, user/STABLE,
        user/CRYPTO                - user holdings
        market/STABLE              - market liquidity
        system/CRYPTO              - crypto issued to / redeemed from the outside market

    Thread Safety:
        Every public operation runs under self.lock (re-entrant), so composed
        operations can hold it across both legs.

    Example:
        ledger = BankLedger("main", verbose=False)
        result = ledger.buy_stable(1000)
        if not result.success:
            print(result.error)
        ledger.buy_crypto(1000)
        ledger.user_crypto        # Decimal('0.01000000')
    """

    def __init__(
        self,
        name: str = "main",
        config: SimulatorConfig = DEFAULT_CONFIG,
        verbose: bool = True,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Create a ledger loaded with the configured initial balances.

        Args:
            name: Ledger identifier
            config: Limits, precisions and initial values (default: DEFAULT_CONFIG)
            verbose: Print one line per applied or rejected operation (default: True)
            clock: Source of record timestamps (default: datetime.now)
        """
        self.name = name
        self.config = config
        self.verbose = verbose
        self.clock = clock or datetime.now
        self.lock = threading.RLock()
        self.balances: Dict[str, Dict[Currency, Decimal]] = {}
        self.transaction_log: List[TransactionRecord] = []
        self._crypto_price: Decimal = ZERO
        self._next_sequence: int = 0
        self._load_initial_state()

    def _load_initial_state(self) -> None:
        initial = self.config.initial_balances
        self.balances = {w: defaultdict(lambda: ZERO) for w in WALLETS}
        self.balances[BANK_WALLET][Currency.USD] = initial.bank_usd
        self.balances[BANK_WALLET][Currency.STABLE] = initial.bank_stable
        self.balances[USER_WALLET][Currency.USD] = initial.user_usd
        self.balances[USER_WALLET][Currency.STABLE] = initial.user_stable
        self.balances[USER_WALLET][Currency.CRYPTO] = initial.user_crypto
        self.balances[MARKET_WALLET][Currency.STABLE] = initial.market_liquidity
        self._crypto_price = self.config.initial_crypto_price
        self.transaction_log = []
        self._next_sequence = 0

    # ========================================================================
    # LedgerView PROTOCOL IMPLEMENTATION (read-only methods)
    # ========================================================================

    @property
    def crypto_price(self) -> Decimal:
        """Current USD price per unit of crypto."""
        return self._crypto_price

    def get_balance(self, wallet_id: str, currency: Any) -> Decimal:
        """
        Get the balance of a currency in a wallet.

        Args:
            wallet_id: One of "bank", "user", "market", "system"
            currency: Currency member or code

        Returns:
            Current balance (Decimal("0") if never set)

        Raises:
            WalletNotRegistered: If the wallet is unknown
            CurrencyNotSupported: If the currency is unknown
        """
        if wallet_id not in self.balances:
            raise WalletNotRegistered(f"Wallet {wallet_id} not registered")
        return self.balances[wallet_id].get(coerce_currency(currency), ZERO)

    @property
    def history(self) -> Tuple[TransactionRecord, ...]:
        """Transaction records, most recent first."""
        return tuple(reversed(self.transaction_log))

    @property
    def bank_usd(self) -> Decimal:
        return self.get_balance(BANK_WALLET, Currency.USD)

    @property
    def bank_stable(self) -> Decimal:
        return self.get_balance(BANK_WALLET, Currency.STABLE)

    @property
    def user_usd(self) -> Decimal:
        return self.get_balance(USER_WALLET, Currency.USD)

    @property
    def user_stable(self) -> Decimal:
        return self.get_balance(USER_WALLET, Currency.STABLE)

    @property
    def user_crypto(self) -> Decimal:
        return self.get_balance(USER_WALLET, Currency.CRYPTO)

    @property
    def market_liquidity(self) -> Decimal:
        """Stablecoin depth available in the synthetic market."""
        return self.get_balance(MARKET_WALLET, Currency.STABLE)

    def balances_snapshot(self) -> Dict[str, Decimal]:
        """Named balances plus price, for comparisons and display."""
        return {
            'bank_usd': self.bank_usd,
            'bank_stable': self.bank_stable,
            'user_usd': self.user_usd,
            'user_stable': self.user_stable,
            'user_crypto': self.user_crypto,
            'market_liquidity': self.market_liquidity,
            'crypto_price': self.crypto_price,
        }

    def total_supply(self, currency: Any, wallets: Optional[Iterable[str]] = None) -> Decimal:
        """
        Sum a currency across wallets.

        Wallets are sorted before summation to keep accumulation order fixed.

        Args:
            currency: Currency member or code
            wallets: Wallets to include (default: all, including the system wallet)
        """
        currency = coerce_currency(currency)
        selected = sorted(wallets) if wallets is not None else sorted(self.balances)
        return sum((self.get_balance(w, currency) for w in selected), ZERO)

    def verify_conservation(
        self,
        expected_supplies: Optional[Dict[Any, Decimal]] = None,
        tolerance: Decimal = Decimal("1e-9"),
    ) -> Dict[str, Any]:
        """
        Verify that per-currency totals match expected values.

        Without expected_supplies this just reports current totals.

        Returns:
            Dict with keys:
            - 'valid': bool - True if every expected total matches within tolerance
            - 'supplies': Dict[Currency, Decimal] - current totals across all wallets
            - 'discrepancies': List[Dict] - unit, expected, actual, difference

        Example:
            before = ledger.verify_conservation()['supplies']
            ledger.buy_stable(100)
            assert ledger.verify_conservation(before)['valid']
        """
        supplies = {currency: self.total_supply(currency) for currency in Currency}
        discrepancies = []

        for key, expected in (expected_supplies or {}).items():
            currency = coerce_currency(key)
            actual = supplies[currency]
            difference = abs(actual - expected)
            if difference > tolerance:
                discrepancies.append({
                    'currency': currency,
                    'expected': expected,
                    'actual': actual,
                    'difference': difference,
                })

        return {
            'valid': len(discrepancies) == 0,
            'supplies': supplies,
            'discrepancies': discrepancies,
        }

    # ========================================================================
    # DIRECT SETTERS (Mutating, unchecked)
    # ========================================================================

    def set_balance(self, wallet_id: str, currency: Any, quantity: Any) -> None:
        """
        Overwrite a balance directly.

        WARNING: This bypasses validation and records nothing in the history.
        It exists for manual overrides (sliders, test setup).

        Raises:
            WalletNotRegistered: If the wallet is unknown
            CurrencyNotSupported: If the currency is unknown
            ValueError: If quantity is not a number
        """
        if wallet_id not in self.balances:
            raise WalletNotRegistered(f"Wallet {wallet_id} not registered")
        currency = coerce_currency(currency)
        value = to_decimal(quantity)
        if value is None:
            raise ValueError(f"Balance must be a number, got {quantity!r}")
        with self.lock:
            self.balances[wallet_id][currency] = value

    def set_bank_usd(self, value: Any) -> None:
        self.set_balance(BANK_WALLET, Currency.USD, value)

    def set_bank_stable(self, value: Any) -> None:
        self.set_balance(BANK_WALLET, Currency.STABLE, value)

    def set_user_usd(self, value: Any) -> None:
        self.set_balance(USER_WALLET, Currency.USD, value)

    def set_user_stable(self, value: Any) -> None:
        self.set_balance(USER_WALLET, Currency.STABLE, value)

    def set_user_crypto(self, value: Any) -> None:
        self.set_balance(USER_WALLET, Currency.CRYPTO, value)

    def set_market_liquidity(self, value: Any) -> None:
        self.set_balance(MARKET_WALLET, Currency.STABLE, value)

    def set_crypto_price(self, value: Any) -> None:
        """Overwrite the crypto price. Unchecked; zero and negative prices are accepted."""
        price = to_decimal(value)
        if price is None:
            raise ValueError(f"Price must be a number, got {value!r}")
        with self.lock:
            self._crypto_price = price

    def reset(self) -> None:
        """Restore initial balances and price, and clear the history."""
        with self.lock:
            self._load_initial_state()
        if self.verbose:
            print(f"↺ RESET: {self.name} restored to initial balances")

    # ========================================================================
    # OPERATIONS (Mutating)
    # ========================================================================

    def buy_stable(self, amount: Any) -> OperationResult:
        """
        USD -> stablecoin at the 1:1 peg. The bank sells from its reserve.

        Validations: positive, precision (cents), USD limit, user USD, bank
        stablecoin reserve.
        """
        cfg = self.config
        with self.lock:
            amt = to_decimal(amount)
            check = run_validations([
                rule(validate_positive_amount, amount, cfg),
                rule(validate_amount_precision, amt, self._trade_places(USD_STABLE_CELLS), cfg),
                rule(validate_usd_transaction_limit, amt, cfg),
                rule(validate_user_usd_balance, amt, self.user_usd, cfg),
                rule(validate_bank_stable_balance, amt, self.bank_stable, cfg),
            ])
            if not check.is_valid:
                return self._reject("buy_stable", check)

            stable = usd_to_stable(amt, cfg)
            moves = [
                Move(amt, Currency.USD, USER_WALLET, BANK_WALLET),
                Move(stable, Currency.STABLE, BANK_WALLET, USER_WALLET),
            ]
            details = (
                f"Bought {normalize_decimal(stable)} {cfg.stable_symbol} "
                f"for {normalize_decimal(amt)} USD"
            )
            return self._commit(TransactionType.BUY_STABLE, details, moves, received=stable)

    def sell_stable(self, amount: Any) -> OperationResult:
        """
        Stablecoin -> USD at the 1:1 peg. The bank pays from its USD reserve.

        Validations: positive, precision (cents), stablecoin limit, user
        stablecoin, bank USD reserve.
        """
        cfg = self.config
        with self.lock:
            amt = to_decimal(amount)
            check = run_validations([
                rule(validate_positive_amount, amount, cfg),
                rule(validate_amount_precision, amt, self._trade_places(USD_STABLE_CELLS), cfg),
                rule(validate_stable_transaction_limit, amt, cfg),
                rule(validate_user_stable_balance, amt, self.user_stable, cfg),
                rule(validate_bank_usd_balance, amt, self.bank_usd, cfg),
            ])
            if not check.is_valid:
                return self._reject("sell_stable", check)

            usd = stable_to_usd(amt, cfg)
            moves = [
                Move(amt, Currency.STABLE, USER_WALLET, BANK_WALLET),
                Move(usd, Currency.USD, BANK_WALLET, USER_WALLET),
            ]
            details = (
                f"Sold {normalize_decimal(amt)} {cfg.stable_symbol}, "
                f"received {normalize_decimal(usd)} USD"
            )
            return self._commit(TransactionType.SELL_STABLE, details, moves, received=usd)

    def buy_crypto(self, amount: Any) -> OperationResult:
        """
        Stablecoin -> crypto at the current price. The stablecoin goes to the market.

        Validations: positive, precision (cents, the market cell), crypto-trade
        limit (on the stablecoin amount), user stablecoin, market liquidity.
        A price that buys no crypto (non-positive price, or dust) is rejected
        as an invalid amount.
        """
        cfg = self.config
        with self.lock:
            amt = to_decimal(amount)
            check = run_validations([
                rule(validate_positive_amount, amount, cfg),
                rule(validate_amount_precision, amt, self._trade_places(STABLE_MARKET_CELLS), cfg),
                rule(validate_crypto_transaction_limit, amt, cfg),
                rule(validate_user_stable_balance, amt, self.user_stable, cfg),
                rule(validate_market_liquidity, amt, self.market_liquidity, cfg),
            ])
            if not check.is_valid:
                return self._reject("buy_crypto", check)

            crypto = round_crypto(crypto_from_stable(amt, self.crypto_price), cfg)
            if crypto <= 0:
                key = 'INVALID_PRICE' if self.crypto_price <= 0 else 'ZERO_CRYPTO'
                return self._reject(
                    "buy_crypto",
                    ValidationResult.invalid(cfg.message(key), ErrorKind.INVALID_AMOUNT),
                )

            moves = [
                Move(amt, Currency.STABLE, USER_WALLET, MARKET_WALLET),
                Move(crypto, Currency.CRYPTO, SYSTEM_WALLET, USER_WALLET),
            ]
            details = (
                f"Spent {normalize_decimal(amt)} {cfg.stable_symbol}, "
                f"received {crypto:.6f} {cfg.crypto_symbol} (from market)"
            )
            return self._commit(TransactionType.BUY_CRYPTO, details, moves, received=crypto)

    def sell_crypto(self, amount: Any) -> OperationResult:
        """
        Crypto -> stablecoin at the current price. The market pays the proceeds.

        Validations: positive, precision (crypto places), user crypto; then
        the proceeds are computed at the current price (rounded to liquidity
        precision) and checked once against market liquidity.
        """
        cfg = self.config
        with self.lock:
            amt = to_decimal(amount)
            check = run_validations([
                rule(validate_positive_amount, amount, cfg),
                rule(validate_amount_precision, amt, self._trade_places(CRYPTO_CELLS), cfg),
                rule(validate_user_crypto_balance, amt, self.user_crypto, cfg),
            ])
            if not check.is_valid:
                return self._reject("sell_crypto", check)

            proceeds = round_liquidity(stable_from_crypto(amt, self.crypto_price), cfg)
            if proceeds <= 0:
                key = 'INVALID_PRICE' if self.crypto_price <= 0 else 'ZERO_PROCEEDS'
                return self._reject(
                    "sell_crypto",
                    ValidationResult.invalid(cfg.message(key), ErrorKind.INVALID_AMOUNT),
                )
            check = validate_market_liquidity(proceeds, self.market_liquidity, cfg)
            if not check.is_valid:
                return self._reject("sell_crypto", check)

            moves = [
                Move(amt, Currency.CRYPTO, USER_WALLET, SYSTEM_WALLET),
                Move(proceeds, Currency.STABLE, MARKET_WALLET, USER_WALLET),
            ]
            details = (
                f"Sold {normalize_decimal(amt)} {cfg.crypto_symbol}, "
                f"received {normalize_decimal(proceeds)} {cfg.stable_symbol} (to market)"
            )
            return self._commit(TransactionType.SELL_CRYPTO, details, moves, received=proceeds)

    # ========================================================================
    # EXECUTION
    # ========================================================================

    def _precision(self, wallet_id: str, currency: Currency) -> int:
        p = self.config.precision
        if currency is Currency.USD:
            return p.usd
        if currency is Currency.CRYPTO:
            return p.crypto
        if wallet_id == MARKET_WALLET:
            return p.liquidity
        return p.stable

    def _trade_places(self, cells: Iterable[Tuple[str, Currency]]) -> int:
        """Coarsest precision among the cells a trade amount moves through."""
        return min(self._precision(wallet, currency) for wallet, currency in cells)

    def _execute_moves(self, moves: Iterable[Move]) -> None:
        """
        Apply moves to the balances.

        For each move the source is debited and the destination credited,
        each rounded to its own cell's precision.
        """
        for move in moves:
            src = self.balances[move.source]
            dst = self.balances[move.dest]
            src[move.currency] = round_to(
                src[move.currency] - move.quantity, self._precision(move.source, move.currency)
            )
            dst[move.currency] = round_to(
                dst[move.currency] + move.quantity, self._precision(move.dest, move.currency)
            )

    def _generate_record_id(self, created_at: datetime, sequence: int) -> str:
        """
        Format: {epoch_millis}-{sequence}

        The sequence suffix keeps ids unique within one millisecond.
        """
        millis = int(created_at.timestamp() * 1000)
        return f"{millis}-{sequence}"

    def _commit(
        self,
        tx_type: TransactionType,
        details: str,
        moves: List[Move],
        received: Decimal,
    ) -> OperationResult:
        """Apply validated moves and append the history record."""
        created_at = self.clock()
        sequence = self._next_sequence
        self._next_sequence += 1
        record = TransactionRecord(
            id=self._generate_record_id(created_at, sequence),
            type=tx_type,
            details=details,
            created_at=created_at,
            moves=tuple(moves),
        )
        self._execute_moves(record.moves)
        self.transaction_log.append(record)
        if self.verbose:
            print(f"✓ APPLIED: [{record.id}] {tx_type.value}: {details}")
        return OperationResult.ok(received=received, records=(record,))

    def _reject(self, operation: str, check: ValidationResult) -> OperationResult:
        if self.verbose:
            print(f"✗ REJECTED: {operation}: {check.error}")
        return OperationResult.from_validation(check)

    # ========================================================================
    # LEDGER OPERATIONS
    # ========================================================================

    def clone(self) -> BankLedger:
        """
        Create an independent copy of this ledger.

        Balances, price, history and sequence are copied; records themselves
        are immutable and shared. The clone gets its own lock.
        """
        cloned = BankLedger.__new__(BankLedger)
        cloned.name = self.name
        cloned.config = self.config
        cloned.verbose = self.verbose
        cloned.clock = self.clock
        cloned.lock = threading.RLock()
        with self.lock:
            cloned.balances = {
                wallet: defaultdict(lambda: ZERO, bals)
                for wallet, bals in self.balances.items()
            }
            cloned.transaction_log = list(self.transaction_log)
            cloned._crypto_price = self._crypto_price
            cloned._next_sequence = self._next_sequence
        return cloned
