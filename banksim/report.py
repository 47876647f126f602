"""
report.py - Text dashboard for the simulator

Renders the bank/user balance cards, the market panel and the transaction
history as boxed text. Everything reads through LedgerView; nothing here
mutates the ledger.

Two modes:
    ViewMode.DETAILED    every balance, stablecoin included
    ViewMode.SIMPLIFIED  USD and crypto only; stablecoins work under the hood
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple

from .config import DEFAULT_CONFIG, SimulatorConfig
from .core import (
    LedgerView, Currency, ViewMode,
    BANK_WALLET, USER_WALLET, MARKET_WALLET,
)
from .formatting import format_crypto_with_usd, format_stable, format_usd


WIDTH = 60  # Inner content width

LABELS = {
    'BANK_DASHBOARD': 'Bank Dashboard',
    'BANK_BALANCES': 'Bank balances',
    'USER_WALLET': 'User Wallet',
    'MARKET_PRICING': 'Market / Pricing',
    'BTC_PRICE_USD': 'BTC price (USD)',
    'MARKET_LIQUIDITY': 'Market liquidity',
    'TRANSACTION_HISTORY': 'Transaction History',
    'NO_TRANSACTIONS': 'No transactions',
    'DETAILED_VIEW': 'Detailed View',
    'SIMPLIFIED_VIEW': 'Simplified View',
    'SIMPLIFIED_INTERFACE_NOTE': 'Simplified interface - stablecoins work under the hood.',
}


def _pad(text: str, width: int = WIDTH) -> str:
    """Pad or truncate text to exactly width characters."""
    if len(text) > width:
        return text[:width - 3] + "..."
    return text + " " * (width - len(text))


def _box(title: str, lines: Sequence[str]) -> str:
    bar = "─" * WIDTH
    out = [
        f"┌{bar}┐",
        f"│{_pad(' ' + title)}│",
        f"├{bar}┤",
    ]
    out.extend(f"│{_pad('   ' + line)}│" for line in lines)
    out.append(f"└{bar}┘")
    return "\n".join(out)


def render_balance_card(title: str, rows: Sequence[Tuple[str, str]]) -> str:
    """Render label/value rows in a box, values aligned."""
    label_width = max((len(label) for label, _ in rows), default=0)
    return _box(title, [f"{label.ljust(label_width)} : {value}" for label, value in rows])


def _user_rows(view: LedgerView, mode: ViewMode, config: SimulatorConfig) -> List[Tuple[str, str]]:
    rows = [("USD", format_usd(view.get_balance(USER_WALLET, Currency.USD)))]
    if mode is ViewMode.DETAILED:
        rows.append((config.stable_symbol, format_stable(
            view.get_balance(USER_WALLET, Currency.STABLE), config.stable_symbol
        )))
    rows.append((config.crypto_symbol, format_crypto_with_usd(
        view.get_balance(USER_WALLET, Currency.CRYPTO),
        view.crypto_price,
        config.precision.crypto,
        config.crypto_symbol,
    )))
    return rows


def render_market_panel(view: LedgerView, config: SimulatorConfig = DEFAULT_CONFIG) -> str:
    rows = [
        (LABELS['BTC_PRICE_USD'], format_usd(view.crypto_price)),
        (LABELS['MARKET_LIQUIDITY'], format_stable(
            view.get_balance(MARKET_WALLET, Currency.STABLE), config.stable_symbol
        )),
    ]
    return render_balance_card(LABELS['MARKET_PRICING'], rows)


def render_history(view: LedgerView, limit: Optional[int] = None) -> str:
    """Most recent first. limit caps the number of rows shown."""
    records = view.history
    if limit is not None:
        records = records[:limit]
    if not records:
        lines = [LABELS['NO_TRANSACTIONS']]
    else:
        lines = [f"{r.timestamp}  {r.type.value:<9}  {r.details}" for r in records]
    return _box(LABELS['TRANSACTION_HISTORY'], lines)


def render_dashboard(
    view: LedgerView,
    mode: ViewMode = ViewMode.DETAILED,
    config: SimulatorConfig = DEFAULT_CONFIG,
    history_limit: Optional[int] = None,
) -> str:
    """Render the full dashboard: bank card, user card, market panel, history."""
    title = LABELS['DETAILED_VIEW'] if mode is ViewMode.DETAILED else LABELS['SIMPLIFIED_VIEW']
    sections = [f"== {LABELS['BANK_DASHBOARD']} ({title}) =="]
    if mode is ViewMode.SIMPLIFIED:
        sections.append(LABELS['SIMPLIFIED_INTERFACE_NOTE'])
    sections.append(render_balance_card(LABELS['BANK_BALANCES'], [
        ("USD", format_usd(view.get_balance(BANK_WALLET, Currency.USD))),
        (config.stable_symbol, format_stable(
            view.get_balance(BANK_WALLET, Currency.STABLE), config.stable_symbol
        )),
    ]))
    sections.append(render_balance_card(LABELS['USER_WALLET'], _user_rows(view, mode, config)))
    sections.append(render_market_panel(view, config))
    sections.append(render_history(view, history_limit))
    return "\n".join(sections)
