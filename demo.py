#!/usr/bin/env python3
"""
demo.py - Interactive Tutorial: How the Bank / Stablecoin / Crypto Simulator Works

Each step builds on the previous one. Press Enter to advance.

WHAT YOU'LL LEARN:
  1-2: Foundation   - The initial balances, buying stablecoin from the bank
  3-4: The Market   - Buying and selling crypto against market liquidity
  5:   Rejections   - Validation rules and all-or-nothing operations
  6:   Simplified   - USD -> crypto in one click (two legs under the hood)
  7:   Overrides    - Direct setters, compensation, reset

Run:
    python demo.py           # Interactive mode (press Enter for each step)
    python demo.py --quick   # Run all steps without pausing
"""

from dataclasses import dataclass
from decimal import Decimal
import sys

from banksim import (
    BankLedger, ViewMode,
    buy_crypto_with_usd, sell_crypto_for_usd,
    crypto_if_buy, stable_if_sell,
    format_usd, format_crypto,
    render_dashboard, render_history,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class DemoConfig:
    """Amounts used by the tutorial. Modify these to experiment."""
    stable_purchase: Decimal = Decimal("1000")
    crypto_sale: Decimal = Decimal("0.005")
    oversized_purchase: Decimal = Decimal("600000")
    simplified_spend_usd: Decimal = Decimal("100")
    simplified_receive_usd: Decimal = Decimal("50")
    crashed_price: Decimal = Decimal("0")


CONFIG = DemoConfig()

QUICK_MODE = "--quick" in sys.argv


def wait_for_enter():
    """Pause for user input unless in quick mode."""
    if not QUICK_MODE:
        input("\n[Press Enter to continue...]")


def step_header(number: int, title: str, objective: str):
    print(f"\n{'='*70}")
    print(f"STEP {number}: {title}")
    print(f"{'='*70}")
    print(f"\nObjective: {objective}\n")


def section_header(text: str):
    print(f"\n--- {text} ---\n")


def show_result(result):
    if result.success:
        print(f"    success, received {result.received}")
    else:
        print(f"    FAILED [{result.error_kind.value}]: {result.error}")


# ============================================================================
# STEPS
# ============================================================================

def step_01_initial_state():
    step_header(1, "The Initial Ledger",
        "See who holds what before any trade.")

    print(">>> ledger = BankLedger('tutorial')")
    ledger = BankLedger("tutorial")
    print(render_dashboard(ledger))

    section_header("Key Insight")
    print("""
    Three parties hold balances:
    - The BANK holds USD and stablecoin reserves and trades at a fixed 1:1 peg.
    - The USER starts with USD only.
    - The MARKET holds stablecoin liquidity and sells crypto at the current price.
    """)
    return ledger


def step_02_buy_stable(ledger: BankLedger):
    step_header(2, "Buying Stablecoin",
        "USD -> USDT moves four balances at once.")

    print(f">>> ledger.buy_stable({CONFIG.stable_purchase})")
    show_result(ledger.buy_stable(CONFIG.stable_purchase))

    section_header("Balances")
    print(f"user USD    : {format_usd(ledger.user_usd)}")
    print(f"user USDT   : {ledger.user_stable}")
    print(f"bank USD    : {format_usd(ledger.bank_usd)}")
    print(f"bank USDT   : {ledger.bank_stable}")
    return ledger


def step_03_buy_crypto(ledger: BankLedger):
    step_header(3, "Buying Crypto",
        "USDT -> BTC at the market price; the market's liquidity grows.")

    amount = ledger.user_stable
    print(f"Quote: {amount} USDT buys ~{crypto_if_buy(ledger, amount)} BTC")
    print(f">>> ledger.buy_crypto({amount})")
    show_result(ledger.buy_crypto(amount))
    print(f"user BTC          : {format_crypto(ledger.user_crypto)}")
    print(f"market liquidity  : {ledger.market_liquidity}")
    return ledger


def step_04_sell_crypto(ledger: BankLedger):
    step_header(4, "Selling Crypto",
        "BTC -> USDT; proceeds are checked against liquidity after conversion.")

    print(f"Quote: {CONFIG.crypto_sale} BTC sells for {stable_if_sell(ledger, CONFIG.crypto_sale)} USDT")
    print(f">>> ledger.sell_crypto({CONFIG.crypto_sale})")
    show_result(ledger.sell_crypto(CONFIG.crypto_sale))
    print(f"user BTC   : {format_crypto(ledger.user_crypto)}")
    print(f"user USDT  : {ledger.user_stable}")
    return ledger


def step_05_rejections(ledger: BankLedger):
    step_header(5, "Rejected Operations",
        "Rules run in order and stop at the first failure; nothing is applied.")

    before = ledger.balances_snapshot()
    for label, amount in [("zero", 0), ("text", "abc"), ("oversized", CONFIG.oversized_purchase),
                          ("more than the user holds", Decimal("20000"))]:
        print(f">>> ledger.buy_stable({amount!r})   # {label}")
        show_result(ledger.buy_stable(amount))
    assert ledger.balances_snapshot() == before
    print("\nBalances unchanged after every rejection.")
    return ledger


def step_06_simplified(ledger: BankLedger):
    step_header(6, "The Simplified View",
        "Trade USD for BTC directly; two ledger operations run under the hood.")

    print(f">>> buy_crypto_with_usd(ledger, {CONFIG.simplified_spend_usd})")
    show_result(buy_crypto_with_usd(ledger, CONFIG.simplified_spend_usd))
    print(f">>> sell_crypto_for_usd(ledger, {CONFIG.simplified_receive_usd})")
    show_result(sell_crypto_for_usd(ledger, CONFIG.simplified_receive_usd))

    print(render_dashboard(ledger, ViewMode.SIMPLIFIED, history_limit=4))
    return ledger


def step_07_overrides_and_reset(ledger: BankLedger):
    step_header(7, "Overrides, Compensation and Reset",
        "Setters bypass validation; a failing second leg is undone; reset restores everything.")

    print(f">>> ledger.set_crypto_price({CONFIG.crashed_price})")
    ledger.set_crypto_price(CONFIG.crashed_price)
    print(f">>> buy_crypto_with_usd(ledger, {CONFIG.simplified_spend_usd})")
    result = buy_crypto_with_usd(ledger, CONFIG.simplified_spend_usd)
    show_result(result)
    print(f"    compensated: {result.compensated}")
    print(render_history(ledger, limit=2))

    section_header("Reset")
    print(">>> ledger.reset()")
    ledger.reset()
    print(render_dashboard(ledger))
    return ledger


def main():
    """Run the complete tutorial."""
    print("=" * 70)
    print("       BANK / STABLECOIN / CRYPTO SIMULATOR - INTERACTIVE TUTORIAL")
    print("=" * 70)

    if QUICK_MODE:
        print("Running in QUICK mode (no pauses)")
    else:
        print("Running in INTERACTIVE mode (press Enter to advance)")

    wait_for_enter()

    ledger = step_01_initial_state()
    wait_for_enter()
    ledger = step_02_buy_stable(ledger)
    wait_for_enter()
    ledger = step_03_buy_crypto(ledger)
    wait_for_enter()
    ledger = step_04_sell_crypto(ledger)
    wait_for_enter()
    ledger = step_05_rejections(ledger)
    wait_for_enter()
    ledger = step_06_simplified(ledger)
    wait_for_enter()
    step_07_overrides_and_reset(ledger)

    print(f"\n{'='*70}")
    print("Tutorial complete.")


if __name__ == "__main__":
    main()
