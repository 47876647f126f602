"""
test_scenarios.py - End-to-end walkthrough scenarios

Scenario A: buy 1000 USDT from the initial state
Scenario B: spend it on BTC at 100,000
Scenario C: sell half the BTC back to the market
Scenario D: the simplified USD -> BTC trade equals its two legs run by hand
"""

from decimal import Decimal

from banksim import (
    TransactionType, ViewMode,
    buy_crypto_with_usd, sell_crypto_for_usd, render_dashboard,
    crypto_if_buy_with_usd, max_sell_crypto,
)
from tests.helpers import make_ledger, usd_total, stable_total


class TestWalkthrough:

    def test_scenario_a(self, ledger):
        assert ledger.buy_stable(1000).success
        assert ledger.user_usd == Decimal("9000")
        assert ledger.user_stable == Decimal("1000")
        assert ledger.bank_usd == Decimal("1001000")
        assert ledger.bank_stable == Decimal("999000")

    def test_scenario_b(self, stable_ledger):
        assert stable_ledger.buy_crypto(1000).success
        assert stable_ledger.user_stable == 0
        assert stable_ledger.user_crypto == Decimal("0.01")
        assert stable_ledger.market_liquidity == Decimal("5001000")

    def test_scenario_c(self, crypto_ledger):
        stable_before = crypto_ledger.user_stable
        liquidity_before = crypto_ledger.market_liquidity
        assert crypto_ledger.sell_crypto(Decimal("0.005")).success
        assert crypto_ledger.user_crypto == Decimal("0.005")
        assert crypto_ledger.user_stable == stable_before + 500
        assert crypto_ledger.market_liquidity == liquidity_before - 500

    def test_scenario_d(self):
        composed = make_ledger()
        by_hand = make_ledger()

        result = buy_crypto_with_usd(composed, 100)
        by_hand.buy_stable(100)
        by_hand.buy_crypto(100)

        assert result.success
        assert [r.type for r in composed.transaction_log] == [
            TransactionType.BUY_STABLE, TransactionType.BUY_CRYPTO,
        ]
        assert composed.balances_snapshot() == by_hand.balances_snapshot()
        assert [r.details for r in composed.history] == [r.details for r in by_hand.history]


class TestSessions:

    def test_round_trip_through_crypto_at_higher_price(self, ledger):
        quoted = crypto_if_buy_with_usd(ledger, 5000)
        assert buy_crypto_with_usd(ledger, 5000).received == quoted

        ledger.set_crypto_price(110000)
        result = sell_crypto_for_usd(ledger, 5500)

        assert result.success
        assert ledger.user_usd == Decimal("10500")
        assert ledger.user_crypto == 0
        assert max_sell_crypto(ledger) == 0
        assert len(ledger.history) == 4

    def test_totals_hold_across_a_session(self, ledger):
        usd, stable = usd_total(ledger), stable_total(ledger)
        ledger.buy_stable(3000)
        ledger.buy_crypto(1500)
        ledger.set_crypto_price(90000)
        ledger.sell_crypto(Decimal("0.01"))
        ledger.sell_stable(2000)
        buy_crypto_with_usd(ledger, 250)
        assert usd_total(ledger) == usd
        assert stable_total(ledger) == stable

    def test_rejections_do_not_interrupt_session(self, ledger):
        assert not ledger.sell_stable(1).success
        assert not ledger.buy_crypto(1).success
        assert ledger.buy_stable(10).success
        assert len(ledger.history) == 1

    def test_reset_mid_session(self, crypto_ledger):
        crypto_ledger.reset()
        assert crypto_ledger.buy_stable(1000).success
        assert crypto_ledger.user_usd == Decimal("9000")
        assert len(crypto_ledger.history) == 1

    def test_dashboard_follows_the_session(self, ledger):
        buy_crypto_with_usd(ledger, 1000)
        simplified = render_dashboard(ledger, ViewMode.SIMPLIFIED)
        detailed = render_dashboard(ledger, ViewMode.DETAILED)
        assert "$9,000" in simplified
        assert "0.01000000 BTC" in simplified
        assert "Buy BTC" in detailed and "Buy USDT" in detailed
