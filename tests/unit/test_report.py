"""
test_report.py - Unit tests for the text dashboard
"""

from decimal import Decimal

from banksim import (
    Currency, ViewMode,
    render_dashboard, render_history, render_market_panel, render_balance_card,
)
from tests.fake_view import FakeView


class TestBalanceCard:

    def test_rows_aligned(self):
        card = render_balance_card("Bank balances", [("USD", "$1"), ("USDT", "2 USDT")])
        lines = card.splitlines()
        assert "Bank balances" in lines[1]
        assert "USD  : $1" in lines[3]
        assert "USDT : 2 USDT" in lines[4]

    def test_lines_have_equal_width(self):
        card = render_balance_card("T", [("a", "x" * 100)])
        widths = {len(line) for line in card.splitlines()}
        assert len(widths) == 1


class TestHistory:

    def test_empty(self):
        assert "No transactions" in render_history(FakeView())

    def test_most_recent_first(self, stable_ledger):
        stable_ledger.buy_crypto(500)
        lines = render_history(stable_ledger).splitlines()
        assert "Buy BTC" in lines[3]
        assert "Buy USDT" in lines[4]

    def test_limit(self, stable_ledger):
        stable_ledger.buy_crypto(500)
        text = render_history(stable_ledger, limit=1)
        assert "Buy BTC" in text
        assert "Buy USDT" not in text


class TestDashboard:

    def test_detailed_shows_user_stable(self, stable_ledger):
        text = render_dashboard(stable_ledger)
        assert "Detailed View" in text
        assert "1,000 USDT" in text
        assert "$9,000" in text

    def test_simplified_hides_user_stable(self):
        view = FakeView(balances={
            'user': {Currency.USD: Decimal("10000"), Currency.STABLE: Decimal("777")},
        })
        text = render_dashboard(view, ViewMode.SIMPLIFIED)
        assert "Simplified View" in text
        assert "stablecoins work under the hood" in text
        assert "777 USDT" not in text

    def test_crypto_row_has_usd_equivalent(self, crypto_ledger):
        text = render_dashboard(crypto_ledger)
        assert "0.01000000 BTC - Equivalent: $1000.00 USD" in text

    def test_market_panel(self, ledger):
        text = render_market_panel(ledger)
        assert "$100,000" in text
        assert "5,000,000 USDT" in text

    def test_does_not_mutate(self, crypto_ledger):
        before = crypto_ledger.balances_snapshot()
        render_dashboard(crypto_ledger, ViewMode.SIMPLIFIED)
        assert crypto_ledger.balances_snapshot() == before
