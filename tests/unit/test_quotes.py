"""
test_quotes.py - Unit tests for read-only trade previews
"""

from decimal import Decimal

from banksim import (
    Currency,
    max_spend_usd, max_spend_stable, max_sell_crypto,
    crypto_if_buy, stable_if_sell, crypto_if_buy_with_usd, crypto_to_sell_for_usd,
)
from tests.fake_view import FakeView


class TestMaxima:

    def test_max_spend_is_user_balance(self):
        view = FakeView(balances={'user': {
            Currency.USD: Decimal("500"),
            Currency.STABLE: Decimal("20"),
            Currency.CRYPTO: Decimal("0.3"),
        }})
        assert max_spend_usd(view) == Decimal("500")
        assert max_spend_stable(view) == Decimal("20")
        assert max_sell_crypto(view) == Decimal("0.3")

    def test_never_negative(self):
        # Direct setters can push a balance below zero
        view = FakeView(balances={'user': {Currency.USD: Decimal("-10")}})
        assert max_spend_usd(view) == 0
        assert max_sell_crypto(view) == 0


class TestConversions:

    def test_crypto_if_buy(self):
        view = FakeView(price=Decimal("100000"))
        assert crypto_if_buy(view, 1000) == Decimal("0.01")
        assert crypto_if_buy_with_usd(view, "250") == Decimal("0.0025")
        assert crypto_to_sell_for_usd(view, Decimal("50")) == Decimal("0.0005")

    def test_crypto_to_sell_rounds_up(self):
        view = FakeView(price=Decimal("30000"))
        # Enough crypto that the sale covers the USD amount
        assert crypto_to_sell_for_usd(view, 100) == Decimal("0.00333334")

    def test_stable_if_sell_rounds_to_cents(self):
        view = FakeView(price=Decimal("33333.337"))
        assert stable_if_sell(view, Decimal("1")) == Decimal("33333.33")

    def test_zero_price_gives_zero(self):
        view = FakeView(price=Decimal("0"))
        assert crypto_if_buy(view, 1000) == 0
        assert stable_if_sell(view, 1) == 0
        assert crypto_to_sell_for_usd(view, 10) == 0

    def test_unusable_input_previews_zero(self):
        view = FakeView()
        assert crypto_if_buy(view, "") == 0
        assert stable_if_sell(view, None) == 0

    def test_quotes_against_real_ledger(self, crypto_ledger):
        assert max_sell_crypto(crypto_ledger) == Decimal("0.01")
        assert stable_if_sell(crypto_ledger, Decimal("0.005")) == Decimal("500")
