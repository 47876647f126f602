"""
test_conversion.py - Unit tests for conversion and rounding helpers
"""

from dataclasses import replace
from decimal import Decimal

from banksim import (
    DEFAULT_CONFIG, Precision,
    crypto_from_stable, stable_from_crypto, usd_to_stable, stable_to_usd,
    round_usd, round_stable, round_crypto, round_liquidity, round_crypto_up,
)


class TestCryptoStable:

    def test_crypto_from_stable(self):
        assert crypto_from_stable(Decimal("1000"), Decimal("100000")) == Decimal("0.01")

    def test_crypto_from_stable_zero_price(self):
        assert crypto_from_stable(Decimal("1000"), Decimal("0")) == 0

    def test_crypto_from_stable_negative_price(self):
        assert crypto_from_stable(Decimal("1000"), Decimal("-5")) == 0

    def test_stable_from_crypto(self):
        assert stable_from_crypto(Decimal("0.005"), Decimal("100000")) == Decimal("500")


class TestPeg:

    def test_one_to_one(self):
        assert usd_to_stable(Decimal("123.45")) == Decimal("123.45")
        assert stable_to_usd(Decimal("123.45")) == Decimal("123.45")

    def test_rate_from_config(self):
        config = replace(DEFAULT_CONFIG, usd_to_stable_rate=Decimal("0.99"))
        assert usd_to_stable(Decimal("100"), config) == Decimal("99")


class TestRounding:

    def test_precisions(self):
        value = Decimal("1.123456789")
        assert round_usd(value) == Decimal("1.12")
        assert round_stable(value) == Decimal("1.123456")
        assert round_crypto(value) == Decimal("1.12345678")
        assert round_liquidity(value) == Decimal("1.12")

    def test_truncates(self):
        assert round_usd(Decimal("0.999")) == Decimal("0.99")
        assert round_crypto(Decimal("0.333333339")) == Decimal("0.33333333")

    def test_precision_from_config(self):
        config = replace(DEFAULT_CONFIG, precision=Precision(crypto=4))
        assert round_crypto(Decimal("0.123456"), config) == Decimal("0.1234")

    def test_round_crypto_up(self):
        assert round_crypto_up(Decimal("0.003333333")) == Decimal("0.00333334")
        assert round_crypto_up(Decimal("0.005")) == Decimal("0.00500000")
