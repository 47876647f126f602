"""
test_formatting.py - Unit tests for display formatting
"""

import pytest
from decimal import Decimal

from banksim import (
    format_usd, format_stable, format_crypto, format_crypto_with_usd,
    format_crypto_with_usd_separate, get_currency_type, format_currency,
)


class TestGroupedAmounts:

    @pytest.mark.parametrize("amount, expected", [
        (Decimal("10000"), "$10,000"),
        (Decimal("9000.00"), "$9,000"),
        (Decimal("1001000"), "$1,001,000"),
        (Decimal("1234.5"), "$1,234.5"),
        (Decimal("0.12345"), "$0.123"),
        (0, "$0"),
    ])
    def test_format_usd(self, amount, expected):
        assert format_usd(amount) == expected

    def test_format_stable(self):
        assert format_stable(Decimal("999000.000000")) == "999,000 USDT"

    def test_format_stable_custom_symbol(self):
        assert format_stable(5, symbol="USDC") == "5 USDC"


class TestCrypto:

    def test_default_eight_places(self):
        assert format_crypto(Decimal("0.01")) == "0.01000000 BTC"

    def test_at_least_six_places(self):
        assert format_crypto(Decimal("0.5"), decimals=2) == "0.500000 BTC"

    def test_with_usd(self):
        assert format_crypto_with_usd(Decimal("0.01"), Decimal("100000")) == \
            "0.01000000 BTC - Equivalent: $1000.00 USD"

    def test_with_usd_separate(self):
        parts = format_crypto_with_usd_separate(Decimal("0.005"), Decimal("100000"))
        assert parts == {
            'main_value': "0.00500000 BTC",
            'usd_equivalent': "Equivalent: $500.00 USD",
        }


class TestCurrencyType:

    @pytest.mark.parametrize("code, expected", [
        ("USD", "usd"), ("USDT", "stable"), ("STABLE", "stable"),
        ("BTC", "crypto"), ("CRYPTO", "crypto"), ("EUR", "default"),
    ])
    def test_get_currency_type(self, code, expected):
        assert get_currency_type(code) == expected

    def test_format_currency_dispatch(self):
        assert format_currency(Decimal("10"), "usd") == "$10"
        assert format_currency(Decimal("10"), "stable") == "10 USDT"
        assert format_currency(Decimal("0.1"), "crypto") == "0.10000000 BTC"
        assert format_currency(Decimal("1500"), "default") == "1,500"

    def test_format_currency_crypto_with_price(self):
        result = format_currency(Decimal("0.1"), "crypto", Decimal("100000"))
        assert result['usd_equivalent'] == "Equivalent: $10000.00 USD"
