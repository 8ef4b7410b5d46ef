"""Tests for Money."""

from decimal import Decimal

import pytest

from shipbridge.models import Money


class TestMoney:

    def test_normalizes_amount_and_currency(self):
        money = Money(10.3, "usd")
        assert money.amount == Decimal("10.3")
        assert money.currency == "USD"

    def test_cents_round_half_up(self):
        assert Money(Decimal("10.305"), "USD").cents == 1031
        assert Money(Decimal("10.30"), "USD").cents == 1030

    def test_subtraction_and_comparison(self):
        difference = Money("10.30", "USD") - Money("10.00", "USD")
        assert difference == Money(Decimal("0.30"), "USD")
        assert difference <= Money("0.50", "USD")
        assert Money("10.60", "USD") > Money("10.00", "USD")

    def test_currency_mismatch(self):
        with pytest.raises(ValueError, match="Currency mismatch"):
            Money("1", "USD") - Money("1", "CAD")

    def test_parse(self):
        assert Money.parse("42.10", "CAD") == Money(Decimal("42.10"), "CAD")
        existing = Money("1", "EUR")
        assert Money.parse(existing, "USD") is existing

    def test_parse_rejects_non_numbers(self):
        with pytest.raises(ValueError, match="Not a monetary amount"):
            Money.parse("ten dollars", "USD")

    def test_str(self):
        assert str(Money("10.3", "USD")) == "10.30 USD"
