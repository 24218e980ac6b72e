"""Tests for money helpers."""

from decimal import Decimal

import pytest
from catalogue.shared.money import MAX_PRICE, parse_price, to_money


class TestToMoney:
    def test_quantizes_to_cents(self):
        assert to_money("10") == Decimal("10.00")
        assert to_money(Decimal("1.005")) == Decimal("1.01")

    def test_float_goes_through_str(self):
        assert to_money(0.1) == Decimal("0.10")
        assert to_money(25.5) == Decimal("25.50")

    def test_int(self):
        assert to_money(3) == Decimal("3.00")


class TestParsePrice:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("25.50", Decimal("25.50")),
            (" 7 ", Decimal("7.00")),
            (12, Decimal("12.00")),
            (Decimal("0.01"), Decimal("0.01")),
            (MAX_PRICE, MAX_PRICE),
        ],
    )
    def test_valid(self, raw, expected):
        assert parse_price(raw) == (expected, [])

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_missing(self, raw):
        assert parse_price(raw) == (None, ["Price is required"])

    @pytest.mark.parametrize("raw", ["abc", "1,5", True, "NaN", "Infinity"])
    def test_not_a_number(self, raw):
        assert parse_price(raw) == (None, ["Price must be a number"])

    @pytest.mark.parametrize("raw", [0, "0.00", "-1", "0.004"])
    def test_not_positive(self, raw):
        assert parse_price(raw) == (None, ["Price must be greater than 0"])

    def test_too_large(self):
        price, errors = parse_price("100000000")
        assert price is None
        assert errors == [f"Price must not exceed {MAX_PRICE}"]
