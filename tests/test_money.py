"""Tests for the cent-exact Money value type."""

from decimal import Decimal
from fractions import Fraction

import pytest

from billtrack.errors import InvalidAmount
from billtrack.models.money import ZERO, Money


class TestConstruction:
    def test_from_string_and_numbers(self):
        assert Money("12.50").cents == 1250
        assert Money(3).cents == 300
        assert Money(0.1).cents == 10
        assert Money(Decimal("7.05")).cents == 705

    def test_comma_decimal_separator(self):
        assert Money("18,50") == Money("18.50")

    def test_rejects_sub_cent_values(self):
        """19.999 cannot be represented at cent precision."""
        with pytest.raises(InvalidAmount):
            Money("19.999")
        with pytest.raises(InvalidAmount):
            Money(0.001)

    @pytest.mark.parametrize("bad", ["abc", "", None, True, float("nan"), "Infinity", [1]])
    def test_rejects_malformed(self, bad):
        with pytest.raises(InvalidAmount):
            Money(bad)

    def test_large_amounts_are_held_exactly(self):
        m = Money("1234567890123456789012345678.99")
        assert str(m) == "1234567890123456789012345678.99"
        assert m.cents == 123456789012345678901234567899

    def test_large_sub_cent_amount_is_rejected(self):
        with pytest.raises(InvalidAmount):
            Money("1234567890123456789012345678.991")

    def test_trailing_zeros_are_fine(self):
        assert Money("5.000") == Money("5")

    def test_from_cents_requires_int(self):
        assert Money.from_cents(-250) == Money("-2.50")
        with pytest.raises(InvalidAmount):
            Money.from_cents(1.5)


class TestArithmetic:
    def test_add_sub_exact(self):
        total = Money("0.10") + Money("0.20")
        assert total == Money("0.30")
        assert Money("1.00") - Money("2.50") == Money("-1.50")

    def test_sum_builtin_and_total(self):
        values = [Money("0.10")] * 10
        assert sum(values) == Money("1.00")
        assert Money.total(["1.10", Money("2.20")]) == Money("3.30")
        assert Money.total([]) == ZERO

    def test_multiply_rounds_half_even(self):
        assert Money("0.25") * Decimal("0.1") == Money("0.02")  # 0.025 -> 0.02
        assert Money("0.35") * Decimal("0.1") == Money("0.04")  # 0.035 -> 0.04
        assert 3 * Money("1.11") == Money("3.33")

    def test_multiply_by_fraction(self):
        assert Money("10.00") * Fraction(1, 3) == Money("3.33")

    def test_cannot_multiply_money_by_money(self):
        with pytest.raises(TypeError):
            Money("1.00") * Money("2.00")


class TestComparisonAndFormat:
    def test_equality_by_cents(self):
        assert Money("1.5") == Money("1.50")
        assert hash(Money("1.5")) == hash(Money("1.50"))
        assert Money("1.00") != Money("1.01")

    def test_ordering(self):
        assert Money("1.00") < Money("1.01")
        assert max(Money("3"), Money("2")) == Money("3")

    def test_str_two_decimals_no_separators(self):
        assert str(Money("1234567.5")) == "1234567.50"
        assert str(Money("-0.05")) == "-0.05"
        assert str(ZERO) == "0.00"
        assert repr(Money("2")) == "Money('2.00')"

    def test_immutable(self):
        m = Money("1.00")
        with pytest.raises(AttributeError):
            m._cents = 5
