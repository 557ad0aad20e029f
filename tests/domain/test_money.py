"""Tests for budgetmgr.domain.money."""

from decimal import Decimal

import pytest

from budgetmgr.domain.errors import ValidationError
from budgetmgr.domain.money import Money, currency_precision, total


class TestConstructors:
    """Tests for Money constructors."""

    def test_from_int(self) -> None:
        assert Money.from_int(12) == Money(1200)
        assert Money.from_int(-3, prec=0) == Money(-3, 0)

    def test_from_string(self) -> None:
        assert Money.from_string("12.50") == Money(1250)
        assert Money.from_string("-3") == Money(-300)
        assert Money.from_string(" 1,234.56 ") == Money(123456)

    def test_from_string_rounds_extra_digits_half_away_from_zero(self) -> None:
        assert Money.from_string("0.125") == Money(13)
        assert Money.from_string("-0.125") == Money(-13)

    @pytest.mark.parametrize("text", ["", "abc", "1.2.3", "NaN", "Infinity"])
    def test_from_string_invalid(self, text: str) -> None:
        with pytest.raises(ValidationError):
            Money.from_string(text)

    def test_from_float_uses_shortest_repr(self) -> None:
        """0.1 + 0.2 style float noise must not leak into minor units."""
        assert Money.from_float(0.29) == Money(29)
        assert Money.from_float(1.005) == Money(101)

    def test_from_float_rejects_nan(self) -> None:
        with pytest.raises(ValidationError):
            Money.from_float(float("nan"))

    def test_from_json(self) -> None:
        assert Money.from_json(5) == Money(500)
        assert Money.from_json(5.5) == Money(550)
        assert Money.from_json("5.55") == Money(555)

    def test_from_json_rejects_bool(self) -> None:
        with pytest.raises(ValidationError):
            Money.from_json(True)

    def test_negative_precision(self) -> None:
        with pytest.raises(ValueError):
            Money(1, -1)


class TestConversions:
    """Tests for Money conversions."""

    def test_to_int_truncates_toward_zero(self) -> None:
        assert Money(199).to_int() == 1
        assert Money(-199).to_int() == -1

    def test_to_decimal(self) -> None:
        assert Money(1234).to_decimal() == Decimal("12.34")

    def test_to_float(self) -> None:
        assert Money(250).to_float() == 2.5

    @pytest.mark.parametrize("money", [Money(1783), Money(-5), Money(123456789, 8), Money(7, 0)])
    def test_float_round_trip(self, money: Money) -> None:
        assert Money.from_float(money.to_float(), money.prec) == money

    def test_str_always_prints_precision_digits(self) -> None:
        assert str(Money(100)) == "1.00"
        assert str(Money(-5)) == "-0.05"
        assert str(Money(7, 0)) == "7"
        assert str(Money(1, 3)) == "0.001"
        assert Money(100).to_json() == "1.00"

    def test_format_with_thousands_separators(self) -> None:
        assert Money(123456789).format("£") == "£1,234,567.89"
        assert Money(-150).format("£") == "-£1.50"
        assert Money(1500, 0).format("¥") == "¥1,500"

    def test_with_prec(self) -> None:
        assert Money(150).with_prec(3) == Money(1500, 3)
        with pytest.raises(ValueError):
            Money(1500, 3).with_prec(2)

    def test_to_minor_units(self) -> None:
        assert Money(150).to_minor_units(2) == 150
        assert Money(1500, 3).to_minor_units(2) == 150
        assert Money(0).to_minor_units(0) == 0

    def test_to_minor_units_rejects_lost_digits(self) -> None:
        with pytest.raises(ValidationError):
            Money(1505, 3).to_minor_units(2)


class TestArithmetic:
    """Tests for Money arithmetic."""

    def test_add_and_sub(self) -> None:
        assert Money(150) + Money(250) == Money(400)
        assert Money(150) - Money(250) == Money(-100)

    def test_mixed_precision_aligns_to_larger(self) -> None:
        result = Money(150) + Money(5, 3)
        assert result.prec == 3
        assert result.amount == 1505

    def test_neg_and_abs(self) -> None:
        assert -Money(150) == Money(-150)
        assert abs(Money(-150)) == Money(150)

    def test_div_truncates_toward_zero(self) -> None:
        assert Money(100000).div(4) == Money(25000)
        assert Money(1000).div(3) == Money(333)
        assert Money(-1000).div(3) == Money(-333)

    @pytest.mark.parametrize("n", [0, -1])
    def test_div_by_non_positive(self, n: int) -> None:
        with pytest.raises(ValueError):
            Money(100).div(n)

    def test_round_half_away_from_zero(self) -> None:
        assert Money(150).round() == Money(200)
        assert Money(149).round() == Money(100)
        assert Money(-150).round() == Money(-200)
        assert Money(-149).round() == Money(-100)

    def test_ceil_and_floor(self) -> None:
        assert Money(101).ceil() == Money(200)
        assert Money(-101).ceil() == Money(-100)
        assert Money(199).floor() == Money(100)
        assert Money(-101).floor() == Money(-200)
        assert Money(300).ceil() == Money(300)

    def test_total_keeps_order_and_precision(self) -> None:
        assert total([Money(100), Money(-50), Money(25)]) == Money(75)
        assert total([Money(5, 0), Money(7, 0)]).prec == 0

    def test_total_of_nothing(self) -> None:
        assert total([]) == Money(0)
        assert total([], prec=0).prec == 0


class TestComparison:
    """Tests for Money equality and ordering."""

    def test_equal_across_precisions(self) -> None:
        assert Money(150) == Money(1500, 3)
        assert hash(Money(150)) == hash(Money(1500, 3))

    def test_ordering(self) -> None:
        assert Money(100) < Money(101)
        assert Money(-1) < Money(0)
        assert sorted([Money(300), Money(-100), Money(200)]) == [Money(-100), Money(200), Money(300)]

    def test_bool(self) -> None:
        assert not Money(0)
        assert Money(-1)


class TestCurrencyPrecision:
    """Tests for currency_precision."""

    def test_known_currencies(self) -> None:
        assert currency_precision("GBP") == 2
        assert currency_precision("jpy") == 0
        assert currency_precision("KWD") == 3

    def test_unknown_currency(self) -> None:
        with pytest.raises(ValidationError):
            currency_precision("XXX")
