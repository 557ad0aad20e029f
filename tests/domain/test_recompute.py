"""Tests for budgetmgr.domain.recompute pure functions."""

from budgetmgr.domain.models import (
    Day,
    DayID,
    Income,
    IncomeID,
    Month,
    MonthID,
    MonthlyPayment,
    MonthlyPaymentID,
    Spend,
    SpendID,
)
from budgetmgr.domain.money import Money
from budgetmgr.domain.recompute import (
    calculate_daily_budget,
    cascade_saldo,
    day_spent,
    monthly_payments_cost,
    recompute_month,
    sum_incomes,
)


def make_month(
    incomes: list[int],
    payments: list[int],
    spends_per_day: list[list[int]],
    year: int = 2025,
    month: int = 1,
    prec: int = 2,
) -> Month:
    """Build a Month from whole-unit amounts at the given precision."""
    spend_id = 0
    days = []
    for number, costs in enumerate(spends_per_day, start=1):
        spends = []
        for cost in costs:
            spend_id += 1
            spends.append(Spend(SpendID(spend_id), DayID(number), f"spend {spend_id}", Money.from_int(cost, prec)))
        days.append(Day(DayID(number), MonthID(1), number, spends=spends))

    return Month(
        id=MonthID(1),
        year=year,
        month=month,
        incomes=[
            Income(IncomeID(i), MonthID(1), f"income {i}", Money.from_int(v, prec)) for i, v in enumerate(incomes, 1)
        ],
        monthly_payments=[
            MonthlyPayment(MonthlyPaymentID(i), MonthID(1), f"payment {i}", Money.from_int(v, prec))
            for i, v in enumerate(payments, 1)
        ],
        days=days,
    )


def saldos(month: Month) -> list[Money]:
    return [day.saldo for day in month.days]


class TestRecomputeScenarios:
    """End-to-end recomputation of small months."""

    def test_incomes_payments_and_spends(self) -> None:
        month = make_month([700, 150, 150], [175, 25], [[], [99, 1], [12], []])

        result = recompute_month(month, days_number=4)

        assert result.daily_budget == Money.from_int(200)
        assert saldos(result) == [Money.from_int(v) for v in (200, 300, 488, 688)]
        assert result.total_income == Money.from_int(1000)
        assert result.total_spend == Money.from_int(-312)
        assert result.result == Money.from_int(688)

    def test_cashback_cancels_a_spend(self) -> None:
        month = make_month([1000], [], [[], [99, -99], [120], []])

        result = recompute_month(month, days_number=4)

        assert result.daily_budget == Money.from_int(250)
        assert saldos(result) == [Money.from_int(v) for v in (250, 500, 630, 880)]
        assert result.total_spend == Money.from_int(-120)
        assert result.result == Money.from_int(880)

    def test_divides_by_calendar_days(self) -> None:
        """Without an explicit divisor the calendar length of the month is used."""
        month = make_month([3100], [], [[] for _ in range(31)], month=1)

        result = recompute_month(month)

        assert result.daily_budget == Money.from_int(100)
        assert result.days[-1].saldo == Money.from_int(3100)

    def test_leap_february(self) -> None:
        month = make_month([2900], [], [[] for _ in range(29)], year=2024, month=2)

        assert recompute_month(month).daily_budget == Money.from_int(100)

    def test_non_leap_february(self) -> None:
        month = make_month([2800], [], [[] for _ in range(28)], year=2025, month=2)

        assert recompute_month(month).daily_budget == Money.from_int(100)

    def test_daily_budget_truncates(self) -> None:
        month = make_month([1000], [], [[] for _ in range(30)], month=4)

        # 100000 / 30 = 3333.33 minor units
        assert recompute_month(month).daily_budget == Money(3333)

    def test_empty_month(self) -> None:
        month = make_month([], [], [[] for _ in range(30)], month=6)

        result = recompute_month(month)

        assert result.daily_budget == Money(0)
        assert result.total_income == Money(0)
        assert result.total_spend == Money(0)
        assert result.result == Money(0)
        assert all(saldo == Money(0) for saldo in saldos(result))

    def test_payments_above_income_give_negative_budget(self) -> None:
        month = make_month([100], [500], [[], [], [], []])

        result = recompute_month(month, days_number=4)

        assert result.daily_budget == Money.from_int(-100)
        assert result.days[-1].saldo == Money.from_int(-400)
        assert result.result == Money.from_int(-400)


class TestCurrencyPrecision:
    """Derived amounts stay at the precision of the month's currency."""

    def test_zero_precision_income_truncates_to_whole_units(self) -> None:
        month = make_month([1000], [], [[] for _ in range(28)], month=2, prec=0)

        result = recompute_month(month, prec=0)

        # 1000 / 28 = 35.71
        assert result.daily_budget == Money(35, 0)
        assert result.daily_budget.prec == 0
        assert result.days[-1].saldo == Money(980, 0)
        assert result.total_spend.prec == 0
        assert result.result == Money(1000, 0)

    def test_zero_precision_spends_without_payments(self) -> None:
        month = make_month([1000], [], [[], [15], [], []], prec=0)

        result = recompute_month(month, days_number=4, prec=0)

        assert saldos(result) == [Money(v, 0) for v in (250, 485, 735, 985)]
        assert all(saldo.prec == 0 for saldo in saldos(result))
        assert result.total_spend == Money(-15, 0)

    def test_zero_precision_payments_without_income(self) -> None:
        month = make_month([], [100], [[] for _ in range(28)], month=2, prec=0)

        result = recompute_month(month, prec=0)

        # -100 / 28 = -3.57, truncated toward zero
        assert result.daily_budget == Money(-3, 0)
        assert result.daily_budget.prec == 0
        assert result.total_income.prec == 0
        assert result.result == Money(-100, 0)

    def test_empty_month_at_zero_precision(self) -> None:
        result = recompute_month(make_month([], [], [[], []], prec=0), days_number=2, prec=0)

        assert result.daily_budget.prec == 0
        assert result.total_income.prec == 0
        assert all(saldo.prec == 0 for saldo in saldos(result))

    def test_three_digit_precision(self) -> None:
        month = make_month([10], [], [[], [], []], prec=3)

        result = recompute_month(month, days_number=3, prec=3)

        assert result.daily_budget == Money(3333, 3)
        assert result.daily_budget.prec == 3
        assert saldos(result) == [Money(v, 3) for v in (3333, 6666, 9999)]
        assert result.total_spend.prec == 3


class TestRecomputeProperties:
    """Invariants that hold for any month."""

    def test_idempotent(self) -> None:
        month = make_month([700, 150, 150], [175, 25], [[], [99, 1], [12], []])

        once = recompute_month(month, days_number=4)
        twice = recompute_month(once, days_number=4)

        assert twice == once

    def test_cascade(self) -> None:
        """saldo[i] = saldo[i-1] + daily_budget - spent[i]."""
        month = make_month([1234], [56], [[10, 3], [], [-5], [400], [1, 1, 1]])

        result = recompute_month(month, days_number=5)

        days = result.days
        assert days[0].saldo == result.daily_budget - day_spent(days[0])
        for previous, day in zip(days, days[1:], strict=False):
            assert day.saldo == previous.saldo + result.daily_budget - day_spent(day)

    def test_result_is_income_plus_spend(self) -> None:
        month = make_month([900, 100], [300], [[50], [25, 25], []])

        result = recompute_month(month, days_number=3)

        assert result.result == result.total_income + result.total_spend

    def test_input_is_not_modified(self) -> None:
        month = make_month([1000], [], [[10], []])

        recompute_month(month, days_number=2)

        assert month.daily_budget == Money(0)
        assert all(day.saldo == Money(0) for day in month.days)

    def test_keeps_non_derived_fields(self) -> None:
        month = make_month([1000], [100], [[10], []])

        result = recompute_month(month, days_number=2)

        assert result.incomes == month.incomes
        assert result.monthly_payments == month.monthly_payments
        assert [d.spends for d in result.days] == [d.spends for d in month.days]


class TestHelpers:
    """Tests for the recompute building blocks."""

    def test_sum_incomes(self) -> None:
        assert sum_incomes(make_month([1, 2, 3], [], [])) == Money.from_int(6)

    def test_monthly_payments_cost_is_negated(self) -> None:
        assert monthly_payments_cost(make_month([], [175, 25], [])) == Money.from_int(-200)

    def test_calculate_daily_budget(self) -> None:
        assert calculate_daily_budget(Money.from_int(1000), Money.from_int(-200), 4) == Money.from_int(200)

    def test_cascade_saldo_on_no_days(self) -> None:
        assert cascade_saldo([], Money.from_int(100)) == []
