"""Pure month recomputation.

This module contains the functional core of the ledger:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Whenever an income, monthly payment or spend changes, the store loads the
whole Month aggregate, passes it through recompute_month and writes the
result back in the same transaction.
"""

from dataclasses import replace

from budgetmgr.dates import days_in_month
from budgetmgr.domain.models import Day, Month
from budgetmgr.domain.money import DEFAULT_PRECISION, Money, total


def sum_incomes(month: Month, prec: int = DEFAULT_PRECISION) -> Money:
    """Total income of the month, summed in ascending id order."""
    incomes = sorted(month.incomes, key=lambda i: i.id)
    return total((i.income for i in incomes), prec)


def monthly_payments_cost(month: Month, prec: int = DEFAULT_PRECISION) -> Money:
    """Negated sum of monthly payment costs (non-positive for normal data)."""
    payments = sorted(month.monthly_payments, key=lambda p: p.id)
    return -total((p.cost for p in payments), prec)


def day_spent(day: Day, prec: int = DEFAULT_PRECISION) -> Money:
    """Sum of a day's spend costs (refunds reduce it)."""
    return total((s.cost for s in day.spends), prec)


def spends_cost(month: Month, prec: int = DEFAULT_PRECISION) -> Money:
    """Negated sum of all spend costs of the month."""
    return -total((day_spent(d, prec) for d in month.days), prec)


def calculate_daily_budget(total_income: Money, payments_cost: Money, days_number: int) -> Money:
    """Even daily allowance: (income - payments) / days_number, truncated."""
    return (total_income + payments_cost).div(days_number)


def cascade_saldo(days: list[Day], daily_budget: Money) -> list[Day]:
    """Fold the running balance over days in the order given.

    Each day starts from the previous day's saldo plus one daily budget (the
    first day starts from a single daily budget) and subtracts its spends.
    """
    result: list[Day] = []
    saldo = daily_budget
    for day in days:
        saldo = saldo - day_spent(day, daily_budget.prec)
        result.append(replace(day, saldo=saldo))
        saldo = saldo + daily_budget
    return result


def recompute_month(month: Month, days_number: int | None = None, prec: int = DEFAULT_PRECISION) -> Month:
    """Recompute derived fields of a month and the saldo of every day.

    Args:
        month: Month aggregate with incomes, payments and days (ascending by
            day number, each with its spends).
        days_number: Divisor of the daily budget. Defaults to the number
            of calendar days in the month.
        prec: Precision of the month's currency. Empty sums are zero at this
            precision, so the daily budget truncates at its minor unit.

    Returns:
        New Month with total_income, total_spend, daily_budget, result and
        every Day.saldo overwritten. Running it again on the result yields
        an identical Month.
    """
    total_income = sum_incomes(month, prec)
    payments_cost = monthly_payments_cost(month, prec)

    if days_number is None:
        days_number = days_in_month(month.year, month.month)
    daily_budget = calculate_daily_budget(total_income, payments_cost, days_number)
    # Both costs are non-positive, so they're added
    total_spend = payments_cost + spends_cost(month, prec)

    return replace(
        month,
        total_income=total_income,
        total_spend=total_spend,
        daily_budget=daily_budget,
        result=total_income + total_spend,
        days=cascade_saldo(month.days, daily_budget),
    )
