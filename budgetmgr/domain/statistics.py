"""Pure functions for spending statistics over search results.

All inputs are SpendRow lists as returned by a spend search.
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import date, timedelta

from budgetmgr.domain.models import NO_SPEND_TYPE, SpendRow, SpendType, SpendTypeID
from budgetmgr.domain.money import DEFAULT_PRECISION, Money
from budgetmgr.domain.spend_types import ancestor_ids, full_names

NO_TYPE_NAME = "No Type"


@dataclass(frozen=True)
class DaySpent:
    date: date
    spent: Money


@dataclass(frozen=True)
class SpendTypeSpent:
    """Total spent with a type, its descendants included."""

    type_id: SpendTypeID
    name: str
    spent: Money
    depth: int


@dataclass(frozen=True)
class CostInterval:
    """Spends with cost in [low, high]."""

    low: Money
    high: Money
    count: int = 0
    total: Money = Money(0)


def spent_by_day(rows: Sequence[SpendRow], start: date, end: date, prec: int = DEFAULT_PRECISION) -> list[DaySpent]:
    """Sum spends per calendar day.

    Every day between start and end (inclusive) is present, with zero if
    nothing was spent. Days outside the range that have spends are kept too.

    Returns:
        List of DaySpent sorted by date.
    """
    spent: dict[date, Money] = {}
    for row in rows:
        day = date(row.year, row.month, row.day)
        spent[day] = spent.get(day, Money(0, prec)) + row.cost

    day = start
    while day <= end:
        spent.setdefault(day, Money(0, prec))
        day += timedelta(days=1)

    return [DaySpent(d, spent[d]) for d in sorted(spent)]


def spent_by_spend_type(
    spend_types: Sequence[SpendType], rows: Sequence[SpendRow], prec: int = DEFAULT_PRECISION
) -> list[SpendTypeSpent]:
    """Sum spends per spend type, rolling every cost up to all ancestors.

    Returns:
        Flat list in tree order: roots sorted by spent (descending), each
        followed by its children sorted the same way. Types with nothing
        spent are left out. Untyped spends are reported as a "No Type" root.
    """
    names = full_names(spend_types)
    parents = {t.id: t.parent_id for t in spend_types}

    spent: dict[SpendTypeID, Money] = {}
    for row in rows:
        type_id = row.type_id if row.type_id in parents else NO_SPEND_TYPE
        chain = [type_id]
        if type_id != NO_SPEND_TYPE:
            chain += ancestor_ids(spend_types, type_id)
        for t in chain:
            spent[t] = spent.get(t, Money(0, prec)) + row.cost
    spent = {t: value for t, value in spent.items() if value}

    children: dict[SpendTypeID, list[SpendTypeID]] = {}
    for type_id in spent:
        if type_id == NO_SPEND_TYPE:
            continue
        parent = parents.get(type_id, NO_SPEND_TYPE)
        if parent not in spent:
            parent = NO_SPEND_TYPE
        children.setdefault(parent, []).append(type_id)

    roots = children.get(NO_SPEND_TYPE, [])
    if NO_SPEND_TYPE in spent:
        roots = roots + [NO_SPEND_TYPE]

    result: list[SpendTypeSpent] = []

    def visit(type_ids: list[SpendTypeID], depth: int) -> None:
        for type_id in sorted(type_ids, key=lambda t: (-spent[t].to_decimal(), t)):
            name = names.get(type_id, NO_TYPE_NAME) if type_id != NO_SPEND_TYPE else NO_TYPE_NAME
            result.append(SpendTypeSpent(type_id, name, spent[type_id], depth))
            if type_id != NO_SPEND_TYPE:
                visit(children.get(type_id, []), depth + 1)

    visit(roots, 0)
    return result


def percentile(sorted_costs: Sequence[Money], n: int) -> Money:
    """Nearest-rank percentile of an ascending list."""
    index = -(-n * len(sorted_costs) // 100) - 1
    index = min(max(index, 0), len(sorted_costs) - 1)
    return sorted_costs[index]


def cost_intervals(rows: Sequence[SpendRow], interval_number: int) -> list[CostInterval]:
    """Split spends into interval_number cost buckets.

    Bounds run from the 5th percentile (floored to whole units) to the 95th
    percentile (ceiled). Spends outside the bounds are not counted.

    Raises:
        ValueError: If interval_number <= 0.
    """
    if interval_number <= 0:
        raise ValueError("number of intervals must be positive")
    if not rows:
        return []

    costs = sorted(row.cost for row in rows)
    low = percentile(costs, 5).floor()
    high = percentile(costs, 95).ceil()
    step = (high - low).div(interval_number).round()
    smallest_unit = Money(1, low.prec)

    intervals: list[CostInterval] = []
    bound = low
    for i in range(interval_number):
        start = bound
        bound = bound + step
        end = high if i + 1 == interval_number else bound - smallest_unit
        intervals.append(CostInterval(start, end, 0, Money(0, low.prec)))

    for row in rows:
        for i, interval in enumerate(intervals):
            if interval.low <= row.cost <= interval.high:
                intervals[i] = replace(interval, count=interval.count + 1, total=interval.total + row.cost)
                break

    return intervals
