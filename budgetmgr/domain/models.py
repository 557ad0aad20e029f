"""Domain type definitions for budgetmgr.

The ledger is organised in Months. A Month owns its Incomes, Monthly Payments
and one Day per calendar day; every Day owns its Spends. Spend Types form a
forest through parent_id (0 means root) and are only referenced.

Derived fields (daily_budget, total_income, total_spend, result, Day.saldo)
are only ever produced by domain.recompute.recompute_month.
"""

from dataclasses import dataclass, field
from typing import NewType

from budgetmgr.domain.money import Money

MonthID = NewType("MonthID", int)
DayID = NewType("DayID", int)
IncomeID = NewType("IncomeID", int)
MonthlyPaymentID = NewType("MonthlyPaymentID", int)
SpendID = NewType("SpendID", int)
SpendTypeID = NewType("SpendTypeID", int)

# parent_id / type_id value for "no spend type"
NO_SPEND_TYPE = SpendTypeID(0)


@dataclass(frozen=True)
class SpendType:
    """Category tag for payments and spends."""

    id: SpendTypeID
    name: str
    parent_id: SpendTypeID = NO_SPEND_TYPE


@dataclass(frozen=True)
class Income:
    id: IncomeID
    month_id: MonthID
    title: str
    income: Money
    notes: str = ""


@dataclass(frozen=True)
class MonthlyPayment:
    id: MonthlyPaymentID
    month_id: MonthID
    title: str
    cost: Money
    type_id: SpendTypeID = NO_SPEND_TYPE
    notes: str = ""


@dataclass(frozen=True)
class Spend:
    """A single spend. Negative cost is a refund or cashback."""

    id: SpendID
    day_id: DayID
    title: str
    cost: Money
    type_id: SpendTypeID = NO_SPEND_TYPE
    notes: str = ""


@dataclass(frozen=True)
class Day:
    id: DayID
    month_id: MonthID
    day: int
    saldo: Money = Money(0)
    spends: list[Spend] = field(default_factory=list)


@dataclass(frozen=True)
class Month:
    """Month aggregate with its incomes, payments and days (ascending)."""

    id: MonthID
    year: int
    month: int
    incomes: list[Income] = field(default_factory=list)
    monthly_payments: list[MonthlyPayment] = field(default_factory=list)
    days: list[Day] = field(default_factory=list)
    daily_budget: Money = Money(0)
    total_income: Money = Money(0)
    total_spend: Money = Money(0)
    result: Money = Money(0)


@dataclass(frozen=True)
class SpendRow:
    """Spend joined with its calendar date, as returned by a search."""

    id: SpendID
    year: int
    month: int
    day: int
    title: str
    cost: Money
    type_id: SpendTypeID = NO_SPEND_TYPE
    notes: str = ""

    @property
    def date_key(self) -> int:
        """Date as a yyyymmdd integer."""
        return self.year * 10000 + self.month * 100 + self.day
