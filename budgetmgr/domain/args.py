"""Arguments of mutating operations and their validation.

Every args type implements the same capability:

    validate() -> tuple[bool, str | None]

returning (is_valid, error_message), and ensure_valid() turns a failed
validation into a ValidationError. Edit args use None for "unchanged".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from budgetmgr.domain.errors import ValidationError
from budgetmgr.domain.models import (
    NO_SPEND_TYPE,
    DayID,
    IncomeID,
    MonthID,
    MonthlyPaymentID,
    SpendID,
    SpendTypeID,
)
from budgetmgr.domain.money import Money


class SpendCostPolicy(str, Enum):
    """Which spend costs are accepted."""

    POSITIVE = "positive"
    NON_NEGATIVE = "non_negative"
    ANY = "any"  # refunds/cashback as negative costs


class Validatable(Protocol):
    def validate(self) -> tuple[bool, str | None]: ...


def ensure_valid(args: Validatable) -> None:
    """Raise ValidationError if args are invalid."""
    ok, error = args.validate()
    if not ok:
        raise ValidationError(error or "invalid arguments")


def _check_title(title: str | None, field: str = "title") -> str | None:
    if title is not None and not title.strip():
        return f"{field} can't be empty"
    return None


def _check_positive(value: Money | None, field: str) -> str | None:
    if value is not None and value.amount <= 0:
        return f"invalid {field}: '{value}'"
    return None


def _check_spend_cost(cost: Money | None, policy: SpendCostPolicy) -> str | None:
    if cost is None:
        return None
    if policy is SpendCostPolicy.POSITIVE and cost.amount <= 0:
        return f"invalid cost: '{cost}'"
    if policy is SpendCostPolicy.NON_NEGATIVE and cost.amount < 0:
        return f"invalid cost: '{cost}'"
    return None


def _result(*errors: str | None) -> tuple[bool, str | None]:
    for error in errors:
        if error:
            return False, error
    return True, None


# Income


@dataclass(frozen=True)
class AddIncomeArgs:
    month_id: MonthID
    title: str
    income: Money
    notes: str = ""

    def validate(self) -> tuple[bool, str | None]:
        return _result(_check_title(self.title), _check_positive(self.income, "income"))


@dataclass(frozen=True)
class EditIncomeArgs:
    id: IncomeID
    title: str | None = None
    notes: str | None = None
    income: Money | None = None

    def validate(self) -> tuple[bool, str | None]:
        return _result(_check_title(self.title), _check_positive(self.income, "income"))


# Monthly Payment


@dataclass(frozen=True)
class AddMonthlyPaymentArgs:
    month_id: MonthID
    title: str
    cost: Money
    type_id: SpendTypeID = NO_SPEND_TYPE
    notes: str = ""

    def validate(self) -> tuple[bool, str | None]:
        return _result(_check_title(self.title), _check_positive(self.cost, "cost"))


@dataclass(frozen=True)
class EditMonthlyPaymentArgs:
    id: MonthlyPaymentID
    title: str | None = None
    type_id: SpendTypeID | None = None
    notes: str | None = None
    cost: Money | None = None

    def validate(self) -> tuple[bool, str | None]:
        return _result(_check_title(self.title), _check_positive(self.cost, "cost"))


# Spend


@dataclass(frozen=True)
class AddSpendArgs:
    day_id: DayID
    title: str
    cost: Money
    type_id: SpendTypeID = NO_SPEND_TYPE
    notes: str = ""
    cost_policy: SpendCostPolicy = SpendCostPolicy.ANY

    def validate(self) -> tuple[bool, str | None]:
        return _result(_check_title(self.title), _check_spend_cost(self.cost, self.cost_policy))


@dataclass(frozen=True)
class EditSpendArgs:
    id: SpendID
    title: str | None = None
    type_id: SpendTypeID | None = None
    notes: str | None = None
    cost: Money | None = None
    cost_policy: SpendCostPolicy = SpendCostPolicy.ANY

    def validate(self) -> tuple[bool, str | None]:
        return _result(_check_title(self.title), _check_spend_cost(self.cost, self.cost_policy))


# Spend Type


@dataclass(frozen=True)
class AddSpendTypeArgs:
    name: str
    parent_id: SpendTypeID = NO_SPEND_TYPE

    def validate(self) -> tuple[bool, str | None]:
        return _result(_check_title(self.name, "name"))


@dataclass(frozen=True)
class EditSpendTypeArgs:
    id: SpendTypeID
    name: str | None = None
    parent_id: SpendTypeID | None = None

    def validate(self) -> tuple[bool, str | None]:
        return _result(_check_title(self.name, "name"))
