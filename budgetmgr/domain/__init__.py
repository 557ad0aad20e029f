"""Domain models and pure logic for budgetmgr.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from budgetmgr.domain.errors import (
    BudgetError,
    ConflictError,
    NotFoundError,
    SpendTypeGraphError,
    ValidationError,
)
from budgetmgr.domain.models import Day, Income, Month, MonthlyPayment, Spend, SpendRow, SpendType
from budgetmgr.domain.money import Money
from budgetmgr.domain.recompute import recompute_month
from budgetmgr.domain.search import SearchSpendsArgs, build_search_query
from budgetmgr.domain.spend_types import has_cycle

__all__ = [
    "BudgetError",
    "ConflictError",
    "Day",
    "Income",
    "Money",
    "Month",
    "MonthlyPayment",
    "NotFoundError",
    "SearchSpendsArgs",
    "Spend",
    "SpendRow",
    "SpendType",
    "SpendTypeGraphError",
    "ValidationError",
    "build_search_query",
    "has_cycle",
    "recompute_month",
]
