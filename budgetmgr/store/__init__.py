"""Database store layer - provides persistence for the ledger.

This module re-exports all public database functions for easy importing.
"""

from budgetmgr.store.queries import (
    add_income,
    add_monthly_payment,
    add_spend,
    add_spend_type,
    edit_income,
    edit_monthly_payment,
    edit_spend,
    edit_spend_type,
    get_currency,
    get_day,
    get_day_id,
    get_month,
    get_month_by_date,
    get_months,
    get_spend_type,
    get_spend_types,
    init_month,
    remove_income,
    remove_monthly_payment,
    remove_spend,
    remove_spend_type,
    search_spends,
    transaction,
)
from budgetmgr.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Months and days
    "get_currency",
    "get_day",
    "get_day_id",
    "get_month",
    "get_month_by_date",
    "get_months",
    "init_month",
    "transaction",
    # Incomes
    "add_income",
    "edit_income",
    "remove_income",
    # Monthly payments
    "add_monthly_payment",
    "edit_monthly_payment",
    "remove_monthly_payment",
    # Spends
    "add_spend",
    "edit_spend",
    "remove_spend",
    "search_spends",
    # Spend types
    "add_spend_type",
    "edit_spend_type",
    "get_spend_type",
    "get_spend_types",
    "remove_spend_type",
]
