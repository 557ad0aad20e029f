"""Date utilities for budgetmgr.

Pure functions for calendar calculations and formatting.
"""

from datetime import date, datetime, timedelta


def first_day_of_next_month(year: int, month: int) -> date:
    """Get the first day of the month following (year, month)."""
    return (date(year, month, 28) + timedelta(days=4)).replace(day=1)


def days_in_month(year: int, month: int) -> int:
    """Get number of calendar days in a month (leap years included).

    Raises:
        ValueError: If month is not in 1..12.
    """
    return (first_day_of_next_month(year, month) - date(year, month, 1)).days


def month_range(year: int, month: int) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        year: Year, e.g. 2025.
        month: Month number, 1..12.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: Last day of month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    first = date(year, month, 1)
    last = first_day_of_next_month(year, month) - timedelta(days=1)
    return first.isoformat(), last.isoformat(), first.strftime("%B %Y")


def parse_month(value: str) -> tuple[int, int]:
    """Parse 'YYYY-MM' into (year, month).

    Raises:
        ValueError: If value is not in YYYY-MM format.
    """
    dt = datetime.strptime(value, "%Y-%m")
    return dt.year, dt.month


def date_key(d: date) -> int:
    """Date as a yyyymmdd integer (comparable across storage backends)."""
    return d.year * 10000 + d.month * 100 + d.day
