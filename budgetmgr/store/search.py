"""Render a SearchQuery descriptor to SQLite."""

from typing import Any

from budgetmgr.domain.search import (
    CostRange,
    DateRange,
    Field,
    Filter,
    Like,
    SearchQuery,
    TypeFilter,
)

SELECT_SPEND_ROWS = """
    SELECT
        spend.id AS id,
        month.year AS year,
        month.month AS month,
        day.day AS day,
        spend.title AS title,
        spend.notes AS notes,
        spend.cost AS cost,
        spend.type_id AS type_id
    FROM spends AS spend
    INNER JOIN days AS day ON day.id = spend.day_id
    INNER JOIN months AS month ON month.id = day.month_id
"""

# Comparable across backends, no date functions needed
DATE_EXPR = "(month.year * 10000 + month.month * 100 + day.day)"

COLUMNS: dict[Field, str] = {
    Field.ID: "spend.id",
    Field.YEAR: "month.year",
    Field.MONTH: "month.month",
    Field.DAY: "day.day",
    Field.TITLE: "spend.title",
    Field.NOTES: "spend.notes",
    Field.COST: "spend.cost",
    Field.TYPE_ID: "spend.type_id",
}

# Registered on every connection by store.queries, Unicode-aware unlike LOWER()
LOWER_FUNCTION = "py_lower"


def _escape_like(pattern: str) -> str:
    # '%' stays a wildcard, '_' is literal
    return pattern.replace("\\", "\\\\").replace("_", "\\_")


def _filter_to_sql(f: Filter, prec: int) -> tuple[str, list[Any]]:
    if isinstance(f, Like):
        column = COLUMNS[f.field]
        return f"{LOWER_FUNCTION}(COALESCE({column}, '')) LIKE ? ESCAPE '\\'", [_escape_like(f.pattern)]

    if isinstance(f, DateRange):
        if f.after is not None and f.before is not None:
            return f"{DATE_EXPR} BETWEEN ? AND ?", [f.after, f.before]
        if f.after is not None:
            return f"{DATE_EXPR} >= ?", [f.after]
        return f"{DATE_EXPR} <= ?", [f.before]

    if isinstance(f, CostRange):
        min_cost = f.min_cost.to_minor_units(prec) if f.min_cost is not None else None
        max_cost = f.max_cost.to_minor_units(prec) if f.max_cost is not None else None
        if min_cost is not None and max_cost is not None:
            return "spend.cost BETWEEN ? AND ?", [min_cost, max_cost]
        if min_cost is not None:
            return "spend.cost >= ?", [min_cost]
        return "spend.cost <= ?", [max_cost]

    if isinstance(f, TypeFilter):
        ors: list[str] = []
        if f.include_untyped:
            ors.append("spend.type_id IS NULL")
        if f.type_ids:
            placeholders = ", ".join("?" for _ in f.type_ids)
            ors.append(f"spend.type_id IN ({placeholders})")
        return "(" + " OR ".join(ors) + ")", list(f.type_ids)

    raise TypeError(f"unsupported filter: {f!r}")


def to_sql(query: SearchQuery, prec: int) -> tuple[str, list[Any]]:
    """Render query to a parameterised SELECT over spend rows.

    Args:
        query: Search descriptor.
        prec: Precision of the stored cost column.

    Returns:
        Tuple of (sql, params).
    """
    wheres: list[str] = []
    params: list[Any] = []
    for f in query.filters:
        where, args = _filter_to_sql(f, prec)
        wheres.append(where)
        params.extend(args)

    sql = SELECT_SPEND_ROWS
    if wheres:
        sql += " WHERE " + " AND ".join(wheres)

    orders = [COLUMNS[o.field] + (" DESC" if o.descending else " ASC") for o in query.order_by]
    sql += " ORDER BY " + ", ".join(orders)

    return sql, params
