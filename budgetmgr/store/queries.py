"""Database query functions.

Every mutation of an income, monthly payment or spend runs in one
transaction together with the recomputation of its month: the row is
changed, the whole month is loaded, passed through recompute_month and
written back. Transactions start with BEGIN IMMEDIATE, which takes SQLite's
write lock up front, so there is exactly one writer (and therefore one
writer per month) at a time and a recompute never races another one.
"""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Any

from budgetmgr.dates import days_in_month
from budgetmgr.domain.args import (
    AddIncomeArgs,
    AddMonthlyPaymentArgs,
    AddSpendArgs,
    AddSpendTypeArgs,
    EditIncomeArgs,
    EditMonthlyPaymentArgs,
    EditSpendArgs,
    EditSpendTypeArgs,
    ensure_valid,
)
from budgetmgr.domain.errors import ConflictError, NotFoundError, ValidationError
from budgetmgr.domain.models import (
    NO_SPEND_TYPE,
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
    SpendRow,
    SpendType,
    SpendTypeID,
)
from budgetmgr.domain.money import Money, currency_precision
from budgetmgr.domain.recompute import recompute_month
from budgetmgr.domain.search import SearchSpendsArgs, build_search_query
from budgetmgr.domain.spend_types import has_cycle
from budgetmgr.store.schema import DEFAULT_CURRENCY, get_db_path
from budgetmgr.store.search import LOWER_FUNCTION, to_sql

logger = logging.getLogger(__name__)


def _lower(value: str | None) -> str | None:
    return value.lower() if value is not None else None


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    The connection is in autocommit mode; transaction() issues BEGIN/COMMIT.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path, isolation_level=None)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    conn.create_function(LOWER_FUNCTION, 1, _lower, deterministic=True)
    return conn


@contextmanager
def transaction(db_path: Path | None = None, write: bool = True) -> Iterator[sqlite3.Connection]:
    """Run a block inside a database transaction.

    Commits when the block finishes and rolls back on any exception.

    Args:
        db_path: Path to the database file. If None, uses default location.
        write: Take the write lock immediately (BEGIN IMMEDIATE). Read-only
            blocks use a deferred transaction for a consistent snapshot.

    Yields:
        Database connection.
    """
    conn = _connect(db_path)
    try:
        conn.execute("BEGIN IMMEDIATE" if write else "BEGIN")
        try:
            yield conn
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")
    finally:
        conn.close()


# --------------------------------------------------
# Helpers
# --------------------------------------------------


def _get_currency(conn: sqlite3.Connection) -> str:
    row = conn.execute("SELECT value FROM meta WHERE key = 'currency'").fetchone()
    return row[0] if row else DEFAULT_CURRENCY


def _get_prec(conn: sqlite3.Connection) -> int:
    return currency_precision(_get_currency(conn))


def _to_db(value: Money, prec: int) -> int:
    return value.to_minor_units(prec)


def _type_to_db(type_id: SpendTypeID | None) -> int | None:
    return None if not type_id else type_id


def _notes_to_db(notes: str | None) -> str | None:
    return notes.strip() if notes and notes.strip() else None


def _exists(conn: sqlite3.Connection, table: str, row_id: int) -> bool:
    row = conn.execute(f"SELECT COUNT(*) FROM {table} WHERE id = ?", (row_id,)).fetchone()
    return row[0] != 0


def _check_exists(conn: sqlite3.Connection, table: str, entity: str, row_id: int) -> None:
    if not _exists(conn, table, row_id):
        raise NotFoundError(entity, row_id)


def _check_spend_type(conn: sqlite3.Connection, type_id: SpendTypeID | None) -> None:
    if type_id:
        _check_exists(conn, "spend_types", "spend type", type_id)


def _update(conn: sqlite3.Connection, table: str, row_id: int, values: dict[str, Any]) -> None:
    """UPDATE only the given columns of one row."""
    if not values:
        return
    sets = ", ".join(f"{column} = ?" for column in values)
    conn.execute(f"UPDATE {table} SET {sets} WHERE id = ?", [*values.values(), row_id])


def _month_id_of(conn: sqlite3.Connection, table: str, entity: str, row_id: int) -> MonthID:
    row = conn.execute(f"SELECT month_id FROM {table} WHERE id = ?", (row_id,)).fetchone()
    if row is None:
        raise NotFoundError(entity, row_id)
    return MonthID(row[0])


def _month_id_of_spend(conn: sqlite3.Connection, spend_id: int) -> MonthID:
    row = conn.execute(
        "SELECT days.month_id FROM spends JOIN days ON days.id = spends.day_id WHERE spends.id = ?",
        (spend_id,),
    ).fetchone()
    if row is None:
        raise NotFoundError("spend", spend_id)
    return MonthID(row[0])


# --------------------------------------------------
# Month aggregate
# --------------------------------------------------


def _load_month(conn: sqlite3.Connection, month_id: int) -> Month:
    row = conn.execute("SELECT * FROM months WHERE id = ?", (month_id,)).fetchone()
    if row is None:
        raise NotFoundError("month", month_id)
    prec = _get_prec(conn)

    incomes = [
        Income(
            id=IncomeID(r["id"]),
            month_id=MonthID(r["month_id"]),
            title=r["title"],
            income=Money(r["income"], prec),
            notes=r["notes"] or "",
        )
        for r in conn.execute("SELECT * FROM incomes WHERE month_id = ? ORDER BY id", (month_id,))
    ]
    payments = [
        MonthlyPayment(
            id=MonthlyPaymentID(r["id"]),
            month_id=MonthID(r["month_id"]),
            title=r["title"],
            cost=Money(r["cost"], prec),
            type_id=SpendTypeID(r["type_id"] or NO_SPEND_TYPE),
            notes=r["notes"] or "",
        )
        for r in conn.execute("SELECT * FROM monthly_payments WHERE month_id = ? ORDER BY id", (month_id,))
    ]

    spends: dict[int, list[Spend]] = {}
    for r in conn.execute(
        """
        SELECT spends.* FROM spends
        INNER JOIN days ON days.id = spends.day_id
        WHERE days.month_id = ?
        ORDER BY spends.id
        """,
        (month_id,),
    ):
        spends.setdefault(r["day_id"], []).append(
            Spend(
                id=SpendID(r["id"]),
                day_id=DayID(r["day_id"]),
                title=r["title"],
                cost=Money(r["cost"], prec),
                type_id=SpendTypeID(r["type_id"] or NO_SPEND_TYPE),
                notes=r["notes"] or "",
            )
        )

    days = [
        Day(
            id=DayID(r["id"]),
            month_id=MonthID(r["month_id"]),
            day=r["day"],
            saldo=Money(r["saldo"], prec),
            spends=spends.get(r["id"], []),
        )
        for r in conn.execute("SELECT * FROM days WHERE month_id = ? ORDER BY day", (month_id,))
    ]

    return Month(
        id=MonthID(row["id"]),
        year=row["year"],
        month=row["month"],
        incomes=incomes,
        monthly_payments=payments,
        days=days,
        daily_budget=Money(row["daily_budget"], prec),
        total_income=Money(row["total_income"], prec),
        total_spend=Money(row["total_spend"], prec),
        result=Money(row["result"], prec),
    )


def _save_month(conn: sqlite3.Connection, month: Month) -> None:
    prec = _get_prec(conn)
    conn.execute(
        """
        UPDATE months SET daily_budget = ?, total_income = ?, total_spend = ?, result = ?
        WHERE id = ?
        """,
        (
            _to_db(month.daily_budget, prec),
            _to_db(month.total_income, prec),
            _to_db(month.total_spend, prec),
            _to_db(month.result, prec),
            month.id,
        ),
    )
    conn.executemany(
        "UPDATE days SET saldo = ? WHERE id = ?",
        [(_to_db(day.saldo, prec), day.id) for day in month.days],
    )


def _recompute_and_update_month(conn: sqlite3.Connection, month_id: MonthID) -> Month:
    month = recompute_month(_load_month(conn, month_id), prec=_get_prec(conn))
    _save_month(conn, month)
    logger.debug(
        f"month_recomputed: id={month.id} daily_budget={month.daily_budget} "
        f"total_income={month.total_income} total_spend={month.total_spend} result={month.result}"
    )
    return month


def init_month(year: int, month: int, db_path: Path | None = None) -> MonthID:
    """Create a month and its days if it doesn't exist yet.

    Args:
        year: Year.
        month: Month number (1..12).
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the (new or existing) month.

    Raises:
        ValidationError: If month is not in 1..12.
        sqlite3.Error: If database operation fails.
    """
    if not 1 <= month <= 12:
        raise ValidationError(f"invalid month: '{month}'")

    with transaction(db_path) as conn:
        row = conn.execute("SELECT id FROM months WHERE year = ? AND month = ?", (year, month)).fetchone()
        if row:
            return MonthID(row[0])

        cursor = conn.execute("INSERT INTO months (year, month) VALUES (?, ?)", (year, month))
        month_id = MonthID(cursor.lastrowid)
        conn.executemany(
            "INSERT INTO days (month_id, day) VALUES (?, ?)",
            [(month_id, day) for day in range(1, days_in_month(year, month) + 1)],
        )
        logger.info(f"month_initialized: id={month_id} year={year} month={month}")
        return month_id


def get_month(month_id: int, db_path: Path | None = None) -> Month:
    """Get full month aggregate (incomes, payments, days with spends).

    Raises:
        NotFoundError: If the month doesn't exist.
        sqlite3.Error: If database operation fails.
    """
    with transaction(db_path, write=False) as conn:
        return _load_month(conn, month_id)


def get_month_by_date(year: int, month: int, db_path: Path | None = None) -> Month:
    """Get full month aggregate by year and month number.

    Raises:
        NotFoundError: If the month doesn't exist.
        sqlite3.Error: If database operation fails.
    """
    with transaction(db_path, write=False) as conn:
        row = conn.execute("SELECT id FROM months WHERE year = ? AND month = ?", (year, month)).fetchone()
        if row is None:
            raise NotFoundError("month")
        return _load_month(conn, row[0])


def get_months(db_path: Path | None = None) -> list[Month]:
    """Get all months without their incomes, payments and days.

    Returns:
        List of months ordered by date ascending.
    """
    with transaction(db_path, write=False) as conn:
        prec = _get_prec(conn)
        rows = conn.execute("SELECT * FROM months ORDER BY year, month").fetchall()
        return [
            Month(
                id=MonthID(r["id"]),
                year=r["year"],
                month=r["month"],
                daily_budget=Money(r["daily_budget"], prec),
                total_income=Money(r["total_income"], prec),
                total_spend=Money(r["total_spend"], prec),
                result=Money(r["result"], prec),
            )
            for r in rows
        ]


def get_day_id(day: date, db_path: Path | None = None) -> DayID:
    """Get id of the Day for a calendar date.

    Raises:
        NotFoundError: If the month of this date hasn't been initialized.
    """
    with transaction(db_path, write=False) as conn:
        row = conn.execute(
            """
            SELECT days.id FROM days
            INNER JOIN months ON months.id = days.month_id
            WHERE months.year = ? AND months.month = ? AND days.day = ?
            """,
            (day.year, day.month, day.day),
        ).fetchone()
        if row is None:
            raise NotFoundError("day")
        return DayID(row[0])


def get_day(day_id: int, db_path: Path | None = None) -> Day:
    """Get a day with its spends.

    Raises:
        NotFoundError: If the day doesn't exist.
    """
    with transaction(db_path, write=False) as conn:
        month_id = _month_id_of(conn, "days", "day", day_id)
        month = _load_month(conn, month_id)
        return next(day for day in month.days if day.id == day_id)


def get_currency(db_path: Path | None = None) -> str:
    """Get currency code of the database."""
    with transaction(db_path, write=False) as conn:
        return _get_currency(conn)


# --------------------------------------------------
# Income
# --------------------------------------------------


def add_income(args: AddIncomeArgs, db_path: Path | None = None) -> IncomeID:
    """Add an income and recompute its month.

    Returns:
        ID of the new income.

    Raises:
        ValidationError: If args are invalid.
        NotFoundError: If the month doesn't exist.
        sqlite3.Error: If database operation fails.
    """
    ensure_valid(args)

    with transaction(db_path) as conn:
        _check_exists(conn, "months", "month", args.month_id)
        cursor = conn.execute(
            "INSERT INTO incomes (month_id, title, notes, income) VALUES (?, ?, ?, ?)",
            (args.month_id, args.title.strip(), _notes_to_db(args.notes), _to_db(args.income, _get_prec(conn))),
        )
        income_id = IncomeID(cursor.lastrowid)
        _recompute_and_update_month(conn, args.month_id)

    logger.info(f"income_added: id={income_id} month_id={args.month_id} income={args.income}")
    return income_id


def edit_income(args: EditIncomeArgs, db_path: Path | None = None) -> None:
    """Edit an income. The month is recomputed only if the amount changed.

    Raises:
        ValidationError: If args are invalid.
        NotFoundError: If the income doesn't exist.
        sqlite3.Error: If database operation fails.
    """
    ensure_valid(args)

    with transaction(db_path) as conn:
        month_id = _month_id_of(conn, "incomes", "income", args.id)

        values: dict[str, Any] = {}
        if args.title is not None:
            values["title"] = args.title.strip()
        if args.notes is not None:
            values["notes"] = _notes_to_db(args.notes)
        if args.income is not None:
            values["income"] = _to_db(args.income, _get_prec(conn))
        _update(conn, "incomes", args.id, values)

        if args.income is not None:
            _recompute_and_update_month(conn, month_id)

    logger.info(f"income_edited: id={args.id} fields={sorted(values)}")


def remove_income(income_id: int, db_path: Path | None = None) -> None:
    """Remove an income and recompute its month.

    Raises:
        NotFoundError: If the income doesn't exist.
        sqlite3.Error: If database operation fails.
    """
    with transaction(db_path) as conn:
        month_id = _month_id_of(conn, "incomes", "income", income_id)
        conn.execute("DELETE FROM incomes WHERE id = ?", (income_id,))
        _recompute_and_update_month(conn, month_id)

    logger.info(f"income_removed: id={income_id} month_id={month_id}")


# --------------------------------------------------
# Monthly Payment
# --------------------------------------------------


def add_monthly_payment(args: AddMonthlyPaymentArgs, db_path: Path | None = None) -> MonthlyPaymentID:
    """Add a monthly payment and recompute its month.

    Returns:
        ID of the new monthly payment.

    Raises:
        ValidationError: If args are invalid.
        NotFoundError: If the month or spend type doesn't exist.
        sqlite3.Error: If database operation fails.
    """
    ensure_valid(args)

    with transaction(db_path) as conn:
        _check_exists(conn, "months", "month", args.month_id)
        _check_spend_type(conn, args.type_id)
        cursor = conn.execute(
            "INSERT INTO monthly_payments (month_id, type_id, title, notes, cost) VALUES (?, ?, ?, ?, ?)",
            (
                args.month_id,
                _type_to_db(args.type_id),
                args.title.strip(),
                _notes_to_db(args.notes),
                _to_db(args.cost, _get_prec(conn)),
            ),
        )
        payment_id = MonthlyPaymentID(cursor.lastrowid)
        _recompute_and_update_month(conn, args.month_id)

    logger.info(f"monthly_payment_added: id={payment_id} month_id={args.month_id} cost={args.cost}")
    return payment_id


def edit_monthly_payment(args: EditMonthlyPaymentArgs, db_path: Path | None = None) -> None:
    """Edit a monthly payment. The month is recomputed only if the cost changed.

    Raises:
        ValidationError: If args are invalid.
        NotFoundError: If the payment or the new spend type doesn't exist.
        sqlite3.Error: If database operation fails.
    """
    ensure_valid(args)

    with transaction(db_path) as conn:
        month_id = _month_id_of(conn, "monthly_payments", "monthly payment", args.id)
        _check_spend_type(conn, args.type_id)

        values: dict[str, Any] = {}
        if args.title is not None:
            values["title"] = args.title.strip()
        if args.type_id is not None:
            values["type_id"] = _type_to_db(args.type_id)
        if args.notes is not None:
            values["notes"] = _notes_to_db(args.notes)
        if args.cost is not None:
            values["cost"] = _to_db(args.cost, _get_prec(conn))
        _update(conn, "monthly_payments", args.id, values)

        if args.cost is not None:
            _recompute_and_update_month(conn, month_id)

    logger.info(f"monthly_payment_edited: id={args.id} fields={sorted(values)}")


def remove_monthly_payment(payment_id: int, db_path: Path | None = None) -> None:
    """Remove a monthly payment and recompute its month.

    Raises:
        NotFoundError: If the payment doesn't exist.
        sqlite3.Error: If database operation fails.
    """
    with transaction(db_path) as conn:
        month_id = _month_id_of(conn, "monthly_payments", "monthly payment", payment_id)
        conn.execute("DELETE FROM monthly_payments WHERE id = ?", (payment_id,))
        _recompute_and_update_month(conn, month_id)

    logger.info(f"monthly_payment_removed: id={payment_id} month_id={month_id}")


# --------------------------------------------------
# Spend
# --------------------------------------------------


def add_spend(args: AddSpendArgs, db_path: Path | None = None) -> SpendID:
    """Add a spend and recompute its month.

    Returns:
        ID of the new spend.

    Raises:
        ValidationError: If args are invalid.
        NotFoundError: If the day or spend type doesn't exist.
        sqlite3.Error: If database operation fails.
    """
    ensure_valid(args)

    with transaction(db_path) as conn:
        month_id = _month_id_of(conn, "days", "day", args.day_id)
        _check_spend_type(conn, args.type_id)
        cursor = conn.execute(
            "INSERT INTO spends (day_id, type_id, title, notes, cost) VALUES (?, ?, ?, ?, ?)",
            (
                args.day_id,
                _type_to_db(args.type_id),
                args.title.strip(),
                _notes_to_db(args.notes),
                _to_db(args.cost, _get_prec(conn)),
            ),
        )
        spend_id = SpendID(cursor.lastrowid)
        _recompute_and_update_month(conn, month_id)

    logger.info(f"spend_added: id={spend_id} day_id={args.day_id} cost={args.cost}")
    return spend_id


def edit_spend(args: EditSpendArgs, db_path: Path | None = None) -> None:
    """Edit a spend. The month is recomputed only if the cost changed.

    Raises:
        ValidationError: If args are invalid.
        NotFoundError: If the spend or the new spend type doesn't exist.
        sqlite3.Error: If database operation fails.
    """
    ensure_valid(args)

    with transaction(db_path) as conn:
        month_id = _month_id_of_spend(conn, args.id)
        _check_spend_type(conn, args.type_id)

        values: dict[str, Any] = {}
        if args.title is not None:
            values["title"] = args.title.strip()
        if args.type_id is not None:
            values["type_id"] = _type_to_db(args.type_id)
        if args.notes is not None:
            values["notes"] = _notes_to_db(args.notes)
        if args.cost is not None:
            values["cost"] = _to_db(args.cost, _get_prec(conn))
        _update(conn, "spends", args.id, values)

        if args.cost is not None:
            _recompute_and_update_month(conn, month_id)

    logger.info(f"spend_edited: id={args.id} fields={sorted(values)}")


def remove_spend(spend_id: int, db_path: Path | None = None) -> None:
    """Remove a spend and recompute its month.

    Raises:
        NotFoundError: If the spend doesn't exist.
        sqlite3.Error: If database operation fails.
    """
    with transaction(db_path) as conn:
        month_id = _month_id_of_spend(conn, spend_id)
        conn.execute("DELETE FROM spends WHERE id = ?", (spend_id,))
        _recompute_and_update_month(conn, month_id)

    logger.info(f"spend_removed: id={spend_id} month_id={month_id}")


# --------------------------------------------------
# Spend Type
# --------------------------------------------------


def _load_spend_types(conn: sqlite3.Connection) -> list[SpendType]:
    return [
        SpendType(id=SpendTypeID(r["id"]), name=r["name"], parent_id=SpendTypeID(r["parent_id"] or NO_SPEND_TYPE))
        for r in conn.execute("SELECT * FROM spend_types ORDER BY id")
    ]


def get_spend_types(db_path: Path | None = None) -> list[SpendType]:
    """Get all spend types ordered by id."""
    with transaction(db_path, write=False) as conn:
        return _load_spend_types(conn)


def get_spend_type(type_id: int, db_path: Path | None = None) -> SpendType:
    """Get a spend type.

    Raises:
        NotFoundError: If the spend type doesn't exist.
    """
    with transaction(db_path, write=False) as conn:
        r = conn.execute("SELECT * FROM spend_types WHERE id = ?", (type_id,)).fetchone()
        if r is None:
            raise NotFoundError("spend type", type_id)
        return SpendType(id=SpendTypeID(r["id"]), name=r["name"], parent_id=SpendTypeID(r["parent_id"] or NO_SPEND_TYPE))


def add_spend_type(args: AddSpendTypeArgs, db_path: Path | None = None) -> SpendTypeID:
    """Add a spend type.

    Returns:
        ID of the new spend type.

    Raises:
        ValidationError: If args are invalid.
        NotFoundError: If the parent doesn't exist.
    """
    ensure_valid(args)

    with transaction(db_path) as conn:
        _check_spend_type(conn, args.parent_id)
        cursor = conn.execute(
            "INSERT INTO spend_types (name, parent_id) VALUES (?, ?)",
            (args.name.strip(), _type_to_db(args.parent_id)),
        )
        type_id = SpendTypeID(cursor.lastrowid)

    logger.info(f"spend_type_added: id={type_id} parent_id={args.parent_id}")
    return type_id


def edit_spend_type(args: EditSpendTypeArgs, db_path: Path | None = None) -> None:
    """Edit a spend type.

    A new parent is checked against a snapshot of all spend types taken in
    the same transaction, before anything is written.

    Raises:
        ValidationError: If args are invalid.
        NotFoundError: If the spend type or the new parent doesn't exist.
        ConflictError: If the new parent would create a cycle or the
            hierarchy is already malformed (SpendTypeGraphError).
    """
    ensure_valid(args)

    with transaction(db_path) as conn:
        _check_exists(conn, "spend_types", "spend type", args.id)

        values: dict[str, Any] = {}
        if args.name is not None:
            values["name"] = args.name.strip()
        if args.parent_id is not None:
            _check_spend_type(conn, args.parent_id)
            if has_cycle(_load_spend_types(conn), args.id, args.parent_id):
                raise ConflictError("spend type with new parent type will have a cycle")
            values["parent_id"] = _type_to_db(args.parent_id)
        _update(conn, "spend_types", args.id, values)

    logger.info(f"spend_type_edited: id={args.id} fields={sorted(values)}")


def remove_spend_type(type_id: int, db_path: Path | None = None) -> None:
    """Remove a spend type that no payment, spend or child type uses.

    Raises:
        NotFoundError: If the spend type doesn't exist.
        ConflictError: If the spend type is still in use.
    """
    with transaction(db_path) as conn:
        _check_exists(conn, "spend_types", "spend type", type_id)

        for table, column in (("monthly_payments", "type_id"), ("spends", "type_id"), ("spend_types", "parent_id")):
            row = conn.execute(f"SELECT COUNT(*) FROM {table} WHERE {column} = ?", (type_id,)).fetchone()
            if row[0] != 0:
                raise ConflictError(f"spend type is used in {table.replace('_', ' ')}")

        conn.execute("DELETE FROM spend_types WHERE id = ?", (type_id,))

    logger.info(f"spend_type_removed: id={type_id}")


# --------------------------------------------------
# Search
# --------------------------------------------------


def search_spends(args: SearchSpendsArgs, db_path: Path | None = None) -> list[SpendRow]:
    """Search spends across all months.

    Args:
        args: Search filter. An empty filter returns every spend ordered by
            date and id.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Matching spends.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    query = build_search_query(args)

    with transaction(db_path, write=False) as conn:
        prec = _get_prec(conn)
        sql, params = to_sql(query, prec)
        rows = conn.execute(sql, params).fetchall()

    return [
        SpendRow(
            id=SpendID(r["id"]),
            year=r["year"],
            month=r["month"],
            day=r["day"],
            title=r["title"],
            cost=Money(r["cost"], prec),
            type_id=SpendTypeID(r["type_id"] or NO_SPEND_TYPE),
            notes=r["notes"] or "",
        )
        for r in rows
    ]
