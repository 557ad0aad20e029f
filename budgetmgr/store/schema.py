"""Database schema initialization."""

import os
import sqlite3
from pathlib import Path

from budgetmgr.domain.money import currency_precision

DEFAULT_CURRENCY = "GBP"


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "budgetmgr" / "budgetmgr.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


# Monetary columns hold integer minor units at the precision of the currency in meta
TABLES = [
    """
    CREATE TABLE IF NOT EXISTS meta (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS months (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        year INTEGER NOT NULL,
        month INTEGER NOT NULL,
        daily_budget INTEGER NOT NULL DEFAULT 0,
        total_income INTEGER NOT NULL DEFAULT 0,
        total_spend INTEGER NOT NULL DEFAULT 0,
        result INTEGER NOT NULL DEFAULT 0,
        UNIQUE (year, month)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS days (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        month_id INTEGER NOT NULL REFERENCES months(id),
        day INTEGER NOT NULL,
        saldo INTEGER NOT NULL DEFAULT 0,
        UNIQUE (month_id, day)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS spend_types (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        parent_id INTEGER REFERENCES spend_types(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS incomes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        month_id INTEGER NOT NULL REFERENCES months(id),
        title TEXT NOT NULL,
        notes TEXT,
        income INTEGER NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS monthly_payments (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        month_id INTEGER NOT NULL REFERENCES months(id),
        type_id INTEGER REFERENCES spend_types(id),
        title TEXT NOT NULL,
        notes TEXT,
        cost INTEGER NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS spends (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        day_id INTEGER NOT NULL REFERENCES days(id),
        type_id INTEGER REFERENCES spend_types(id),
        title TEXT NOT NULL,
        notes TEXT,
        cost INTEGER NOT NULL
    )
    """,
]

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_days_month ON days(month_id, day)",
    "CREATE INDEX IF NOT EXISTS idx_incomes_month ON incomes(month_id)",
    "CREATE INDEX IF NOT EXISTS idx_payments_month ON monthly_payments(month_id)",
    "CREATE INDEX IF NOT EXISTS idx_spends_day ON spends(day_id)",
    "CREATE INDEX IF NOT EXISTS idx_spends_type ON spends(type_id)",
]


def init_database(db_path: Path | None = None, currency: str = DEFAULT_CURRENCY) -> None:
    """Initialize the database with the required schema.

    Safe to run on an existing database; the currency of an existing
    database is never changed.

    Args:
        db_path: Path to the database file. If None, uses default location.
        currency: Currency of all amounts stored in a new database.

    Raises:
        sqlite3.Error: If database initialization fails.
    """
    # Raises ValidationError for an unknown currency
    currency_precision(currency)

    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    try:
        for statement in TABLES:
            cursor.execute(statement)

        cursor.execute("INSERT OR IGNORE INTO meta (key, value) VALUES ('currency', ?)", (currency.upper(),))

        for statement in INDEXES:
            cursor.execute(statement)

        conn.commit()

    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
