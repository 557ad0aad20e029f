"""Shared helpers for commands: console, settings, parsing and error exits."""

import logging
import sqlite3
import sys
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from dataclasses import dataclass
from datetime import date
from pathlib import Path

import pandas as pd
from rich.console import Console

from budgetmgr.config import Settings, load_settings
from budgetmgr.dates import parse_month
from budgetmgr.domain.errors import BudgetError, ConflictError, NotFoundError
from budgetmgr.domain.money import Money, currency_precision
from budgetmgr.store.queries import get_currency
from budgetmgr.store.schema import get_db_path

console = Console()
logger = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_NOT_FOUND = 2
EXIT_CONFLICT = 3

CURRENCY_SYMBOLS = {
    "GBP": "£",
    "EUR": "€",
    "USD": "$",
    "JPY": "¥",
    "RUB": "₽",
}


@dataclass(frozen=True)
class Context:
    """Everything a command needs to talk to the database."""

    settings: Settings
    db_path: Path
    currency: str

    @property
    def prec(self) -> int:
        return currency_precision(self.currency)

    @property
    def symbol(self) -> str:
        return CURRENCY_SYMBOLS.get(self.currency, "")


def load_context() -> Context:
    """Load settings and open the configured database.

    Exits with an error if the database hasn't been initialized.
    """
    with handle_errors():
        settings = load_settings()
        db_path = settings.db_path or get_db_path()
        if not db_path.exists():
            console.print("[red]Database not found. Run 'budgetmgr init' first.[/red]", style="bold")
            sys.exit(EXIT_ERROR)
        return Context(settings=settings, db_path=db_path, currency=get_currency(db_path))


@contextmanager
def handle_errors() -> Iterator[None]:
    """Print domain and database errors in red and exit with their code."""
    try:
        yield
    except NotFoundError as e:
        console.print(f"[red]Not found: {e}[/red]", style="bold")
        sys.exit(EXIT_NOT_FOUND)
    except ConflictError as e:
        console.print(f"[red]Conflict: {e}[/red]", style="bold")
        sys.exit(EXIT_CONFLICT)
    except BudgetError as e:
        console.print(f"[red]Error: {e}[/red]", style="bold")
        sys.exit(EXIT_ERROR)
    except sqlite3.Error as e:
        logger.debug("database error", exc_info=True)
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(EXIT_ERROR)


def parse_date(raw: str) -> date:
    """Parse a user-typed date (YYYY-MM-DD, DD/MM/YYYY, ...).

    ISO dates are read as year-month-day; anything else goes through pandas
    with the day first.

    Raises:
        ValueError: If the date cannot be parsed.
    """
    with suppress(ValueError):
        return date.fromisoformat(raw.strip())
    try:
        parsed = pd.to_datetime(raw, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw}': {e}") from e
    if pd.isna(parsed):
        raise ValueError(f"Could not parse date '{raw}'")
    return parsed.date()


def parse_date_or_exit(raw: str | None) -> date | None:
    if raw is None:
        return None
    try:
        return parse_date(raw)
    except ValueError as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(EXIT_ERROR)


def parse_money(raw: str | None, prec: int) -> Money | None:
    """Parse an amount typed on the command line, None stays None.

    Raises:
        ValidationError: If raw isn't a number.
    """
    if raw is None:
        return None
    return Money.from_string(raw, prec)


def format_money(value: Money, ctx: Context, colored: bool = False) -> str:
    text = value.format(ctx.symbol)
    if not colored:
        return text
    if value.amount < 0:
        return f"[red]{text}[/red]"
    return f"[green]{text}[/green]"


def parse_month_or_exit(raw: str | None) -> tuple[int, int]:
    """Parse YYYY-MM into (year, month); None means the current month."""
    if raw is None:
        today = date.today()
        return today.year, today.month
    try:
        return parse_month(raw)
    except ValueError:
        console.print(f"[red]Invalid month format: {raw}. Use YYYY-MM[/red]")
        sys.exit(EXIT_ERROR)
