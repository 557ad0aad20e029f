"""CLI entry point for budgetmgr."""

import sys

import typer
from rich.console import Console

from budgetmgr.commands import incomes, months, payments, spend_types, spends
from budgetmgr.commands.admin import init_command
from budgetmgr.commands.search import search_command
from budgetmgr.commands.stats import stats_command
from budgetmgr.config import load_settings
from budgetmgr.domain.errors import ValidationError
from budgetmgr.domain.search import Order, SortBy
from budgetmgr.logs import configure_logging

app = typer.Typer(
    name="budgetmgr",
    help="budgetmgr - monthly budget ledger with a daily allowance",
    add_completion=False,
)
month_app = typer.Typer(help="Show months and their days.")
income_app = typer.Typer(help="Manage the incomes of a month.")
payment_app = typer.Typer(help="Manage the monthly payments of a month.")
spend_app = typer.Typer(help="Manage your daily spends.")
type_app = typer.Typer(help="Manage spend types.")

app.add_typer(month_app, name="month")
app.add_typer(income_app, name="income")
app.add_typer(payment_app, name="payment")
app.add_typer(spend_app, name="spend")
app.add_typer(type_app, name="type")

console = Console()


@app.callback()
def main() -> None:
    """budgetmgr - monthly budget ledger with a daily allowance."""
    try:
        settings = load_settings()
    except ValidationError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]", style="bold")
        sys.exit(1)
    configure_logging(settings.log_level)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
    currency: str = typer.Option(None, "--currency", help="Currency of the new database (default from config)"),
) -> None:
    """Initialize budgetmgr database and configuration."""
    init_command(force, currency)


# Months


@month_app.command(name="show")
def month_show(
    month: str = typer.Option(None, "--month", help="Month to show (YYYY-MM, default: current)"),
) -> None:
    """Show totals, incomes, payments and the saldo of every day."""
    months.show_command(month)


@month_app.command(name="list")
def month_list() -> None:
    """List all months with their totals."""
    months.list_command()


# Incomes


@income_app.command(name="add")
def income_add(
    title: str,
    income: str,
    month: str = typer.Option(None, "--month", help="Month (YYYY-MM, default: current)"),
    notes: str = typer.Option("", "--notes", help="Notes"),
) -> None:
    """Add an income."""
    incomes.add_command(title, income, month, notes)


@income_app.command(name="edit")
def income_edit(
    income_id: int,
    title: str = typer.Option(None, "--title", help="New title"),
    income: str = typer.Option(None, "--income", help="New amount"),
    notes: str = typer.Option(None, "--notes", help="New notes"),
) -> None:
    """Edit an income."""
    incomes.edit_command(income_id, title, income, notes)


@income_app.command(name="remove")
def income_remove(income_id: int) -> None:
    """Remove an income."""
    incomes.remove_command(income_id)


# Monthly payments


@payment_app.command(name="add")
def payment_add(
    title: str,
    cost: str,
    month: str = typer.Option(None, "--month", help="Month (YYYY-MM, default: current)"),
    type_id: int = typer.Option(0, "--type", help="Spend type ID"),
    notes: str = typer.Option("", "--notes", help="Notes"),
) -> None:
    """Add a monthly payment."""
    payments.add_command(title, cost, month, type_id, notes)


@payment_app.command(name="edit")
def payment_edit(
    payment_id: int,
    title: str = typer.Option(None, "--title", help="New title"),
    cost: str = typer.Option(None, "--cost", help="New cost"),
    type_id: int = typer.Option(None, "--type", help="New spend type ID (0 to clear)"),
    notes: str = typer.Option(None, "--notes", help="New notes"),
) -> None:
    """Edit a monthly payment."""
    payments.edit_command(payment_id, title, cost, type_id, notes)


@payment_app.command(name="remove")
def payment_remove(payment_id: int) -> None:
    """Remove a monthly payment."""
    payments.remove_command(payment_id)


# Spends


@spend_app.command(name="add")
def spend_add(
    title: str,
    cost: str,
    spend_date: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD, DD/MM/YYYY, default: today)"),
    type_id: int = typer.Option(0, "--type", help="Spend type ID"),
    notes: str = typer.Option("", "--notes", help="Notes"),
) -> None:
    """Add a spend. Use a negative cost for a refund."""
    spends.add_command(title, cost, spend_date, type_id, notes)


@spend_app.command(name="edit")
def spend_edit(
    spend_id: int,
    title: str = typer.Option(None, "--title", help="New title"),
    cost: str = typer.Option(None, "--cost", help="New cost"),
    type_id: int = typer.Option(None, "--type", help="New spend type ID (0 to clear)"),
    notes: str = typer.Option(None, "--notes", help="New notes"),
) -> None:
    """Edit a spend."""
    spends.edit_command(spend_id, title, cost, type_id, notes)


@spend_app.command(name="remove")
def spend_remove(spend_id: int) -> None:
    """Remove a spend."""
    spends.remove_command(spend_id)


# Spend types


@type_app.command(name="list")
def type_list() -> None:
    """List spend types."""
    spend_types.list_command()


@type_app.command(name="add")
def type_add(
    name: str,
    parent_id: int = typer.Option(0, "--parent", help="Parent spend type ID"),
) -> None:
    """Add a spend type."""
    spend_types.add_command(name, parent_id)


@type_app.command(name="edit")
def type_edit(
    type_id: int,
    name: str = typer.Option(None, "--name", help="New name"),
    parent_id: int = typer.Option(None, "--parent", help="New parent spend type ID (0 for none)"),
) -> None:
    """Edit a spend type."""
    spend_types.edit_command(type_id, name, parent_id)


@type_app.command(name="remove")
def type_remove(type_id: int) -> None:
    """Remove a spend type."""
    spend_types.remove_command(type_id)


@app.command()
def search(
    title: str = typer.Option("", "--title", help="Title contains (case-insensitive)"),
    notes: str = typer.Option("", "--notes", help="Notes contain (case-insensitive)"),
    title_exactly: bool = typer.Option(False, "--title-exactly", help="Match the whole title"),
    notes_exactly: bool = typer.Option(False, "--notes-exactly", help="Match the whole notes"),
    after: str = typer.Option(None, "--after", help="On or after date"),
    before: str = typer.Option(None, "--before", help="On or before date"),
    min_cost: str = typer.Option(None, "--min-cost", help="Minimum cost"),
    max_cost: str = typer.Option(None, "--max-cost", help="Maximum cost"),
    without_type: bool = typer.Option(False, "--without-type", help="Only spends without a type"),
    type_ids: list[int] = typer.Option(None, "--type", help="Spend type ID (repeatable, 0 for no type)"),
    sort: SortBy = typer.Option(SortBy.DATE, "--sort", help="Sort by"),
    order: Order = typer.Option(Order.ASC, "--order", help="Sort order"),
) -> None:
    """Search your spends across all months."""
    search_command(
        title,
        notes,
        title_exactly,
        notes_exactly,
        after,
        before,
        min_cost,
        max_cost,
        without_type,
        type_ids,
        sort,
        order,
    )


@app.command()
def stats(
    after: str = typer.Option(None, "--after", help="Start date (default: first day of current month)"),
    before: str = typer.Option(None, "--before", help="End date (default: last day of current month)"),
    intervals: int = typer.Option(10, "--intervals", help="Number of cost intervals"),
) -> None:
    """Show spending by day, by spend type and by cost."""
    stats_command(after, before, intervals)


if __name__ == "__main__":
    app()
