"""Spend commands (add, edit, remove)."""

from datetime import date

from rich.console import Console

from budgetmgr.commands.common import format_money, handle_errors, load_context, parse_date_or_exit, parse_money
from budgetmgr.domain.args import AddSpendArgs, EditSpendArgs
from budgetmgr.domain.models import DayID, SpendID, SpendTypeID
from budgetmgr.store.queries import add_spend, edit_spend, get_day_id, init_month, remove_spend

console = Console()


def add_command(
    title: str,
    cost: str,
    spend_date: str | None = None,
    type_id: int = 0,
    notes: str = "",
) -> None:
    """Add a spend on a date (today by default).

    Args:
        title: Spend title.
        cost: Cost in major units, negative for a refund or cashback.
        spend_date: Date (YYYY-MM-DD, DD/MM/YYYY, or other formats).
        type_id: Spend type, 0 for none.
        notes: Optional notes.
    """
    ctx = load_context()
    day = parse_date_or_exit(spend_date) or date.today()

    with handle_errors():
        init_month(day.year, day.month, ctx.db_path)
        day_id = get_day_id(day, ctx.db_path)
        amount = parse_money(cost, ctx.prec)
        args = AddSpendArgs(
            DayID(day_id),
            title,
            amount,
            SpendTypeID(type_id),
            notes,
            cost_policy=ctx.settings.spend_cost_policy,
        )
        spend_id = add_spend(args, ctx.db_path)

    console.print("[green]✓[/green] Spend added:")
    console.print(f"  ID: {spend_id}")
    console.print(f"  Date: {day.isoformat()}")
    console.print(f"  Title: {title}")
    console.print(f"  Cost: {format_money(amount, ctx)}")


def edit_command(
    spend_id: int,
    title: str | None = None,
    cost: str | None = None,
    type_id: int | None = None,
    notes: str | None = None,
) -> None:
    """Edit a spend; only the given fields change. Type 0 clears the type."""
    ctx = load_context()

    with handle_errors():
        amount = parse_money(cost, ctx.prec)
        new_type = SpendTypeID(type_id) if type_id is not None else None
        args = EditSpendArgs(
            SpendID(spend_id),
            title,
            new_type,
            notes,
            amount,
            cost_policy=ctx.settings.spend_cost_policy,
        )
        edit_spend(args, ctx.db_path)

    console.print(f"[green]✓[/green] Spend {spend_id} updated")


def remove_command(spend_id: int) -> None:
    """Remove a spend."""
    ctx = load_context()

    with handle_errors():
        remove_spend(spend_id, ctx.db_path)

    console.print(f"[green]✓[/green] Spend {spend_id} removed")
