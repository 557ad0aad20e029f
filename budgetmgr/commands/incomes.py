"""Income commands (add, edit, remove)."""

from rich.console import Console

from budgetmgr.commands.common import format_money, handle_errors, load_context, parse_money
from budgetmgr.commands.months import resolve_month
from budgetmgr.domain.args import AddIncomeArgs, EditIncomeArgs
from budgetmgr.domain.models import IncomeID, MonthID
from budgetmgr.store.queries import add_income, edit_income, remove_income

console = Console()


def add_command(title: str, income: str, month: str | None = None, notes: str = "") -> None:
    """Add an income to a month (current month by default)."""
    ctx = load_context()

    with handle_errors():
        month_id = resolve_month(month, ctx)

        amount = parse_money(income, ctx.prec)
        income_id = add_income(AddIncomeArgs(MonthID(month_id), title, amount, notes), ctx.db_path)

    console.print(f"[green]✓[/green] Income added (ID: {income_id}): {title} {format_money(amount, ctx)}")


def edit_command(
    income_id: int,
    title: str | None = None,
    income: str | None = None,
    notes: str | None = None,
) -> None:
    """Edit an income; only the given fields change."""
    ctx = load_context()

    with handle_errors():
        amount = parse_money(income, ctx.prec)
        edit_income(EditIncomeArgs(IncomeID(income_id), title, notes, amount), ctx.db_path)

    console.print(f"[green]✓[/green] Income {income_id} updated")


def remove_command(income_id: int) -> None:
    """Remove an income."""
    ctx = load_context()

    with handle_errors():
        remove_income(income_id, ctx.db_path)

    console.print(f"[green]✓[/green] Income {income_id} removed")
