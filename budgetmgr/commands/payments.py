"""Monthly payment commands (add, edit, remove)."""

from rich.console import Console

from budgetmgr.commands.common import format_money, handle_errors, load_context, parse_money
from budgetmgr.commands.months import resolve_month
from budgetmgr.domain.args import AddMonthlyPaymentArgs, EditMonthlyPaymentArgs
from budgetmgr.domain.models import MonthID, MonthlyPaymentID, SpendTypeID
from budgetmgr.store.queries import add_monthly_payment, edit_monthly_payment, remove_monthly_payment

console = Console()


def add_command(
    title: str,
    cost: str,
    month: str | None = None,
    type_id: int = 0,
    notes: str = "",
) -> None:
    """Add a monthly payment to a month (current month by default)."""
    ctx = load_context()

    with handle_errors():
        month_id = resolve_month(month, ctx)
        amount = parse_money(cost, ctx.prec)
        args = AddMonthlyPaymentArgs(MonthID(month_id), title, amount, SpendTypeID(type_id), notes)
        payment_id = add_monthly_payment(args, ctx.db_path)

    console.print(f"[green]✓[/green] Monthly payment added (ID: {payment_id}): {title} {format_money(amount, ctx)}")


def edit_command(
    payment_id: int,
    title: str | None = None,
    cost: str | None = None,
    type_id: int | None = None,
    notes: str | None = None,
) -> None:
    """Edit a monthly payment; only the given fields change. Type 0 clears the type."""
    ctx = load_context()

    with handle_errors():
        amount = parse_money(cost, ctx.prec)
        new_type = SpendTypeID(type_id) if type_id is not None else None
        args = EditMonthlyPaymentArgs(MonthlyPaymentID(payment_id), title, new_type, notes, amount)
        edit_monthly_payment(args, ctx.db_path)

    console.print(f"[green]✓[/green] Monthly payment {payment_id} updated")


def remove_command(payment_id: int) -> None:
    """Remove a monthly payment."""
    ctx = load_context()

    with handle_errors():
        remove_monthly_payment(payment_id, ctx.db_path)

    console.print(f"[green]✓[/green] Monthly payment {payment_id} removed")
