"""Month commands: show a month with its days, list all months."""

from datetime import date

from rich.console import Console
from rich.table import Table

from budgetmgr.commands.common import Context, format_money, handle_errors, load_context, parse_month_or_exit
from budgetmgr.dates import month_range
from budgetmgr.domain.models import Month
from budgetmgr.domain.recompute import day_spent
from budgetmgr.store.queries import get_month, get_months, init_month

console = Console()


def resolve_month(month: str | None, ctx: Context) -> int:
    """Get id of a YYYY-MM month (current month if None), initializing it."""
    year, month_number = parse_month_or_exit(month)
    return init_month(year, month_number, ctx.db_path)


def print_month(month: Month, ctx: Context) -> None:
    _, _, label = month_range(month.year, month.month)

    console.print(f"\n[bold cyan]{label}[/bold cyan]")
    console.print(f"  Total income:  {format_money(month.total_income, ctx)}")
    console.print(f"  Total spend:   {format_money(month.total_spend, ctx, colored=True)}")
    console.print(f"  Daily budget:  {format_money(month.daily_budget, ctx)}")
    console.print(f"  Result:        {format_money(month.result, ctx, colored=True)}\n")

    if month.incomes:
        table = Table(title="Incomes")
        table.add_column("ID", style="dim")
        table.add_column("Title", style="white")
        table.add_column("Income", justify="right")
        table.add_column("Notes", style="dim")
        for income in month.incomes:
            table.add_row(str(income.id), income.title, format_money(income.income, ctx), income.notes)
        console.print(table)

    if month.monthly_payments:
        table = Table(title="Monthly Payments")
        table.add_column("ID", style="dim")
        table.add_column("Title", style="white")
        table.add_column("Cost", justify="right")
        table.add_column("Type", style="magenta")
        table.add_column("Notes", style="dim")
        for payment in month.monthly_payments:
            type_id = str(payment.type_id) if payment.type_id else "[dim]-[/dim]"
            table.add_row(str(payment.id), payment.title, format_money(payment.cost, ctx), type_id, payment.notes)
        console.print(table)

    table = Table(title="Days")
    table.add_column("Day", style="cyan")
    table.add_column("Spends", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Saldo", justify="right")
    for day in month.days:
        spent = day_spent(day, ctx.prec)
        table.add_row(
            date(month.year, month.month, day.day).isoformat(),
            str(len(day.spends)) if day.spends else "[dim]-[/dim]",
            format_money(spent, ctx) if day.spends else "[dim]-[/dim]",
            format_money(day.saldo, ctx, colored=True),
        )
    console.print(table)


def show_command(month: str | None = None) -> None:
    """Show a month, initializing it first if needed."""
    ctx = load_context()

    with handle_errors():
        month_id = resolve_month(month, ctx)
        print_month(get_month(month_id, ctx.db_path), ctx)


def list_command() -> None:
    """List initialized months with their totals."""
    ctx = load_context()

    with handle_errors():
        months = get_months(ctx.db_path)

    if not months:
        console.print("[yellow]No months found[/yellow]")
        return

    table = Table(title="Months")
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right")
    table.add_column("Spend", justify="right")
    table.add_column("Daily budget", justify="right")
    table.add_column("Result", justify="right")
    for m in months:
        table.add_row(
            f"{m.year:04d}-{m.month:02d}",
            format_money(m.total_income, ctx),
            format_money(m.total_spend, ctx, colored=True),
            format_money(m.daily_budget, ctx),
            format_money(m.result, ctx, colored=True),
        )
    console.print(table)
