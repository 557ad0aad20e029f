"""Search command for finding spends across months."""

from datetime import date

from rich.console import Console
from rich.table import Table

from budgetmgr.commands.common import format_money, handle_errors, load_context, parse_date_or_exit, parse_money
from budgetmgr.domain.models import SpendTypeID
from budgetmgr.domain.money import total
from budgetmgr.domain.search import Order, SearchSpendsArgs, SortBy
from budgetmgr.domain.spend_types import full_names
from budgetmgr.store.queries import get_spend_types, search_spends

console = Console()


def search_command(
    title: str = "",
    notes: str = "",
    title_exactly: bool = False,
    notes_exactly: bool = False,
    after: str | None = None,
    before: str | None = None,
    min_cost: str | None = None,
    max_cost: str | None = None,
    without_type: bool = False,
    type_ids: list[int] | None = None,
    sort: SortBy = SortBy.DATE,
    order: Order = Order.ASC,
) -> None:
    """Search spends and print them with their total."""
    ctx = load_context()

    with handle_errors():
        args = SearchSpendsArgs(
            title=title,
            notes=notes,
            title_exactly=title_exactly,
            notes_exactly=notes_exactly,
            after=parse_date_or_exit(after),
            before=parse_date_or_exit(before),
            min_cost=parse_money(min_cost, ctx.prec),
            max_cost=parse_money(max_cost, ctx.prec),
            without_type=without_type,
            type_ids=tuple(SpendTypeID(t) for t in type_ids or ()),
            sort=sort,
            order=order,
        )
        rows = search_spends(args, ctx.db_path)
        names = full_names(get_spend_types(ctx.db_path))

    if not rows:
        console.print("[yellow]No spends found[/yellow]")
        return

    table = Table(title=f"Spends ({len(rows)})")
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Title", style="white")
    table.add_column("Cost", justify="right")
    table.add_column("Type", style="magenta")
    table.add_column("Notes", style="dim")

    for row in rows:
        type_name = names.get(row.type_id, "[dim]-[/dim]") if row.type_id else "[dim]-[/dim]"
        table.add_row(
            str(row.id),
            date(row.year, row.month, row.day).isoformat(),
            row.title,
            format_money(row.cost, ctx),
            type_name,
            row.notes,
        )

    console.print(table)
    console.print(f"[bold]Total:[/bold] {format_money(total((r.cost for r in rows), ctx.prec), ctx)}")
