"""Statistics command: spending by day, by spend type and by cost."""

import sys
from datetime import date

from rich.console import Console
from rich.table import Table

from budgetmgr.commands.common import format_money, handle_errors, load_context, parse_date_or_exit
from budgetmgr.dates import month_range
from budgetmgr.domain.search import SearchSpendsArgs
from budgetmgr.domain.statistics import cost_intervals, spent_by_day, spent_by_spend_type
from budgetmgr.store.queries import get_spend_types, search_spends

console = Console()

HISTOGRAM_WIDTH = 40


def calculate_bar_length(value: int, max_value: int, width: int = HISTOGRAM_WIDTH) -> int:
    """Length of a histogram bar for value relative to max_value."""
    if max_value <= 0 or value <= 0:
        return 0
    return max(1, round(value / max_value * width))


def stats_command(after: str | None = None, before: str | None = None, intervals: int = 10) -> None:
    """Show spending statistics for a period (current month by default)."""
    if intervals <= 0:
        console.print("[red]Number of intervals must be positive[/red]")
        sys.exit(1)

    ctx = load_context()

    start = parse_date_or_exit(after)
    end = parse_date_or_exit(before)
    if start is None or end is None:
        today = date.today()
        first, last, _ = month_range(today.year, today.month)
        start = start or date.fromisoformat(first)
        end = end or date.fromisoformat(last)

    with handle_errors():
        rows = search_spends(SearchSpendsArgs(after=start, before=end), ctx.db_path)
        spend_types = get_spend_types(ctx.db_path)

    console.print(f"\n[bold cyan]Statistics {start.isoformat()} - {end.isoformat()}[/bold cyan]\n")

    if not rows:
        console.print("[yellow]No spends found[/yellow]")
        return

    table = Table(title="Spent by day")
    table.add_column("Date", style="cyan")
    table.add_column("Spent", justify="right")
    for day in spent_by_day(rows, start, end, ctx.prec):
        table.add_row(day.date.isoformat(), format_money(day.spent, ctx))
    console.print(table)

    table = Table(title="Spent by spend type")
    table.add_column("Type", style="magenta")
    table.add_column("Spent", justify="right")
    short_names = {t.id: t.name for t in spend_types}
    for item in spent_by_spend_type(spend_types, rows, ctx.prec):
        name = short_names.get(item.type_id, item.name)
        table.add_row("  " * item.depth + name, format_money(item.spent, ctx))
    console.print(table)

    buckets = cost_intervals(rows, intervals)
    max_count = max(b.count for b in buckets)
    table = Table(title="Costs")
    table.add_column("From", justify="right")
    table.add_column("To", justify="right")
    table.add_column("Count", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("", style="cyan")
    for bucket in buckets:
        table.add_row(
            format_money(bucket.low, ctx),
            format_money(bucket.high, ctx),
            str(bucket.count),
            format_money(bucket.total, ctx),
            "█" * calculate_bar_length(bucket.count, max_count),
        )
    console.print(table)
