"""Spend type commands (list, add, edit, remove)."""

from rich.console import Console
from rich.table import Table

from budgetmgr.commands.common import handle_errors, load_context
from budgetmgr.domain.args import AddSpendTypeArgs, EditSpendTypeArgs
from budgetmgr.domain.models import SpendTypeID
from budgetmgr.domain.spend_types import full_names
from budgetmgr.store.queries import add_spend_type, edit_spend_type, get_spend_types, remove_spend_type

console = Console()


def list_command() -> None:
    """List spend types with their full 'Parent / Child' names."""
    ctx = load_context()

    with handle_errors():
        spend_types = get_spend_types(ctx.db_path)
        names = full_names(spend_types)

    if not spend_types:
        console.print("[yellow]No spend types found[/yellow]")
        return

    table = Table(title=f"Spend Types ({len(spend_types)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="white")
    table.add_column("Parent", style="dim")
    table.add_column("Full name", style="magenta")

    for spend_type in sorted(spend_types, key=lambda t: names[t.id].lower()):
        parent = str(spend_type.parent_id) if spend_type.parent_id else "-"
        table.add_row(str(spend_type.id), spend_type.name, parent, names[spend_type.id])

    console.print(table)


def add_command(name: str, parent_id: int = 0) -> None:
    """Add a spend type, optionally under a parent."""
    ctx = load_context()

    with handle_errors():
        type_id = add_spend_type(AddSpendTypeArgs(name, SpendTypeID(parent_id)), ctx.db_path)

    console.print(f"[green]✓[/green] Spend type added (ID: {type_id}): {name}")


def edit_command(type_id: int, name: str | None = None, parent_id: int | None = None) -> None:
    """Rename a spend type or move it under another parent (0 for root)."""
    ctx = load_context()

    with handle_errors():
        new_parent = SpendTypeID(parent_id) if parent_id is not None else None
        edit_spend_type(EditSpendTypeArgs(SpendTypeID(type_id), name, new_parent), ctx.db_path)

    console.print(f"[green]✓[/green] Spend type {type_id} updated")


def remove_command(type_id: int) -> None:
    """Remove a spend type that nothing uses."""
    ctx = load_context()

    with handle_errors():
        remove_spend_type(type_id, ctx.db_path)

    console.print(f"[green]✓[/green] Spend type {type_id} removed")
