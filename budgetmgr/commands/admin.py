"""Admin command for initializing the database and configuration."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console

from budgetmgr.config import create_default_config, get_config_path, load_settings
from budgetmgr.domain.errors import ValidationError
from budgetmgr.domain.money import currency_precision
from budgetmgr.store.schema import get_db_path, init_database

console = Console()


def run_full_init(db_path: Path, config_path: Path, currency: str, force: bool) -> None:
    """Initialize new database and config."""
    if force and db_path.exists():
        db_path.unlink()

    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path, currency)
    console.print(f"[green]✓[/green] Database initialized (currency: {currency})")

    if force or not config_path.exists():
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path, currency)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False, currency: str | None = None) -> None:
    """Initialize budgetmgr database and configuration."""
    config_path = get_config_path()

    try:
        settings = load_settings(config_path)
        currency = (currency or settings.currency).upper()
        currency_precision(currency)
        db_path = settings.db_path or get_db_path()

        # Guard: refuse to overwrite without force flag
        if not force and db_path.exists():
            console.print("[red]Initialization failed:[/red]", style="bold")
            console.print(f"  Database already exists: {db_path}")
            console.print("\n[yellow]Use 'budgetmgr init --force' to overwrite[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path, currency, force)

    except ValidationError as e:
        console.print(f"[red]Error: {e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
