"""Database management CLI commands."""

import typer
from rich.console import Console

from src.storefront.runtime.context import get_config
from src.storefront.runtime.init_db import init_db

console = Console()

db_app = typer.Typer(help="Manage the storefront database")


@db_app.command("init")
def init() -> None:
    """Create any missing tables."""
    try:
        init_db()
    except Exception as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(
        f"[green]✅ Database ready at {get_config().database.url}[/green]"
    )
