"""User account management CLI commands."""

import typer
from rich.console import Console
from rich.table import Table

from src.storefront.core.services import (
    AuthenticationService,
    DbSessionService,
    DuplicateUserError,
)
from src.storefront.entities.core.user import UserRepository

console = Console()

# Create the users subcommand app
users_app = typer.Typer(help="Manage accounts that can sign in to the storefront")


@users_app.command("add")
def add_user(
    email: str = typer.Argument(..., help="Email address used to sign in"),
    name: str = typer.Option(..., "--name", "-n", help="Display name"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Password"
    ),
) -> None:
    """Add a user who can sign in through the login endpoint."""
    db_service = DbSessionService()
    try:
        db_service.create_all()
        with db_service.session_scope() as db:
            user = AuthenticationService(db).register(name, email, password)
    except DuplicateUserError as e:
        console.print(f"[red]❌ User '{email}' already exists[/red]")
        raise typer.Exit(code=1) from e
    finally:
        db_service.dispose()

    console.print(f"[green]✅ Created user '{user.email}' (id {user.id})[/green]")


@users_app.command("list")
def list_users() -> None:
    """List all users."""
    db_service = DbSessionService()
    try:
        with db_service.session_scope() as db:
            users = UserRepository(db).list_all()
    finally:
        db_service.dispose()

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Email", style="blue")
    for user in users:
        table.add_row(str(user.id), user.name, user.email)

    console.print(table)
    console.print(f"\n[green]Found {len(users)} users[/green]")
