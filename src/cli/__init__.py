"""Main CLI application module."""

import typer

from .db_commands import db_app
from .user_commands import users_app

# Create the main CLI application
app = typer.Typer(
    help="Storefront management CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.add_typer(db_app, name="db")
app.add_typer(users_app, name="users")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (defaults to config)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (defaults to config)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    from src.storefront.runtime.context import get_config

    config = get_config().app
    uvicorn.run(
        "src.storefront.api.http.app:app",
        host=host or config.host,
        port=port or config.port,
        reload=reload,
        access_log=False,
    )


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
