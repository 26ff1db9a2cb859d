"""Command line entry points."""

import typer
from rich.console import Console
from rich.panel import Panel

console = Console()

app = typer.Typer(
    help="Fitness Users service - run the API and manage its database",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command(name="serve")
def serve(
    host: str | None = typer.Option(None, help="Host to bind the server to"),
    port: int | None = typer.Option(None, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """Start the HTTP API server."""
    import uvicorn

    from fitness_users.runtime.context import get_config

    app_config = get_config().app
    bind_host = host or app_config.host
    bind_port = port or app_config.port

    console.print(
        Panel.fit(
            f"[bold green]Starting Fitness Users API[/bold green] on http://{bind_host}:{bind_port}",
            border_style="green",
        )
    )
    uvicorn.run(
        "fitness_users.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        access_log=False,  # Requests are logged by the app middleware
    )


@app.command(name="init-db")
def init_db() -> None:
    """Create the database tables if they do not exist."""
    from fitness_users.core.services import DbManageService, DbSessionService

    database_service = DbSessionService()
    try:
        DbManageService(database_service.engine).create_all()
    finally:
        database_service.dispose()
    console.print("[green]Database initialized.[/green]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
