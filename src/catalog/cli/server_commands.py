"""Server and database CLI commands."""

import typer

from src.catalog.runtime.context import get_config

from .utils import console, get_database_service


def init_db() -> None:
    """🗄️  Create the catalog tables in the configured database."""
    database_service = get_database_service()
    database_service.create_all()
    console.print(f"[green]✅ Tables created in {database_service.engine.url.render_as_string()}[/green]")


def serve(
    host: str | None = typer.Option(None, help="Bind address (defaults to config app.host)"),
    port: int | None = typer.Option(None, help="Bind port (defaults to config app.port)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """🚀 Run the HTTP API with uvicorn."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "src.catalog.api.http.app:app",
        host=host or config.app.host,
        port=port or config.app.port,
        reload=reload,
        access_log=False,  # request logging happens in middleware
    )
