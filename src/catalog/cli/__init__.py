"""Main CLI application module."""

import typer

from src.catalog.api.utils.app_startup import configure_logging

from .product_commands import product_app
from .server_commands import init_db, serve

app = typer.Typer(
    help="🛒 Product catalog CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(product_app, name="product")
app.command("init-db")(init_db)
app.command("serve")(serve)


@app.callback()
def _setup() -> None:
    configure_logging()


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
