"""Shared utilities for CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from functools import lru_cache

import typer
from rich.console import Console
from rich.table import Table

from src.catalog.core.services import (
    DbSessionService,
    ProductCatalogService,
    ProductService,
)
from src.catalog.entities.service.product import (
    InMemoryProductRepository,
    Product,
    SqlProductRepository,
)
from src.catalog.runtime.context import get_config

# Initialize Rich console for colored output
console = Console()


@lru_cache
def get_database_service() -> DbSessionService:
    """Process-wide database service for CLI commands."""
    return DbSessionService()


@contextmanager
def product_service_scope() -> Iterator[ProductService]:
    """Yield a product service bound to one unit of work."""
    if get_config().database.backend == "memory":
        console.print(
            "[yellow]⚠️ Memory backend selected: changes are lost when the command exits[/yellow]"
        )
        yield ProductCatalogService(InMemoryProductRepository())
        return

    with get_database_service().session_scope() as session:
        yield ProductCatalogService(SqlProductRepository(session))


def parse_price(value: str) -> Decimal:
    """Parse a price argument, rejecting anything that is not a finite number."""
    try:
        price = Decimal(value)
    except InvalidOperation:
        raise typer.BadParameter(f"'{value}' is not a valid price") from None
    if not price.is_finite():
        raise typer.BadParameter(f"'{value}' is not a valid price")
    return price


def product_table(products: list[Product]) -> Table:
    table = Table(show_header=True, header_style="bold blue")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="green")
    table.add_column("Price", style="yellow", justify="right")
    for product in products:
        table.add_row(str(product.id), product.name, str(product.price))
    return table
