"""Product management CLI commands."""

import typer
from rich.panel import Panel

from src.catalog.entities.service.product import (
    Product,
    ProductAlreadyExistsError,
    ProductNotFoundError,
)

from .utils import console, parse_price, product_service_scope, product_table

product_app = typer.Typer(help="📦 Product catalog commands")


@product_app.command("add")
def add_product(
    name: str = typer.Argument(..., help="Product name"),
    price: str = typer.Argument(..., help="Unit price, e.g. 9.99"),
    product_id: int | None = typer.Option(None, "--id", help="Explicit identifier"),
) -> None:
    """➕ Add a product to the catalog."""
    product = Product(id=product_id, name=name, price=parse_price(price))
    try:
        with product_service_scope() as service:
            created = service.create_product(product)
    except ProductAlreadyExistsError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from None

    console.print(f"[green]✅ Created product {created.id}: {created.name} ({created.price})[/green]")


@product_app.command("ls")
def list_products() -> None:
    """📋 List all products."""
    with product_service_scope() as service:
        products = service.get_all_products()

    if not products:
        console.print("[yellow]📭 No products found[/yellow]")
        return

    console.print(Panel.fit("[bold cyan]Products[/bold cyan]", border_style="cyan"))
    console.print(product_table(products))
    console.print(f"\n[dim]Total: {len(products)} products[/dim]")


@product_app.command("show")
def show_product(
    product_id: int = typer.Argument(..., help="Product identifier"),
) -> None:
    """🔎 Show one product."""
    with product_service_scope() as service:
        product = service.get_product_by_id(product_id)

    if product is None:
        console.print(f"[red]❌ Product {product_id} not found[/red]")
        raise typer.Exit(1)

    console.print(product_table([product]))


@product_app.command("update")
def update_product(
    product_id: int = typer.Argument(..., help="Product identifier"),
    name: str = typer.Argument(..., help="New product name"),
    price: str = typer.Argument(..., help="New unit price"),
) -> None:
    """✏️  Replace a product's name and price."""
    product = Product(id=product_id, name=name, price=parse_price(price))
    try:
        with product_service_scope() as service:
            updated = service.update_product(product)
    except ProductNotFoundError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from None

    console.print(f"[green]✅ Updated product {updated.id}: {updated.name} ({updated.price})[/green]")


@product_app.command("rm")
def remove_product(
    product_id: int = typer.Argument(..., help="Product identifier"),
) -> None:
    """🗑️  Remove a product. Removing a missing product is not an error."""
    with product_service_scope() as service:
        service.delete_product(product_id)

    console.print(f"[green]✅ Product {product_id} removed[/green]")
