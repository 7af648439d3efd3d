"""Entity: Product."""

from decimal import Decimal
from typing import Any

from pydantic import Field

from src.catalog.entities.core._base import Entity


class Product(Entity):
    """Product entity representing a product in the catalog.

    A passive data holder. The identifier stays ``None`` until a repository
    persists the product and assigns one.
    """

    name: str = Field(description="Product name")
    price: Decimal = Field(description="Unit price, currency not modelled")

    def __eq__(self, other: Any) -> bool:
        """Compare products by identifier and business attributes."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.price == other.price
        )

    def __hash__(self) -> int:
        return hash((
            self.id,
            self.name,
            self.price,
        ))
