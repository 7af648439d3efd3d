"""Entity package: Product."""

from .entity import Product
from .repository import (
    InMemoryProductRepository,
    ProductAlreadyExistsError,
    ProductNotFoundError,
    ProductRepository,
    SqlProductRepository,
)
from .table import ProductTable

__all__ = [
    "Product",
    "ProductTable",
    "ProductRepository",
    "SqlProductRepository",
    "InMemoryProductRepository",
    "ProductNotFoundError",
    "ProductAlreadyExistsError",
]
