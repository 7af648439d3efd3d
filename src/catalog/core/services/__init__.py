"""Core services exports."""

from .database.db_session import DbSessionService
from .product_service import ProductCatalogService, ProductService

__all__ = [
    "DbSessionService",
    "ProductService",
    "ProductCatalogService",
]
