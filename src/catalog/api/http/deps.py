"""FastAPI dependency implementations.

Process-wide objects live on ``app.state.app_dependencies`` (built at
startup). Sessions, repositories and services are created per request.
"""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services import ProductCatalogService, ProductService
from src.catalog.entities.service.product import (
    InMemoryProductRepository,
    ProductRepository,
    SqlProductRepository,
)


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the application-wide dependency container."""
    return request.app.state.app_dependencies


def get_db_session(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> Iterator[Session]:
    """Yield one session per request, committed when the handler succeeds."""
    with app_deps.database_service.session_scope() as session:
        yield session


def get_product_repository(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
    db: Session = Depends(get_db_session),
) -> ProductRepository:
    """Build the product repository for the configured backend."""
    if app_deps.repository_backend == "memory":
        return InMemoryProductRepository(
            app_deps.product_store, app_deps.product_store_lock
        )
    return SqlProductRepository(db)


def get_product_service(
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductService:
    """Build the product service around this request's repository."""
    return ProductCatalogService(repository)
