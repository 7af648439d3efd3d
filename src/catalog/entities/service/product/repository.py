"""Product repositories.

``ProductRepository`` is the capability boundary the service layer depends
on. Two backends implement it:

- ``SqlProductRepository``: SQLModel session against the ``producttable`` table
- ``InMemoryProductRepository``: a plain dict, shareable between instances

Repositories never commit. The unit of work that owns the session decides
whether the changes are kept.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .entity import Product
from .table import ProductTable


class ProductNotFoundError(ValueError):
    """Raised when an update targets a product that is not stored."""

    def __init__(self, product_id: int | None) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class ProductAlreadyExistsError(ValueError):
    """Raised when a product is added with an identifier already in use."""

    def __init__(self, product_id: int | None) -> None:
        super().__init__(f"Product {product_id} already exists")
        self.product_id = product_id


class ProductRepository(ABC):
    """Collection-like CRUD access to persisted products."""

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return the product with ``product_id``, or None if none exists."""
        raise NotImplementedError

    @abstractmethod
    def get_all(self) -> list[Product]:
        """Return every stored product."""
        raise NotImplementedError

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Persist a new product and return it with its identifier set.

        Raises:
            ProductAlreadyExistsError: ``product.id`` is set and already stored.
        """
        raise NotImplementedError

    @abstractmethod
    def update(self, product: Product) -> Product:
        """Replace the stored record matching ``product.id``.

        Raises:
            ProductNotFoundError: No product with that identifier is stored.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, product_id: int) -> None:
        """Remove the product with ``product_id``; a missing product is ignored."""
        raise NotImplementedError


class SqlProductRepository(ProductRepository):
    """Data-access layer for products backed by a SQLModel session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return Product.model_validate(row, from_attributes=True)

    def get_all(self) -> list[Product]:
        statement = select(ProductTable).order_by(ProductTable.id)
        rows = self._session.exec(statement).all()
        return [Product.model_validate(row, from_attributes=True) for row in rows]

    def add(self, product: Product) -> Product:
        if product.id is not None and self._session.get(ProductTable, product.id) is not None:
            raise ProductAlreadyExistsError(product.id)

        row = ProductTable.model_validate(product.model_dump())
        try:
            # savepoint: a conflict undoes this insert only, not the caller's work
            with self._session.begin_nested():
                self._session.add(row)
        except IntegrityError as e:
            raise ProductAlreadyExistsError(product.id) from e
        self._session.refresh(row)
        logger.debug("Added product {}", row.id)
        return Product.model_validate(row, from_attributes=True)

    def update(self, product: Product) -> Product:
        if product.id is None:
            raise ProductNotFoundError(None)
        row = self._session.get(ProductTable, product.id)
        if row is None:
            raise ProductNotFoundError(product.id)

        row.sqlmodel_update(product.model_dump(exclude={"id"}))
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        logger.debug("Updated product {}", row.id)
        return Product.model_validate(row, from_attributes=True)

    def delete(self, product_id: int) -> None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return
        self._session.delete(row)
        self._session.flush()
        logger.debug("Deleted product {}", product_id)


class InMemoryProductRepository(ProductRepository):
    """Dict-backed repository.

    Pass the same ``store`` and ``lock`` to several instances to share state
    between them, e.g. one instance per request over a process-wide dict.
    Every access to the store happens under the lock.
    """

    def __init__(
        self,
        store: dict[int, Product] | None = None,
        lock: threading.Lock | None = None,
    ) -> None:
        self._store = store if store is not None else {}
        self._lock = lock if lock is not None else threading.Lock()

    def _next_id(self) -> int:
        return max(self._store, default=0) + 1

    def get_by_id(self, product_id: int) -> Product | None:
        with self._lock:
            product = self._store.get(product_id)
        return product.model_copy() if product is not None else None

    def get_all(self) -> list[Product]:
        with self._lock:
            return [self._store[key].model_copy() for key in sorted(self._store)]

    def add(self, product: Product) -> Product:
        with self._lock:
            if product.id is not None and product.id in self._store:
                raise ProductAlreadyExistsError(product.id)
            product_id = product.id if product.id is not None else self._next_id()
            stored = product.model_copy(update={"id": product_id})
            self._store[product_id] = stored
        logger.debug("Added product {}", product_id)
        return stored.model_copy()

    def update(self, product: Product) -> Product:
        with self._lock:
            if product.id is None or product.id not in self._store:
                raise ProductNotFoundError(product.id)
            stored = product.model_copy()
            self._store[product.id] = stored
        logger.debug("Updated product {}", product.id)
        return stored.model_copy()

    def delete(self, product_id: int) -> None:
        with self._lock:
            removed = self._store.pop(product_id, None)
        if removed is not None:
            logger.debug("Deleted product {}", product_id)
