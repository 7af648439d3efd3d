"""Product service layer.

Business operations over the product catalog. Each operation forwards to
the injected ``ProductRepository`` unchanged; this is where catalog rules
belong once there are any.
"""

from abc import ABC, abstractmethod

from loguru import logger

from src.catalog.entities.service.product import Product, ProductRepository


class ProductService(ABC):
    """Business-facing operations on products."""

    @abstractmethod
    def get_product_by_id(self, product_id: int) -> Product | None:
        raise NotImplementedError

    @abstractmethod
    def get_all_products(self) -> list[Product]:
        raise NotImplementedError

    @abstractmethod
    def create_product(self, product: Product) -> Product:
        raise NotImplementedError

    @abstractmethod
    def update_product(self, product: Product) -> Product:
        raise NotImplementedError

    @abstractmethod
    def delete_product(self, product_id: int) -> None:
        raise NotImplementedError


class ProductCatalogService(ProductService):
    """Default service: delegates every call to its repository."""

    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def get_product_by_id(self, product_id: int) -> Product | None:
        logger.debug("get_product_by_id({})", product_id)
        return self._repository.get_by_id(product_id)

    def get_all_products(self) -> list[Product]:
        logger.debug("get_all_products()")
        return self._repository.get_all()

    def create_product(self, product: Product) -> Product:
        logger.debug("create_product(name={!r})", product.name)
        return self._repository.add(product)

    def update_product(self, product: Product) -> Product:
        logger.debug("update_product({})", product.id)
        return self._repository.update(product)

    def delete_product(self, product_id: int) -> None:
        logger.debug("delete_product({})", product_id)
        self._repository.delete(product_id)
