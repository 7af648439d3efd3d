"""Product API router with CRUD operations."""

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Response, status
from loguru import logger
from pydantic import BaseModel, Field

from src.catalog.api.http.deps import get_product_service
from src.catalog.core.services import ProductService
from src.catalog.entities.service.product import (
    Product,
    ProductAlreadyExistsError,
    ProductNotFoundError,
)


router = APIRouter()


class ProductCreate(BaseModel):
    """Request body for creating a product."""

    id: int | None = Field(default=None, description="Explicit identifier; assigned when omitted")
    name: str
    price: Decimal


class ProductUpdate(BaseModel):
    """Request body for replacing a product."""

    name: str
    price: Decimal


@router.get("/", response_model=list[Product])
def list_products(
    service: ProductService = Depends(get_product_service),
) -> list[Product]:
    """List all products."""
    return service.get_all_products()


@router.get("/{product_id}", response_model=Product)
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Get a product by ID."""
    product = service.get_product_by_id(product_id)
    if product is None:
        logger.info("Product {} not found", product_id)
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("/", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Create a new product."""
    try:
        return service.create_product(Product(**payload.model_dump()))
    except ProductAlreadyExistsError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e


@router.put("/{product_id}", response_model=Product)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Replace a product; the path identifier wins over anything in the body."""
    try:
        return service.update_product(Product(id=product_id, **payload.model_dump()))
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
) -> Response:
    """Delete a product. Deleting a missing product also succeeds."""
    service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
