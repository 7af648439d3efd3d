"""Product database table model."""

from decimal import Decimal

from sqlalchemy import Column
from sqlmodel import Field

from src.catalog.entities.core._base import DecimalText, EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products.

    This represents how the Product entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    name: str
    price: Decimal = Field(sa_column=Column(DecimalText(), nullable=False))
