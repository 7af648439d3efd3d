from decimal import Decimal

from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlalchemy import String
from sqlalchemy.types import TypeDecorator
from sqlmodel import Field, SQLModel


class Entity(BaseModel):
    """Base entity class with a storage-assigned integer identifier."""

    id: int | None = PydanticField(
        default=None,
        description="Unique identifier, assigned by the persistence layer on creation",
    )


class EntityTable(SQLModel, table=False):
    """Base table class with an autoincrement integer primary key."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Unique identifier for the entity",
    )


class DecimalText(TypeDecorator):
    """Store ``Decimal`` values as their exact string form.

    ``Numeric`` goes through a float on SQLite and comes back at a fixed
    scale; text keeps every digit on every backend.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)
