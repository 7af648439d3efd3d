"""Consolidated data layer tests.

Covers the Product entity, its table model, and the SQL repository against
an in-memory SQLite database.
"""

from decimal import Decimal

from sqlmodel import Session, select

from src.catalog.entities.service.product import (
    Product,
    ProductTable,
    SqlProductRepository,
)


class TestProductEntity:
    """Test Product domain entity."""

    def test_product_creation(self):
        """Should hold the given fields and have no identifier yet."""
        product = Product(name="Widget", price=Decimal("9.99"))

        assert product.name == "Widget"
        assert product.price == Decimal("9.99")
        assert product.id is None

    def test_price_coerced_to_decimal(self):
        """Should accept string and integer prices as decimals."""
        assert Product(name="A", price="1.50").price == Decimal("1.50")
        assert Product(name="B", price=3).price == Decimal(3)

    def test_product_equality(self):
        """Should compare products by id, name and price."""
        first = Product(id=1, name="Widget", price=Decimal("9.99"))
        second = Product(id=1, name="Widget", price=Decimal("9.990"))
        renamed = Product(id=1, name="Gadget", price=Decimal("9.99"))
        other_id = Product(id=2, name="Widget", price=Decimal("9.99"))

        assert first == second
        assert hash(first) == hash(second)
        assert first != renamed
        assert first != other_id
        assert first != "Widget"

    def test_string_representation(self):
        product = Product(id=7, name="Sprocket", price=Decimal("2.00"))
        assert "Sprocket" in str(product)


class TestProductTable:
    """Test Product table persistence."""

    def test_table_assigns_identifier(self, session: Session):
        """Should get an autoincrement id when inserted without one."""
        row = ProductTable(name="Widget", price=Decimal("9.99"))
        session.add(row)
        session.commit()
        session.refresh(row)

        assert row.id is not None

    def test_entity_table_conversion(self, session: Session):
        """Should convert rows to domain entities and back."""
        row = ProductTable(name="Gizmo", price=Decimal("4.25"))
        session.add(row)
        session.commit()
        session.refresh(row)

        product = Product.model_validate(row, from_attributes=True)
        assert isinstance(product, Product)
        assert product.id == row.id
        assert product.name == "Gizmo"
        assert product.price == Decimal("4.25")

        back = ProductTable.model_validate(product.model_dump())
        assert back.id == row.id
        assert back.name == "Gizmo"


class TestSqlProductRepository:
    """Test the SQL repository's persistence details."""

    def test_add_is_visible_through_session(self, session: Session):
        """Should write a row without committing the session."""
        repository = SqlProductRepository(session)
        created = repository.add(Product(name="Widget", price=Decimal("9.99")))

        rows = session.exec(select(ProductTable)).all()
        assert [row.id for row in rows] == [created.id]

    def test_returns_domain_entity(self, session: Session):
        """Should return Product domain entities, not table rows."""
        repository = SqlProductRepository(session)
        created = repository.add(Product(name="Widget", price=Decimal("9.99")))

        fetched = repository.get_by_id(created.id)
        assert isinstance(fetched, Product)
        assert not isinstance(fetched, ProductTable)

    def test_update_replaces_whole_record(self, session: Session):
        repository = SqlProductRepository(session)
        created = repository.add(Product(name="Widget", price=Decimal("9.99")))

        repository.update(Product(id=created.id, name="Widget XL", price=Decimal("12.50")))

        row = session.get(ProductTable, created.id)
        assert row is not None
        assert row.name == "Widget XL"
        assert row.price == Decimal("12.50")

    def test_delete_removes_row(self, session: Session):
        repository = SqlProductRepository(session)
        created = repository.add(Product(name="Widget", price=Decimal("9.99")))

        repository.delete(created.id)

        assert session.get(ProductTable, created.id) is None
