"""Contract tests shared by every ProductRepository implementation."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from sqlmodel import Session

from src.catalog.entities.service.product import (
    InMemoryProductRepository,
    Product,
    ProductAlreadyExistsError,
    ProductNotFoundError,
    ProductRepository,
    SqlProductRepository,
)


@pytest.fixture(params=["sql", "memory"])
def repository(request: pytest.FixtureRequest, session: Session) -> ProductRepository:
    """Each test runs once per backend."""
    if request.param == "sql":
        return SqlProductRepository(session)
    return InMemoryProductRepository()


class TestProductRepositoryContract:
    """Behaviour every backend must share."""

    def test_add_assigns_identifier(self, repository: ProductRepository):
        """Should assign an id when the product has none."""
        created = repository.add(Product(name="Widget", price=Decimal("9.99")))

        assert created.id is not None
        assert created.name == "Widget"
        assert created.price == Decimal("9.99")

    def test_add_assigns_distinct_identifiers(self, repository: ProductRepository):
        first = repository.add(Product(name="A", price=Decimal("1")))
        second = repository.add(Product(name="B", price=Decimal("2")))

        assert first.id != second.id

    def test_add_keeps_explicit_identifier(self, repository: ProductRepository, widget: Product):
        created = repository.add(widget)

        assert created.id == 1
        assert created == widget

    def test_add_rejects_duplicate_identifier(self, repository: ProductRepository, widget: Product):
        """Should raise instead of overwriting a stored product."""
        repository.add(widget)

        with pytest.raises(ProductAlreadyExistsError) as exc_info:
            repository.add(Product(id=1, name="Other", price=Decimal("1.00")))

        assert exc_info.value.product_id == 1

    def test_get_by_id_returns_added_product(self, repository: ProductRepository):
        """Should return a product equal to the one added."""
        created = repository.add(Product(name="Widget", price=Decimal("9.99")))

        assert repository.get_by_id(created.id) == created

    def test_get_by_id_missing_returns_none(self, repository: ProductRepository):
        """Should signal absence with None rather than an error."""
        assert repository.get_by_id(999) is None

    def test_get_all_empty(self, repository: ProductRepository):
        assert repository.get_all() == []

    def test_get_all_returns_live_products(self, repository: ProductRepository):
        """Should return exactly the products added and not deleted."""
        kept = [
            repository.add(Product(name="A", price=Decimal("1.00"))),
            repository.add(Product(name="C", price=Decimal("3.00"))),
        ]
        removed = repository.add(Product(name="B", price=Decimal("2.00")))
        repository.delete(removed.id)

        products = repository.get_all()

        assert len(products) == 2
        assert {p.id: p for p in products} == {p.id: p for p in kept}

    def test_update_replaces_record(self, repository: ProductRepository):
        created = repository.add(Product(name="Widget", price=Decimal("9.99")))

        updated = repository.update(
            Product(id=created.id, name="Widget XL", price=Decimal("12.50"))
        )

        assert updated == Product(id=created.id, name="Widget XL", price=Decimal("12.50"))
        assert repository.get_by_id(created.id) == updated

    def test_update_missing_raises(self, repository: ProductRepository):
        """Should fail rather than insert when the id is not stored."""
        with pytest.raises(ProductNotFoundError) as exc_info:
            repository.update(Product(id=42, name="Ghost", price=Decimal("0")))

        assert exc_info.value.product_id == 42
        assert repository.get_by_id(42) is None

    def test_update_without_identifier_raises(self, repository: ProductRepository):
        with pytest.raises(ProductNotFoundError):
            repository.update(Product(name="Nameless", price=Decimal("1")))

    def test_delete_then_get_returns_none(self, repository: ProductRepository):
        created = repository.add(Product(name="Widget", price=Decimal("9.99")))

        repository.delete(created.id)

        assert repository.get_by_id(created.id) is None

    def test_delete_twice_is_noop(self, repository: ProductRepository):
        """Should not raise when deleting an already removed product."""
        created = repository.add(Product(name="Widget", price=Decimal("9.99")))

        repository.delete(created.id)
        repository.delete(created.id)

        assert repository.get_all() == []

    def test_delete_missing_is_noop(self, repository: ProductRepository, widget: Product):
        repository.add(widget)

        repository.delete(999)

        assert repository.get_all() == [widget]

    @pytest.mark.parametrize(
        "price",
        [
            Decimal("0.123456789012345"),
            Decimal("123456789012345678901234567890.99"),
            Decimal("1E+30"),
            Decimal("-0.000000000001"),
        ],
    )
    def test_price_kept_exactly(self, repository: ProductRepository, price: Decimal):
        """Should return the price with every digit it was stored with."""
        created = repository.add(Product(name="Precise", price=price))

        fetched = repository.get_by_id(created.id)

        assert fetched.price == price
        assert fetched == Product(id=created.id, name="Precise", price=price)

    def test_returned_products_are_detached(self, repository: ProductRepository):
        """Mutating a returned product should not change what is stored."""
        created = repository.add(Product(name="Widget", price=Decimal("9.99")))

        fetched = repository.get_by_id(created.id)
        fetched.name = "Changed"

        assert repository.get_by_id(created.id).name == "Widget"


class TestInMemoryProductRepository:
    """Behaviour specific to the dict-backed repository."""

    def test_shared_store_between_instances(self, widget: Product):
        """Should let per-request instances see each other's writes."""
        store: dict[int, Product] = {}
        InMemoryProductRepository(store).add(widget)

        assert InMemoryProductRepository(store).get_by_id(1) == widget

    def test_separate_instances_are_isolated(self, widget: Product):
        InMemoryProductRepository().add(widget)

        assert InMemoryProductRepository().get_by_id(1) is None

    def test_next_identifier_follows_highest(self):
        repository = InMemoryProductRepository()
        repository.add(Product(id=10, name="Ten", price=Decimal("10")))

        created = repository.add(Product(name="Next", price=Decimal("1")))

        assert created.id == 11

    def test_concurrent_adds_get_distinct_identifiers(self, monkeypatch: pytest.MonkeyPatch):
        """Per-request instances over one store must not hand out the same id."""
        store: dict[int, Product] = {}
        lock = threading.Lock()
        next_id = InMemoryProductRepository._next_id

        def slow_next_id(self):
            candidate = next_id(self)
            time.sleep(0.01)
            return candidate

        monkeypatch.setattr(InMemoryProductRepository, "_next_id", slow_next_id)

        def add(index: int) -> int:
            repository = InMemoryProductRepository(store, lock)
            return repository.add(Product(name=f"Item {index}", price=Decimal(index))).id

        with ThreadPoolExecutor(max_workers=8) as executor:
            ids = list(executor.map(add, range(8)))

        assert sorted(ids) == list(range(1, 9))
        assert len(store) == 8


class TestSqlProductRepositoryTransactions:
    """SQL repository leaves transaction control to the caller."""

    def test_rollback_discards_changes(self, session: Session):
        repository = SqlProductRepository(session)
        created = repository.add(Product(name="Widget", price=Decimal("9.99")))

        session.rollback()

        assert repository.get_by_id(created.id) is None

    def test_commit_makes_changes_visible_to_new_session(self, session: Session, engine):
        repository = SqlProductRepository(session)
        created = repository.add(Product(name="Widget", price=Decimal("9.99")))
        session.commit()

        with Session(engine) as other:
            assert SqlProductRepository(other).get_by_id(created.id) == created

    def test_failed_insert_keeps_earlier_work(self, session: Session):
        """Should undo only the conflicting insert, not the caller's unit of work."""
        repository = SqlProductRepository(session)
        kept = repository.add(Product(id=1, name="Kept", price=Decimal("1.00")))

        with pytest.raises(ProductAlreadyExistsError):
            repository.add(Product(id=1, name="Duplicate", price=Decimal("2.00")))
        session.commit()

        assert repository.get_by_id(kept.id) == kept

    def test_integrity_error_rolls_back_to_savepoint(
        self, session: Session, monkeypatch: pytest.MonkeyPatch
    ):
        """A unique violation at flush time should leave pending rows intact."""
        repository = SqlProductRepository(session)
        repository.add(Product(id=1, name="Committed", price=Decimal("1.00")))
        session.commit()
        session.expunge_all()
        pending = repository.add(Product(name="Pending", price=Decimal("2.00")))

        # skip the identity lookup so the conflict surfaces from the database
        monkeypatch.setattr(session, "get", lambda *args, **kwargs: None)
        with pytest.raises(ProductAlreadyExistsError):
            repository.add(Product(id=1, name="Duplicate", price=Decimal("3.00")))
        monkeypatch.undo()

        session.commit()

        assert repository.get_by_id(pending.id) == pending
        assert repository.get_by_id(1).name == "Committed"
