"""Tests for the product entity and its repository adapters."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from src.storefront.entities.service.product import (
    InMemoryProductRepository,
    Product,
    ProductTable,
    SqlProductRepository,
)


class TestProductEntity:
    """Test the Product domain entity."""

    def test_new_product_is_not_persisted(self):
        product = Product(name="Desk", price=120.0)

        assert product.id is None
        assert not product.is_persisted

    def test_equality_uses_id_and_attributes(self):
        assert Product(id=1, name="Desk", price=120.0) == Product(id=1, name="Desk", price=120.0)
        assert Product(id=1, name="Desk", price=120.0) != Product(id=2, name="Desk", price=120.0)
        assert Product(id=1, name="Desk", price=120.0) != "Desk"

    def test_products_are_hashable(self):
        products = {Product(id=1, name="Desk", price=1.0), Product(id=1, name="Desk", price=1.0)}
        assert len(products) == 1


class TestSqlProductRepository:
    """Test the SQL adapter against an in-memory SQLite database."""

    def test_save_without_id_creates_row(self, session: Session):
        repository = SqlProductRepository(session)

        saved = repository.save(Product(name="New Product", price=199.99))

        assert saved.id is not None
        rows = session.exec(select(ProductTable)).all()
        assert len(rows) == 1
        assert rows[0].name == "New Product"
        assert rows[0].price == pytest.approx(199.99)

    def test_find_by_id_round_trips(self, session: Session):
        repository = SqlProductRepository(session)
        saved = repository.save(Product(name="Lamp", price=35.5))

        found = repository.find_by_id(saved.id)

        assert found is not None
        assert found.name == "Lamp"
        assert found.price == pytest.approx(35.5)
        assert found.id == saved.id

    def test_find_by_id_missing_returns_none(self, session: Session):
        assert SqlProductRepository(session).find_by_id(999) is None

    def test_save_with_existing_id_updates(self, session: Session):
        repository = SqlProductRepository(session)
        saved = repository.save(Product(name="Chair", price=40.0))

        repository.save(Product(id=saved.id, name="Chair v2", price=45.0))

        rows = session.exec(select(ProductTable)).all()
        assert len(rows) == 1
        assert repository.find_by_id(saved.id) == Product(id=saved.id, name="Chair v2", price=45.0)

    def test_save_with_unknown_id_creates_under_that_id(self, session: Session):
        repository = SqlProductRepository(session)

        saved = repository.save(Product(id=42, name="Shelf", price=80.0))

        assert saved.id == 42
        assert repository.find_by_id(42) is not None

    def test_ids_are_distinct(self, session: Session):
        repository = SqlProductRepository(session)

        first = repository.save(Product(name="A", price=1.0))
        second = repository.save(Product(name="B", price=2.0))

        assert first.id != second.id

    def test_commit_failure_rolls_back_and_propagates(self):
        session = MagicMock(spec=Session)
        session.get.return_value = None
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("boom"))

        with pytest.raises(IntegrityError):
            SqlProductRepository(session).save(Product(name="Broken", price=1.0))

        session.rollback.assert_called_once()
        session.refresh.assert_not_called()


class TestInMemoryProductRepository:
    """Test the dictionary-backed adapter honours the same contract."""

    def test_save_assigns_sequential_ids(self):
        repository = InMemoryProductRepository()

        first = repository.save(Product(name="A", price=1.0))
        second = repository.save(Product(name="B", price=2.0))

        assert (first.id, second.id) == (1, 2)
        assert len(repository) == 2

    def test_save_with_id_replaces(self):
        repository = InMemoryProductRepository()
        saved = repository.save(Product(name="A", price=1.0))

        repository.save(Product(id=saved.id, name="A2", price=3.0))

        assert len(repository) == 1
        assert repository.find_by_id(saved.id).name == "A2"

    def test_explicit_id_advances_counter(self):
        repository = InMemoryProductRepository()
        repository.save(Product(id=10, name="A", price=1.0))

        assert repository.save(Product(name="B", price=2.0)).id == 11

    def test_stored_copy_is_isolated_from_caller(self):
        repository = InMemoryProductRepository()
        product = repository.save(Product(name="A", price=1.0))

        product.name = "mutated"

        assert repository.find_by_id(product.id).name == "A"

    def test_find_missing_returns_none(self):
        assert InMemoryProductRepository().find_by_id(1) is None
