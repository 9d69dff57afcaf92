"""Product repository contract and its storage adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod

from loguru import logger
from sqlmodel import Session

from .entity import Product
from .table import ProductTable


class ProductRepository(ABC):
    """Persistence contract the product use cases depend on.

    ``save`` is an upsert keyed by ``Product.id``: a product without an id is
    always created, a product with an id updates the matching record or
    creates one under that id when none exists.
    """

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Persist ``product`` and return it with its id populated."""

    @abstractmethod
    def find_by_id(self, product_id: int) -> Product | None:
        """Return the product stored under ``product_id`` or None."""


class SqlProductRepository(ProductRepository):
    """SQLModel-backed product repository."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def save(self, product: Product) -> Product:
        row = None
        if product.id is not None:
            row = self._session.get(ProductTable, product.id)

        if row is None:
            row = ProductTable(id=product.id, name=product.name, price=product.price)
        else:
            row.name = product.name
            row.price = product.price

        self._session.add(row)
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._session.refresh(row)

        logger.debug("Saved product {}", row.id)
        product.id = row.id
        return product

    def find_by_id(self, product_id: int) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return Product(id=row.id, name=row.name, price=row.price)


class InMemoryProductRepository(ProductRepository):
    """Dictionary-backed repository for tests and local experiments."""

    def __init__(self) -> None:
        self._rows: dict[int, Product] = {}
        self._next_id = 1

    def save(self, product: Product) -> Product:
        if product.id is None:
            product.id = self._next_id
        self._next_id = max(self._next_id, product.id + 1)
        self._rows[product.id] = product.model_copy()
        return product

    def find_by_id(self, product_id: int) -> Product | None:
        stored = self._rows.get(product_id)
        return stored.model_copy() if stored is not None else None

    def __len__(self) -> int:
        return len(self._rows)
