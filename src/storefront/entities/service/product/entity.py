"""Entity: Product."""

from typing import Any

from pydantic import Field

from src.storefront.entities.core._base import Entity


class Product(Entity):
    """Product entity representing an item in the catalogue.

    A plain data holder: the use case builds it from validated input and the
    repository fills in ``id`` when it is persisted.
    """

    name: str = Field(description="Product name")
    price: float = Field(description="Unit price")

    def __eq__(self, other: Any) -> bool:
        """Compare products by identity and business attributes."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.price == other.price
        )

    def __hash__(self) -> int:
        return hash((
            self.id,
            self.name,
            self.price,
        ))
