"""Product database table model."""

from sqlalchemy import Column, Numeric
from sqlmodel import Field

from src.storefront.entities.core._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Row shape of the ``products`` table.

    ``price`` is stored as NUMERIC(10, 2) and read back as a float.
    """

    __tablename__ = "products"

    name: str = Field(max_length=255, nullable=False)
    price: float = Field(
        sa_column=Column(Numeric(10, 2, asdecimal=False), nullable=False)
    )
