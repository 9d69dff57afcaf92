"""User database table model."""

from sqlmodel import Field

from src.storefront.entities.core._base import EntityTable


class UserTable(EntityTable, table=True):
    """Row shape of the ``users`` table; the only place the password hash lives."""

    __tablename__ = "users"

    name: str = Field(max_length=255)
    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: str
