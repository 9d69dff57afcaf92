from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


class Entity(BaseModel):
    """Base entity class with a storage-assigned integer identifier.

    ``id`` stays ``None`` until the entity has been persisted.
    """

    id: int | None = PydanticField(
        default=None,
        description="Identifier assigned by persistence, None until saved",
    )

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


class EntityTable(SQLModel, table=False):
    """Base table with an autoincrement primary key and audit timestamps."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Autoincrement primary key",
    )

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_column_kwargs={
            "server_default": sa.func.now(),
            "onupdate": sa.func.now(),
        },
    )
