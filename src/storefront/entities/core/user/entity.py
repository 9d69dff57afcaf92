"""User domain entity."""

from typing import Any

from pydantic import Field

from src.storefront.entities.core._base import Entity


class User(Entity):
    """User entity representing an account that can sign in.

    The password hash lives only on the table row and never leaves the
    repository.
    """

    name: str = Field(description="Display name")
    email: str = Field(description="Login email address")

    def __eq__(self, other: Any) -> bool:
        """Compare users by identity and business attributes."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.email == other.email
        )

    def __hash__(self) -> int:
        return hash((
            self.id,
            self.name,
            self.email,
        ))
