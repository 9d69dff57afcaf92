"""Server-side session models."""

import time

from pydantic import BaseModel, Field


class UserSession(BaseModel):
    """Persistent user session created by a successful login."""

    id: str = Field(description="Session identifier")
    user_id: int = Field(description="Internal user ID")
    csrf_token: str = Field(description="CSRF token bound to this session")
    created_at: int = Field(description="Creation timestamp")
    last_accessed_at: int = Field(description="Last access timestamp")
    expires_at: int = Field(description="Session expiration timestamp")

    @classmethod
    def create(
        cls,
        session_id: str,
        user_id: int,
        csrf_token: str,
        session_max_age: int = 7200,
    ) -> "UserSession":
        """Create a new user session with timestamps."""
        now = int(time.time())
        return cls(
            id=session_id,
            user_id=user_id,
            csrf_token=csrf_token,
            created_at=now,
            last_accessed_at=now,
            expires_at=now + session_max_age,
        )

    def is_expired(self) -> bool:
        """Check if session is expired."""
        return time.time() > self.expires_at

    def update_access(self) -> None:
        """Update last accessed time."""
        self.last_accessed_at = int(time.time())
