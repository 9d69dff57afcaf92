"""Core services exports."""

from src.storefront.core.storage.session_storage import (
    InMemorySessionStorage,
    RedisSessionStorage,
)

from .database.db_session import DbSessionService
from .session.user_session import UserSessionService
from .user.authentication import (
    AuthenticationService,
    DuplicateUserError,
    InvalidCredentialsError,
)

__all__ = [
    # Database Service
    "DbSessionService",
    # Session Services
    "UserSessionService",
    "InMemorySessionStorage",
    "RedisSessionStorage",
    # User Services
    "AuthenticationService",
    "DuplicateUserError",
    "InvalidCredentialsError",
]
