from loguru import logger
from sqlmodel import Session

from src.storefront.core.security import hash_password, verify_password
from src.storefront.entities.core.user import User, UserRepository


class InvalidCredentialsError(Exception):
    """Raised when an email/password pair does not match a stored user."""


class DuplicateUserError(Exception):
    """Raised when registering an email that already has an account."""


class AuthenticationService:
    """Credential checks and account registration over the user repository."""

    def __init__(self, db_session: Session) -> None:
        self._user_repo = UserRepository(db_session)

    def authenticate(self, email: str, password: str) -> User:
        """Return the user owning ``email`` if ``password`` matches.

        Raises:
            InvalidCredentialsError: unknown email or wrong password
        """
        password_hash = self._user_repo.get_password_hash(email)
        if not verify_password(password, password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentialsError(email)

        user = self._user_repo.get_by_email(email)
        if user is None:
            raise InvalidCredentialsError(email)
        return user

    def register(self, name: str, email: str, password: str) -> User:
        """Create a user with a hashed password.

        Raises:
            DuplicateUserError: an account with ``email`` already exists
        """
        if self._user_repo.get_by_email(email) is not None:
            raise DuplicateUserError(email)

        user = self._user_repo.create(User(name=name, email=email), hash_password(password))
        logger.info("Registered user {}", user.id)
        return user
