"""User repository for data access operations."""

from sqlmodel import Session, select

from .entity import User
from .table import UserTable


class UserRepository:
    """Data-access layer for users."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, user_id: int) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def get_by_email(self, email: str) -> User | None:
        row = self._get_row_by_email(email)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def get_password_hash(self, email: str) -> str | None:
        """Return the stored hash for ``email``, used only for credential checks."""
        row = self._get_row_by_email(email)
        return row.password_hash if row is not None else None

    def create(self, user: User, password_hash: str) -> User:
        row = UserTable(name=user.name, email=user.email.lower(), password_hash=password_hash)
        self._session.add(row)
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._session.refresh(row)
        return User.model_validate(row, from_attributes=True)

    def list_all(self) -> list[User]:
        rows = self._session.exec(select(UserTable).order_by(UserTable.id)).all()
        return [User.model_validate(row, from_attributes=True) for row in rows]

    def _get_row_by_email(self, email: str) -> UserTable | None:
        statement = select(UserTable).where(UserTable.email == email.lower())
        return self._session.exec(statement).first()
