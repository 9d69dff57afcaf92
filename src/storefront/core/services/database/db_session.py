"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import Engine, text
from sqlmodel import Session, SQLModel, create_engine

from src.storefront.runtime.config.config_data import ConfigData
from src.storefront.runtime.context import get_config


def build_engine(config: ConfigData) -> Engine:
    """Create the SQLAlchemy engine for the configured database."""
    db_config = config.database
    engine_kwargs: dict[str, Any] = {
        "echo": db_config.echo,
        "pool_pre_ping": True,
        "connect_args": _get_connect_args(config),
    }

    if not db_config.is_sqlite:
        engine_kwargs.update(
            {
                "pool_size": db_config.pool_size,
                "max_overflow": db_config.max_overflow,
                "pool_timeout": db_config.pool_timeout,
                "pool_recycle": db_config.pool_recycle,
            }
        )
    elif config.app.environment == "production":
        logger.warning(
            "SQLite is not recommended for production use. "
            "Consider PostgreSQL for better performance and reliability."
        )

    return create_engine(db_config.connection_string, **engine_kwargs)


def _get_connect_args(config: ConfigData) -> dict:
    """Get database-specific connection arguments."""
    if config.database.is_sqlite:
        return {"check_same_thread": False, "timeout": 20}
    if "postgresql" in config.database.url:
        return {
            "application_name": f"storefront_{config.app.environment}",
            "connect_timeout": 30,
        }
    return {}


class DbSessionService:
    def __init__(self, engine: Engine | None = None):
        """Initialize the shared database engine and session factory."""
        if engine is None:
            main_config = get_config()
            logger.info(
                "Configuring database engine for environment: {}",
                main_config.app.environment,
            )
            engine = build_engine(main_config)
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False, autoflush=True)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Transactional scope: commit on success, roll back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.bind(error_type=type(e).__name__).error("Database transaction failed")
            raise
        finally:
            db.close()

    def create_all(self) -> None:
        """Create all tables registered on the SQLModel metadata."""
        # Table modules register themselves on SQLModel.metadata when imported
        from src.storefront.entities import ProductTable, UserTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False

    def dispose(self) -> None:
        self._engine.dispose()
