from collections.abc import Callable
from dataclasses import dataclass, field

from sqlmodel import Session

from src.storefront.core.services import DbSessionService, UserSessionService
from src.storefront.core.storage.session_storage import SessionStorage
from src.storefront.entities.service.product import (
    ProductRepository,
    SqlProductRepository,
)

ProductRepositoryFactory = Callable[[Session], ProductRepository]


@dataclass
class ApplicationDependencies:
    """Process-wide services, built once at startup.

    ``product_repository_factory`` binds the repository contract to a
    concrete adapter; it is called once per request with that request's
    database session.
    """

    database_service: DbSessionService
    session_storage: SessionStorage
    user_session_service: UserSessionService
    product_repository_factory: ProductRepositoryFactory = field(
        default=SqlProductRepository
    )
