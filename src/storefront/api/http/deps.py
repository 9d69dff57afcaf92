"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from src.storefront.api.http.app_data import ApplicationDependencies
from src.storefront.core.models.session import UserSession
from src.storefront.core.security import csrf_tokens_match
from src.storefront.core.services import AuthenticationService, UserSessionService
from src.storefront.core.use_cases import CreateProductUseCase
from src.storefront.entities.core.user import User, UserRepository
from src.storefront.entities.service.product import ProductRepository
from src.storefront.runtime.context import get_config

CSRF_MISMATCH_STATUS = 419
_STATE_CHANGING_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the services built at startup."""
    return request.app.state.app_dependencies


def get_db_session(request: Request) -> Iterator[Session]:
    """Open a database session for the duration of one request."""
    app_deps = get_app_dependencies(request)
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_user_session_service(request: Request) -> UserSessionService:
    """Get the User Session service instance."""
    return get_app_dependencies(request).user_session_service


def get_product_repository(
    request: Request,
    db: Session = Depends(get_db_session),
) -> ProductRepository:
    """Resolve the product repository bound at startup for this request's session."""
    return get_app_dependencies(request).product_repository_factory(db)


def get_create_product_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> CreateProductUseCase:
    return CreateProductUseCase(repository)


def get_authentication_service(
    db: Session = Depends(get_db_session),
) -> AuthenticationService:
    return AuthenticationService(db)


async def get_current_session(
    request: Request,
    user_session_service: UserSessionService = Depends(get_user_session_service),
) -> UserSession | None:
    """Load the session named by the session cookie, if it is still valid."""
    session_id = request.cookies.get(get_config().security.session_cookie_name)
    if not session_id:
        return None
    return await user_session_service.get_user_session(session_id)


async def get_optional_user(
    request: Request,
    user_session: UserSession | None = Depends(get_current_session),
    db: Session = Depends(get_db_session),
) -> User | None:
    """Return the signed-in user, or None for anonymous requests."""
    if user_session is None:
        return None

    user = UserRepository(db).get(user_session.user_id)
    if user is not None:
        request.state.session_id = user_session.id
        request.state.user_id = user.id
    return user


async def get_authenticated_user(
    user: User | None = Depends(get_optional_user),
) -> User:
    """Require a signed-in user; anonymous requests get 401."""
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthenticated.")
    return user


async def require_csrf(
    request: Request,
    user_session: UserSession | None = Depends(get_current_session),
) -> None:
    """Require the session's CSRF token on state-changing requests.

    Requests without a session are left to the authentication dependency.
    """
    if request.method not in _STATE_CHANGING_METHODS or user_session is None:
        return

    header_name = get_config().security.xsrf_header_name
    if not csrf_tokens_match(user_session.csrf_token, request.headers.get(header_name)):
        raise HTTPException(
            status_code=CSRF_MISMATCH_STATUS, detail="CSRF token mismatch."
        )


def require_xsrf_cookie(request: Request) -> None:
    """Double-submit check for requests made before a session exists.

    The header must echo the ``XSRF-TOKEN`` cookie handed out by the
    csrf-cookie endpoint.
    """
    security = get_config().security
    if not csrf_tokens_match(
        request.cookies.get(security.xsrf_cookie_name),
        request.headers.get(security.xsrf_header_name),
    ):
        raise HTTPException(
            status_code=CSRF_MISMATCH_STATUS, detail="CSRF token mismatch."
        )
