"""Cookie-session authentication endpoints for the single-page client.

The client first calls ``GET /sanctum/csrf-cookie`` to receive a readable
``XSRF-TOKEN`` cookie, echoes it in the ``X-XSRF-TOKEN`` header on
``POST /login``, and from then on authenticates with the HttpOnly session
cookie.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status
from loguru import logger
from pydantic import BaseModel, Field

from src.storefront.api.http.deps import (
    get_authentication_service,
    get_current_session,
    get_user_session_service,
    require_csrf,
    require_xsrf_cookie,
)
from src.storefront.api.http.errors import validation_error_response
from src.storefront.core.models.session import UserSession
from src.storefront.core.security import generate_csrf_token
from src.storefront.core.services import (
    AuthenticationService,
    InvalidCredentialsError,
    UserSessionService,
)
from src.storefront.runtime.context import get_config

router = APIRouter(tags=["auth"])


class LoginRequest(BaseModel):
    """Credentials submitted by the login form."""

    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)


def _cookie_settings(http_only: bool) -> dict[str, Any]:
    config = get_config()
    return {
        "httponly": http_only,
        "secure": config.app.environment == "production",
        "samesite": config.security.cookie_samesite,
        "path": "/",
    }


def _set_xsrf_cookie(response: Response, token: str) -> None:
    config = get_config()
    response.set_cookie(
        key=config.security.xsrf_cookie_name,
        value=token,
        max_age=config.app.session_max_age,
        **_cookie_settings(http_only=False),
    )


@router.get("/sanctum/csrf-cookie", status_code=status.HTTP_204_NO_CONTENT)
async def csrf_cookie(
    response: Response,
    user_session: UserSession | None = Depends(get_current_session),
) -> None:
    """Hand out the CSRF token the client must echo on state-changing requests."""
    token = user_session.csrf_token if user_session else generate_csrf_token()
    _set_xsrf_cookie(response, token)


@router.post(
    "/login",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_xsrf_cookie)],
    response_model=None,
)
async def login(
    credentials: LoginRequest,
    request: Request,
    response: Response,
    auth_service: AuthenticationService = Depends(get_authentication_service),
    user_session_service: UserSessionService = Depends(get_user_session_service),
    previous_session: UserSession | None = Depends(get_current_session),
) -> Response | None:
    """Verify credentials and start a new cookie session."""
    try:
        user = auth_service.authenticate(credentials.email, credentials.password)
    except InvalidCredentialsError:
        return validation_error_response(
            {"email": ["These credentials do not match our records."]},
            getattr(request.state, "request_id", None),
        )

    # Session id rotates on every login
    if previous_session is not None:
        await user_session_service.delete_user_session(previous_session.id)

    user_session = await user_session_service.create_user_session(user.id)
    config = get_config()
    response.set_cookie(
        key=config.security.session_cookie_name,
        value=user_session.id,
        max_age=config.app.session_max_age,
        **_cookie_settings(http_only=True),
    )
    _set_xsrf_cookie(response, user_session.csrf_token)
    logger.info("User {} logged in", user.id)
    return None


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_csrf)],
)
async def logout(
    response: Response,
    user_session: UserSession | None = Depends(get_current_session),
    user_session_service: UserSessionService = Depends(get_user_session_service),
) -> None:
    """End the current session and clear the auth cookies."""
    if user_session is not None:
        await user_session_service.delete_user_session(user_session.id)
        logger.info("User {} logged out", user_session.user_id)

    config = get_config()
    response.delete_cookie(config.security.session_cookie_name, path="/")
    response.delete_cookie(config.security.xsrf_cookie_name, path="/")
