"""Client-side authentication state."""

from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from src.storefront.client.api import ActionResult, ApiClient
from src.storefront.entities.core.user import User

Navigator = Callable[[str], Awaitable[Any]]

LOGIN_ROUTE = "login"
HOME_ROUTE = "dashboard"


class AuthStore:
    """Holds the signed-in user; logged in exactly when ``user`` is set.

    Navigation is injected with :meth:`bind_navigator` once the router that
    depends on this store exists.
    """

    def __init__(self, api: ApiClient) -> None:
        self.api = api
        self.user: User | None = None
        self._navigate: Navigator | None = None

    @property
    def is_logged_in(self) -> bool:
        return self.user is not None

    def bind_navigator(self, navigate: Navigator) -> None:
        self._navigate = navigate

    async def _go(self, route_name: str) -> None:
        if self._navigate is not None:
            await self._navigate(route_name)

    async def fetch_user(self) -> User | None:
        """Refresh the user from the server; any failure means logged out."""
        try:
            response = await self.api.current_user()
        except httpx.HTTPError as exc:
            logger.warning("Fetching current user failed: {}", exc)
            self.user = None
            return None

        if not response.is_success:
            self.user = None
            return None

        try:
            self.user = User.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("Unexpected current user payload: {}", exc)
            self.user = None
        return self.user

    async def login(self, email: str, password: str) -> ActionResult:
        """CSRF cookie, credentials, then user fetch, strictly in that order."""
        try:
            response = await self.api.csrf_cookie()
            if not response.is_success:
                return ActionResult.from_response(response)

            response = await self.api.login(email, password)
            if not response.is_success:
                return ActionResult.from_response(response)
        except httpx.HTTPError as exc:
            logger.warning("Login request failed: {}", exc)
            return ActionResult.from_exception(exc)

        user = await self.fetch_user()
        if user is None:
            return ActionResult(ok=False, status_code=401, error="Unauthenticated.")

        await self._go(HOME_ROUTE)
        return ActionResult.success(response.status_code, user.model_dump())

    async def logout(self) -> ActionResult:
        """Tell the server, then clear local state whatever it answered."""
        try:
            result = ActionResult.from_response(await self.api.logout())
        except httpx.HTTPError as exc:
            logger.warning("Logout request failed: {}", exc)
            result = ActionResult.from_exception(exc)

        self.user = None
        await self._go(LOGIN_ROUTE)
        return result

    async def handle_unauthorized(self) -> None:
        """API hook for 401/419; only a logged-in store has anything to undo."""
        if self.is_logged_in:
            await self.logout()
