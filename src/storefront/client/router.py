"""Named client routes with an authentication guard."""

from collections.abc import Iterable
from dataclasses import dataclass

from loguru import logger

from src.storefront.client.store import LOGIN_ROUTE, AuthStore


@dataclass(frozen=True)
class Route:
    name: str
    path: str
    requires_auth: bool = False


DEFAULT_ROUTES: tuple[Route, ...] = (
    Route(name="login", path="/login"),
    Route(name="dashboard", path="/dashboard", requires_auth=True),
)


class Router:
    """Resolves navigation requests, redirecting to login when required."""

    def __init__(self, store: AuthStore, routes: Iterable[Route] = DEFAULT_ROUTES) -> None:
        self.store = store
        self.routes = {route.name: route for route in routes}
        self.current: Route | None = None
        self.history: list[Route] = []

    async def before_each(self, to: Route) -> Route:
        """Return the route navigation should actually land on."""
        if not self.store.is_logged_in:
            await self.store.fetch_user()

        if to.requires_auth and not self.store.is_logged_in:
            logger.debug("Route {} requires auth; redirecting to login", to.name)
            return self.routes[LOGIN_ROUTE]
        return to

    async def push(self, name: str) -> Route:
        """Navigate to the route called ``name``; unknown names raise KeyError."""
        resolved = await self.before_each(self.routes[name])
        self.current = resolved
        self.history.append(resolved)
        return resolved
