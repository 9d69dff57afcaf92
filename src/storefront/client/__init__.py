"""Python rendition of the storefront single-page client."""

from dataclasses import dataclass

import httpx

from src.storefront.client.api import ActionResult, ApiClient
from src.storefront.client.router import DEFAULT_ROUTES, Route, Router
from src.storefront.client.store import AuthStore


@dataclass
class StorefrontClient:
    api: ApiClient
    store: AuthStore
    router: Router

    async def aclose(self) -> None:
        await self.api.aclose()


def create_client(
    base_url: str, transport: httpx.AsyncBaseTransport | None = None
) -> StorefrontClient:
    """Build the API client, auth store and router and wire them together."""
    api = ApiClient(base_url, transport=transport)
    store = AuthStore(api)
    router = Router(store)
    store.bind_navigator(router.push)
    api.on_unauthorized(store.handle_unauthorized)
    return StorefrontClient(api=api, store=store, router=router)


__all__ = [
    "DEFAULT_ROUTES",
    "ActionResult",
    "ApiClient",
    "AuthStore",
    "Route",
    "Router",
    "StorefrontClient",
    "create_client",
]
