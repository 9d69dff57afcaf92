"""Tests for the client router guard."""

import httpx
import pytest

from src.storefront.client import Route, Router, StorefrontClient, create_client
from src.storefront.entities.core.user import User


class TestRouterGuard:
    @pytest.mark.asyncio
    async def test_protected_route_redirects_anonymous_user(self, spa: StorefrontClient):
        route = await spa.router.push("dashboard")

        assert route.name == "login"
        assert spa.router.current.path == "/login"

    @pytest.mark.asyncio
    async def test_protected_route_after_login(
        self, spa: StorefrontClient, test_user: User, user_password: str
    ):
        await spa.store.login(test_user.email, user_password)

        route = await spa.router.push("dashboard")

        assert route.name == "dashboard"

    @pytest.mark.asyncio
    async def test_existing_server_session_is_picked_up(
        self, spa: StorefrontClient, test_user: User, user_password: str
    ):
        await spa.store.login(test_user.email, user_password)
        # a reload loses client state but keeps the cookie
        spa.store.user = None

        route = await spa.router.push("dashboard")

        assert route.name == "dashboard"
        assert spa.store.user == test_user

    @pytest.mark.asyncio
    async def test_public_route_is_allowed(self, spa: StorefrontClient):
        assert (await spa.router.push("login")).name == "login"

    @pytest.mark.asyncio
    async def test_unknown_route(self, spa: StorefrontClient):
        with pytest.raises(KeyError):
            await spa.router.push("settings")

    @pytest.mark.asyncio
    async def test_fetches_user_once_per_navigation(self):
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            return httpx.Response(401)

        spa = create_client("http://testserver", transport=httpx.MockTransport(handler))

        await spa.router.push("dashboard")

        assert calls == ["/api/user"]
        assert spa.router.history == [spa.router.routes["login"]]
        await spa.aclose()

    @pytest.mark.asyncio
    async def test_logged_in_store_skips_fetch(self):
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            return httpx.Response(500)

        spa = create_client("http://testserver", transport=httpx.MockTransport(handler))
        spa.store.user = User(id=1, name="A", email="a@b.c")

        assert (await spa.router.push("dashboard")).name == "dashboard"
        assert calls == []
        await spa.aclose()

    @pytest.mark.asyncio
    async def test_html_user_response_redirects_to_login(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>login</html>")

        spa = create_client("http://testserver", transport=httpx.MockTransport(handler))

        route = await spa.router.push("dashboard")

        assert route.name == "login"
        assert not spa.store.is_logged_in
        await spa.aclose()

    @pytest.mark.asyncio
    async def test_custom_routes(self, spa: StorefrontClient):
        router = Router(
            spa.store,
            routes=[Route("login", "/login"), Route("reports", "/reports", requires_auth=True)],
        )

        assert (await router.push("reports")).name == "login"
