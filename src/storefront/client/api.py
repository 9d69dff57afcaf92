"""HTTP client for the storefront API, as used by the single-page frontend.

Two httpx clients share one cookie jar: ``api`` is rooted at ``<base>/api``
and reports 401/419 responses to the registered unauthorized callback;
``web`` is rooted at ``<base>`` and carries the CSRF cookie, login and
logout calls without that hook.
"""

from collections.abc import Awaitable, Callable
from http.cookiejar import CookieJar
from typing import Any
from urllib.parse import unquote

import httpx
from loguru import logger
from pydantic import BaseModel

UnauthorizedCallback = Callable[[], Awaitable[None]]

UNAUTHORIZED_STATUSES = frozenset({401, 419})


class ActionResult(BaseModel):
    """Outcome of a client action that talks to the server."""

    ok: bool
    status_code: int | None = None
    error: str | None = None
    data: Any = None

    @classmethod
    def success(cls, status_code: int, data: Any = None) -> "ActionResult":
        return cls(ok=True, status_code=status_code, data=data)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ActionResult":
        """Build a result from any response; non-2xx statuses become failures."""
        body = _json_or_none(response)
        if response.is_success:
            return cls.success(response.status_code, body)

        error = None
        if isinstance(body, dict):
            error = body.get("message") or body.get("detail")
        return cls(
            ok=False,
            status_code=response.status_code,
            error=str(error) if error else response.reason_phrase,
            data=body,
        )

    @classmethod
    def from_exception(cls, exc: httpx.HTTPError) -> "ActionResult":
        return cls(ok=False, error=str(exc) or type(exc).__name__)


def _json_or_none(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


class ApiClient:
    """Cookie-authenticated client for the storefront HTTP API."""

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        xsrf_cookie_name: str = "XSRF-TOKEN",
        xsrf_header_name: str = "X-XSRF-TOKEN",
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.xsrf_cookie_name = xsrf_cookie_name
        self.xsrf_header_name = xsrf_header_name
        self._on_unauthorized: UnauthorizedCallback | None = None

        # httpx shares a CookieJar instance instead of copying it
        self.cookie_jar = CookieJar()
        headers = {
            "Accept": "application/json",
            "X-Requested-With": "XMLHttpRequest",
        }
        self.web = httpx.AsyncClient(
            base_url=self.base_url,
            cookies=self.cookie_jar,
            headers=headers,
            transport=transport,
            event_hooks={"request": [self._attach_xsrf_header]},
        )
        self.api = httpx.AsyncClient(
            base_url=f"{self.base_url}/api",
            cookies=self.cookie_jar,
            headers=headers,
            transport=transport,
            event_hooks={
                "request": [self._attach_xsrf_header],
                "response": [self._check_unauthorized],
            },
        )

    def on_unauthorized(self, callback: UnauthorizedCallback | None) -> None:
        """Register the callback run when the API answers 401 or 419."""
        self._on_unauthorized = callback

    @property
    def xsrf_token(self) -> str | None:
        for cookie in self.cookie_jar:
            if cookie.name == self.xsrf_cookie_name and cookie.value:
                return unquote(cookie.value)
        return None

    async def _attach_xsrf_header(self, request: httpx.Request) -> None:
        token = self.xsrf_token
        if token:
            request.headers[self.xsrf_header_name] = token

    async def _check_unauthorized(self, response: httpx.Response) -> None:
        if response.status_code in UNAUTHORIZED_STATUSES and self._on_unauthorized:
            logger.debug(
                "API answered {} for {}", response.status_code, response.request.url
            )
            await self._on_unauthorized()

    # --- web routes ---

    async def csrf_cookie(self) -> httpx.Response:
        return await self.web.get("/sanctum/csrf-cookie")

    async def login(self, email: str, password: str) -> httpx.Response:
        return await self.web.post("/login", json={"email": email, "password": password})

    async def logout(self) -> httpx.Response:
        return await self.web.post("/logout")

    # --- api routes ---

    async def current_user(self) -> httpx.Response:
        return await self.api.get("/user")

    async def create_product(self, name: str, price: float) -> ActionResult:
        """POST a new product; the created product is in ``data`` on success."""
        try:
            response = await self.api.post(
                "/products", json={"name": name, "price": price}
            )
        except httpx.HTTPError as exc:
            logger.warning("Create product request failed: {}", exc)
            return ActionResult.from_exception(exc)
        return ActionResult.from_response(response)

    async def get_product(self, product_id: int) -> ActionResult:
        try:
            response = await self.api.get(f"/products/{product_id}")
        except httpx.HTTPError as exc:
            logger.warning("Get product request failed: {}", exc)
            return ActionResult.from_exception(exc)
        return ActionResult.from_response(response)

    async def aclose(self) -> None:
        await self.api.aclose()
        await self.web.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
