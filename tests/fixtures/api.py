from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.storefront.api.http.app_data import ApplicationDependencies
from src.storefront.api.http.deps import get_db_session
from src.storefront.core.services import DbSessionService, UserSessionService
from src.storefront.core.storage.session_storage import InMemorySessionStorage
from src.storefront.entities.core.user import User


@pytest.fixture
def app_dependencies(
    db_service: DbSessionService, session_storage: InMemorySessionStorage
) -> ApplicationDependencies:
    return ApplicationDependencies(
        database_service=db_service,
        session_storage=session_storage,
        user_session_service=UserSessionService(session_storage),
    )


@pytest.fixture
def app(
    app_dependencies: ApplicationDependencies, db_service: DbSessionService
) -> Generator[FastAPI]:
    """The real application wired to the per-test database and session store.

    The lifespan is not run; the dependencies it would build are installed
    on ``app.state`` directly.
    """
    from src.storefront.api.http.app import app

    def _db_session():
        db = db_service.get_session()
        try:
            yield db
        finally:
            db.close()

    app.state.app_dependencies = app_dependencies
    app.dependency_overrides[get_db_session] = _db_session
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def xsrf_headers(client: TestClient) -> dict[str, str]:
    """Echo the XSRF-TOKEN cookie back as the header the server expects."""
    token = client.cookies.get("XSRF-TOKEN")
    return {"X-XSRF-TOKEN": token} if token else {}


def login(client: TestClient, email: str, password: str):
    client.get("/sanctum/csrf-cookie")
    return client.post(
        "/login",
        json={"email": email, "password": password},
        headers=xsrf_headers(client),
    )


@pytest.fixture
def auth_client(client: TestClient, test_user: User, user_password: str) -> TestClient:
    """A TestClient holding a signed-in session for ``test_user``."""
    response = login(client, test_user.email, user_password)
    assert response.status_code == 204
    return client


__all__ = [
    "app",
    "app_dependencies",
    "auth_client",
    "client",
    "login",
    "xsrf_headers",
]
