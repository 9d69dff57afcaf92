"""FastAPI application setup."""

import time
import uuid
from collections.abc import Sequence
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from src.storefront.api.http.app_data import ApplicationDependencies
from src.storefront.api.http.errors import request_validation_exception_handler
from src.storefront.api.http.routers.auth import router as auth_router
from src.storefront.api.http.routers.health import router as health_router
from src.storefront.api.http.routers.service.product import router as product_router
from src.storefront.api.http.routers.user import router as user_router
from src.storefront.api.utils.app_startup import configure_logging
from src.storefront.core.services import DbSessionService, UserSessionService
from src.storefront.core.storage.session_storage import (
    RedisSessionStorage,
    create_session_storage,
)
from src.storefront.entities.service.product import SqlProductRepository
from src.storefront.runtime.context import get_config

configure_logging()


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


class PathScopedCORSMiddleware(CORSMiddleware):
    """CORS handling limited to requests whose path starts with one of ``paths``."""

    def __init__(self, app: ASGIApp, paths: Sequence[str], **kwargs) -> None:
        super().__init__(app, **kwargs)
        self.paths = tuple(paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and not scope["path"].startswith(self.paths):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


# --- Lifecycle hooks ---
async def startup(app: FastAPI) -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = DbSessionService()
    if config.database.create_tables:
        database_service.create_all()

    session_storage = await create_session_storage(config.redis)
    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        session_storage=session_storage,
        user_session_service=UserSessionService(session_storage),
        product_repository_factory=SqlProductRepository,
    )


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies = app.state.app_dependencies
    await app_dependencies.user_session_service.purge_expired()
    if isinstance(app_dependencies.session_storage, RedisSessionStorage):
        await app_dependencies.session_storage.close()
    app_dependencies.database_service.dispose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup(app)
    try:
        yield
    finally:
        await shutdown(app)


app = FastAPI(
    title="Storefront",
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None if get_config().app.environment == "production" else "/redoc",
)

__all__ = ["app", "startup", "shutdown"]

app.add_middleware(SecurityHeadersMiddleware)


# --- Request logging middleware ---
# Must stay inside CORS so its error responses carry CORS headers
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


# --- CORS configuration ---
cors = get_config().app.cors
if get_config().app.environment == "production" and "*" in cors.origins:
    raise RuntimeError(
        "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
    )

app.add_middleware(
    PathScopedCORSMiddleware,
    paths=cors.paths,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)

app.add_exception_handler(RequestValidationError, request_validation_exception_handler)


# --- Router registration ---
app.include_router(auth_router)
app.include_router(user_router, prefix="/api")
app.include_router(product_router, prefix="/api")
app.include_router(health_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # access logging happens in log_requests
    )
