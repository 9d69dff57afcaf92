"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.storefront.api.http.app_data import ApplicationDependencies
from src.storefront.core.storage.session_storage import RedisSessionStorage
from src.storefront.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness check: 200 OK as long as the process is serving requests."""
    return {"status": "healthy", "service": "storefront"}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness check.

    Returns 200 when the database answers, 503 otherwise. Session storage
    is reported but never fails the check since it falls back to memory.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    config = get_config()

    checks: dict[str, dict[str, Any]] = {}

    db_healthy = app_deps.database_service.health_check()
    checks["database"] = {
        "status": "healthy" if db_healthy else "unhealthy",
        "type": "sqlite" if config.database.is_sqlite else "sql",
    }

    storage = app_deps.session_storage
    is_redis = isinstance(storage, RedisSessionStorage)
    if is_redis:
        await storage.ping()
    checks["session_storage"] = {
        "status": "healthy" if storage.is_available() else "degraded",
        "type": "redis" if is_redis else "in-memory",
    }

    response = {
        "status": "ready" if db_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": checks,
    }
    if not db_healthy:
        return JSONResponse(status_code=503, content=response)
    return response
