"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.deps import get_app_dependencies
from src.catalog.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is running."""
    return {"status": "healthy", "service": "api"}


@router.get("/ready", response_model=None)
async def readiness(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe for the product storage.

    Returns 200 when the configured repository backend is usable, 503
    otherwise. The in-memory backend is always ready.
    """
    config = get_config()

    checks: dict[str, Any] = {}
    all_healthy = True

    if app_deps.repository_backend == "memory":
        checks["storage"] = {"status": "healthy", "type": "memory"}
    else:
        try:
            db_healthy = app_deps.database_service.health_check()
        except Exception as e:
            checks["storage"] = {"status": "unhealthy", "error": str(e)}
            all_healthy = False
        else:
            checks["storage"] = {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": app_deps.database_service.engine.dialect.name,
            }
            all_healthy = db_healthy

    response = {
        "status": "ready" if all_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": checks,
    }

    if not all_healthy:
        return JSONResponse(status_code=503, content=response)

    return response
