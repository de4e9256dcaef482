"""Health check endpoints. No authentication; used for liveness and readiness checks."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from geolab.core.config import get_settings
from geolab.infrastructure.persistence.database import check_database
from geolab.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database configured but unreachable", "model": ReadinessResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 when the database is reachable (or not configured); 503 otherwise.

    Cache state is reported but never fails readiness: a missing cache only
    costs performance.
    """
    database = await check_database()
    cache_service = getattr(request.app.state, "cache", None)
    if not get_settings().redis_enabled:
        cache = "disabled"
    elif cache_service is not None and cache_service.is_available():
        cache = "ok"
    else:
        cache = "unavailable"
    if database == "unavailable":
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(
                status="not_ready", database=database, cache=cache
            ).model_dump(),
        )
    return ReadinessResponse(database=database, cache=cache)
