"""Health check endpoints for monitoring."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
import redis.asyncio as redis

from src.api.core.dependencies import AsyncSessionDep
from src.modules.health.service import HealthService
from src.redis.client import get_redis_client

router = APIRouter(prefix="/health", tags=["health"])

SERVICE_NAME = "video-credits-api"


@router.get("/")
async def health_check(
    db: AsyncSessionDep,
    redis_client: redis.Redis = Depends(get_redis_client),
) -> JSONResponse:
    """Database and Redis health. 503 only when the database is down."""
    health_service = HealthService(db, redis_client)
    overall = await health_service.run_all_checks()
    status_code = (
        status.HTTP_503_SERVICE_UNAVAILABLE
        if overall.status == "unhealthy"
        else status.HTTP_200_OK
    )
    return JSONResponse(status_code=status_code, content=asdict(overall))


@router.get("/liveness")
async def liveness_check():
    """Simple liveness check - indicates if service is running."""
    return {"status": "alive", "service": SERVICE_NAME}
