import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal

import redis.asyncio as redis
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.utils.logger import get_logger

logger = get_logger(__name__)

HealthState = Literal["healthy", "degraded", "unhealthy"]


@dataclass
class HealthCheckResult:
    """Result of a health check."""

    service: str
    status: HealthState
    connected: bool
    details: dict = field(default_factory=dict)
    error: str | None = None


@dataclass
class OverallHealthStatus:
    """Overall health status with individual service results."""

    status: HealthState
    services: dict[str, HealthCheckResult]
    timestamp: str


class HealthService:
    """Service for performing health checks on the database and Redis."""

    def __init__(self, db: AsyncSession, redis: redis.Redis | None):
        self.db = db
        self.redis = redis

    async def check_database_health(self) -> HealthCheckResult:
        """Database connection health check."""
        try:
            result = await self.db.execute(text("SELECT 1"))
            return HealthCheckResult(
                service="database",
                status="healthy",
                connected=True,
                details={"test_query_result": result.scalar()},
            )
        except Exception as e:
            logger.error(f"Database health check error: {e}")
            return HealthCheckResult(
                service="database",
                status="unhealthy",
                connected=False,
                error=str(e),
            )

    async def check_redis_health(self) -> HealthCheckResult:
        """Redis health check. Rate limiting and caching degrade without it."""
        try:
            if self.redis is None:
                raise ConnectionError("Redis client not configured")
            await self.redis.ping()
            return HealthCheckResult(service="redis", status="healthy", connected=True)
        except Exception as e:
            logger.error(f"Redis health check error: {e}")
            # Redis failures fail open, the API keeps serving
            return HealthCheckResult(
                service="redis",
                status="degraded",
                connected=False,
                error=str(e),
            )

    async def run_all_checks(self) -> OverallHealthStatus:
        """Run all health checks concurrently and return overall status."""
        results = await asyncio.gather(
            self.check_database_health(), self.check_redis_health()
        )

        services = {result.service: result for result in results}
        statuses = {result.status for result in results}
        if "unhealthy" in statuses:
            overall: HealthState = "unhealthy"
        elif "degraded" in statuses:
            overall = "degraded"
        else:
            overall = "healthy"

        return OverallHealthStatus(
            status=overall,
            services=services,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
