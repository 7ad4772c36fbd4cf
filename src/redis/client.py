"""Async Redis client utilities."""

import redis.asyncio as redis

from src.utils.settings.redis import RedisSettings
from src.utils.logger import get_logger

logger = get_logger(__name__)

# Process-wide pool, created on first use
_redis_pool: redis.ConnectionPool | None = None


async def _ensure_redis_pool() -> redis.ConnectionPool:
    """Ensure Redis connection pool is initialized."""
    global _redis_pool
    if _redis_pool is None:
        _redis_pool = redis.ConnectionPool.from_url(
            RedisSettings().REDIS_URL, decode_responses=True
        )
        logger.info("Redis connection pool created")
    return _redis_pool


async def get_redis_client() -> redis.Redis:
    """Get Redis client for dependency injection and direct usage."""
    pool = await _ensure_redis_pool()
    return redis.Redis(connection_pool=pool)


async def close_redis_pool() -> None:
    """Close Redis connection pool - called during app shutdown."""
    global _redis_pool
    if _redis_pool:
        await _redis_pool.disconnect()
        _redis_pool = None
        logger.info("Redis connection pool closed")
