from functools import wraps
from typing import Any, Callable

from fastapi import Request, status
import redis.asyncio as redis

from src.api.core.exceptions.base import AppException
from src.api.core.messages import MessageCode
from src.api.core.models.rate_limit import (
    ClientIdentifier,
    RateLimitClientType,
)
from src.core.rate_limiting import RateLimiter
from src.utils.logger import get_client_ip, get_logger


logger = get_logger(__name__)


def create_rate_limit_key(request: Request) -> ClientIdentifier:
    """Identify the caller: internal service name when present, else client IP."""
    service_name = getattr(request.state, "service_name", None)
    if service_name:
        return ClientIdentifier(
            client_type=RateLimitClientType.SERVICE,
            client_id=service_name,
        )

    return ClientIdentifier(
        client_type=RateLimitClientType.IP,
        client_id=get_client_ip(request),
    )


def rate_limit(
    limit: int,
    window_seconds: int,
):
    """
    Rate limiting decorator for FastAPI endpoints.

    The endpoint must accept ``request: Request`` and a ``redis_client``
    dependency; without a Redis client the check is skipped.

    Args:
        limit: Maximum requests allowed
        window_seconds: Time window in seconds
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            request: Request | None = kwargs.get("request")
            redis_client: redis.Redis | None = kwargs.get("redis_client")

            if not request:
                logger.error("Rate limit decorator: Request not found")
                return await func(*args, **kwargs)

            if not redis_client:
                logger.warning(
                    "Rate limit decorator: Redis client not found, skipping rate limit"
                )
                return await func(*args, **kwargs)

            await check_rate_limit(request, redis_client, limit, window_seconds)

            return await func(*args, **kwargs)

        return wrapper

    return decorator


async def check_rate_limit(
    request: Request,
    redis_client: redis.Redis,
    limit: int,
    window_seconds: int,
) -> None:
    """
    Check rate limit for endpoint.

    Raises:
        AppException: When rate limit is exceeded
    """
    client_identifier = create_rate_limit_key(request)

    rate_limiter = RateLimiter(redis_client)
    result = await rate_limiter.is_allowed(client_identifier, limit, window_seconds)

    if not result.is_allowed:
        retry_after = result.time_to_reset or result.window_seconds
        logger.warning(
            f"Rate limit exceeded for {result.client_identifier}: "
            f"{result.current_count}/{result.limit} in {result.window_seconds}s"
        )

        raise AppException(
            MessageCode.RATE_LIMIT_EXCEEDED,
            status.HTTP_429_TOO_MANY_REQUESTS,
            details={
                "limit": result.limit,
                "window_seconds": result.window_seconds,
                "current_count": result.current_count,
                "retry_after": retry_after,
            },
            headers={
                "Retry-After": str(retry_after),
                "X-RateLimit-Limit": str(result.limit),
                "X-RateLimit-Reset": str(retry_after),
                "X-RateLimit-Window": str(result.window_seconds),
            },
        )
