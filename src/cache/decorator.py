import pickle
import redis.asyncio as redis
from functools import wraps
from uuid import UUID

from src.utils.logger import get_logger
from src.utils.settings.redis import RedisSettings

logger = get_logger(__name__)


def _generate_cache_key(func, args: tuple, kwargs: dict) -> str:
    """Generate cache key from function name and simple-typed parameters only."""
    settings = RedisSettings()
    key_parts = [func.__module__.replace(".", ":"), func.__qualname__.replace(".", ":")]

    # Skip 'self' for methods, plain functions keep their first argument
    start_idx = 1 if "." in func.__qualname__ and args else 0

    # Only include simple types in cache key (skip services, sessions, etc.)
    for arg in args[start_idx:]:
        if isinstance(arg, (str, int, float, bool, UUID)):
            safe_arg = str(arg).replace(":", "_").replace("*", "_")
            key_parts.append(safe_arg)

    for k, v in sorted(kwargs.items()):
        if isinstance(v, (str, int, float, bool, UUID)):
            safe_val = str(v).replace(":", "_").replace("*", "_")
            key_parts.append(f"{k}={safe_val}")

    return f"{settings.CACHE_KEY_PREFIX}:cache:" + ":".join(key_parts)


def _redis_client() -> redis.Redis:
    return redis.from_url(RedisSettings().REDIS_URL, decode_responses=False)


async def _get_cache(key: str):
    """Get value from Redis cache."""
    try:
        redis_client = _redis_client()
        value = await redis_client.get(key)
        await redis_client.aclose()

        if value is not None:
            return pickle.loads(value)
        return None
    except Exception as e:
        logger.error(f"Failed to get cache key '{key}': {e}")
        return None


async def _set_cache(key: str, value, ttl: int) -> bool:
    """Set value in Redis cache with TTL."""
    try:
        redis_client = _redis_client()
        await redis_client.setex(key, ttl, pickle.dumps(value))
        await redis_client.aclose()
        return True
    except Exception as e:
        logger.error(f"Failed to set cache key '{key}': {e}")
        return False


def cached(ttl: int | None = None):
    """Cache decorator with Redis backend.

    Cache failures never fail the call: a Redis outage degrades to calling
    the wrapped function every time.
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            cache_key = _generate_cache_key(func, args, kwargs)

            cached_value = await _get_cache(cache_key)
            if cached_value is not None:
                logger.debug(f"Cache hit: {cache_key}")
                return cached_value

            result = await func(*args, **kwargs)

            await _set_cache(cache_key, result, ttl or RedisSettings().CACHE_DEFAULT_TTL)
            logger.debug(f"Cached: {cache_key}")
            return result

        return wrapper

    return decorator


