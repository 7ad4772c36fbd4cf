"""Redis settings configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_KEY_PREFIX: str = "video_credits"
    CACHE_DEFAULT_TTL: int = 900


__all__ = ["RedisSettings"]
