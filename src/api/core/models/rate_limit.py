"""Rate limiting types and models."""

from enum import Enum

from pydantic import BaseModel


class RateLimitClientType(str, Enum):
    """Types of clients for rate limiting."""

    IP = "ip"
    SERVICE = "service"


# Cache keys: rate_limit:{client_type}:{identifier}
# - rate_limit:ip:1.2.3.4
# - rate_limit:service:video-worker


class ClientIdentifier(BaseModel):
    """Client identifier for rate limiting."""

    client_type: RateLimitClientType
    client_id: str

    def to_cache_key(self) -> str:
        """Generate Redis cache key for this client."""
        return f"rate_limit:{self.client_type.value}:{self.client_id}"

    def __str__(self) -> str:
        return f"{self.client_type.value}:{self.client_id}"


class RateLimitResult(BaseModel):
    """Result of rate limit check."""

    is_allowed: bool
    current_count: int
    time_to_reset: int | None
    client_identifier: ClientIdentifier
    limit: int
    window_seconds: int
