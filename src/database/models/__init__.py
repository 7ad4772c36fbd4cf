"""Database models for the Video Credits API."""

from .accounts import Account
from .base import Base
from .usage import UsageRecord
from .videos import VideoAnalysis

# Export all models
__all__ = [
    # Base
    "Base",
    # Models
    "Account",
    "UsageRecord",
    "VideoAnalysis",
]
