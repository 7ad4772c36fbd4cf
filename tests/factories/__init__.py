"""Test factories for the video credits API models."""

from .base import AsyncSQLAlchemyModelFactory
from .accounts import AccountFactory
from .usage import UsageRecordFactory
from .videos import VideoAnalysisFactory

__all__ = [
    "AsyncSQLAlchemyModelFactory",
    "AccountFactory",
    "UsageRecordFactory",
    "VideoAnalysisFactory",
]
