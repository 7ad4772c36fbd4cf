"""Factory for VideoAnalysis models."""

from datetime import datetime, timedelta, timezone

import factory
from src.database.models import VideoAnalysis
from .base import AsyncSQLAlchemyModelFactory, UUIDFactory


class VideoAnalysisFactory(AsyncSQLAlchemyModelFactory[VideoAnalysis]):
    """Analyzed English video; pass ``topics=None`` for a pending one."""

    class Meta:
        model = VideoAnalysis

    id = UUIDFactory()
    youtube_id = factory.Sequence(lambda n: f"vid{n:08d}")
    title = factory.Faker("sentence", nb_words=5)
    author = factory.Faker("name")
    duration = factory.Faker("random_int", min=30, max=3600)
    thumbnail_url = factory.LazyAttribute(
        lambda o: f"https://i.ytimg.com/vi/{o.youtube_id}/hqdefault.jpg"
    )
    slug = factory.LazyAttribute(lambda o: f"{o.youtube_id}-summary")
    language = "en"
    topics = factory.LazyFunction(lambda: ["science"])
    transcript = None
    # Newer rows sort first; the sequence keeps insertion order deterministic
    created_at = factory.Sequence(
        lambda n: datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=n)
    )
