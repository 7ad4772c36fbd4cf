"""Random analyzed-video sampling."""

import random
from dataclasses import dataclass

from sqlalchemy import func, select

from src.cache import cached
from src.core.base import BaseService
from src.database.models import VideoAnalysis
from .exceptions import NoEnglishVideosAvailable, NoVideosAvailable

RANDOM_BATCH_SIZE = 5
MAX_RANDOM_ATTEMPTS = 6
FALLBACK_BATCH_SIZE = 40
ANALYZED_COUNT_CACHE_TTL = 60


@dataclass
class RandomVideo:
    youtube_id: str
    title: str | None
    author: str | None
    duration: int | None
    thumbnail_url: str | None
    slug: str | None
    language: str | None

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.youtube_id}"


def is_english(video: RandomVideo) -> bool:
    # Rows without a language predate language detection and were all English
    if not video.language:
        return True
    return video.language == "en" or video.language.startswith("en-")


def select_english_video(batch: list[RandomVideo]) -> RandomVideo | None:
    return next((video for video in batch if is_english(video)), None)


class RandomVideoService(BaseService):
    """Pick a random English video from the analyzed catalog."""

    def __init__(self, db, rng: random.Random | None = None):
        super().__init__(db)
        self.rng = rng or random.Random()

    @cached(ttl=ANALYZED_COUNT_CACHE_TTL)
    async def count_analyzed_videos(self) -> int:
        stmt = select(func.count(VideoAnalysis.id)).where(
            VideoAnalysis.topics.is_not(None)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def fetch_batch(self, start: int, end: int) -> list[RandomVideo]:
        """Fetch analyzed videos at positions ``start..end`` (inclusive), newest first."""
        # Transcripts are large, select only what the response needs
        stmt = (
            select(
                VideoAnalysis.youtube_id,
                VideoAnalysis.title,
                VideoAnalysis.author,
                VideoAnalysis.duration,
                VideoAnalysis.thumbnail_url,
                VideoAnalysis.slug,
                VideoAnalysis.language,
            )
            .where(VideoAnalysis.topics.is_not(None))
            .order_by(VideoAnalysis.created_at.desc(), VideoAnalysis.id)
            .offset(start)
            .limit(end - start + 1)
        )
        result = await self.db.execute(stmt)
        return [RandomVideo(**row._asdict()) for row in result]

    async def pick_random_english_video(self) -> RandomVideo:
        """
        Sample small batches at random offsets until an English video turns up,
        then fall back to scanning the newest videos once.

        Raises:
            NoVideosAvailable: the analyzed catalog is empty
            NoEnglishVideosAvailable: nothing English was found
        """
        total_count = await self.count_analyzed_videos()
        if total_count <= 0:
            raise NoVideosAvailable()

        last_index = total_count - 1

        for attempt in range(MAX_RANDOM_ATTEMPTS):
            start = self.rng.randrange(total_count)
            end = min(last_index, start + RANDOM_BATCH_SIZE - 1)

            candidate = select_english_video(await self.fetch_batch(start, end))
            if candidate:
                return candidate

            self.logger.debug("random_video_batch_miss", attempt=attempt, start=start)

        fallback_end = min(last_index, FALLBACK_BATCH_SIZE - 1)
        candidate = select_english_video(await self.fetch_batch(0, fallback_end))
        if candidate:
            return candidate

        self.logger.warning("No English video found for random video request")
        raise NoEnglishVideosAvailable()
