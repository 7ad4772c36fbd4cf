"""Videos API schemas."""

from pydantic import BaseModel

from src.api.core.messages import APIResponse
from src.modules.videos import RandomVideo


class RandomVideoModel(BaseModel):
    youtube_id: str
    title: str | None
    author: str | None
    duration: int | None
    thumbnail: str | None
    slug: str | None
    url: str

    @classmethod
    def from_video(cls, video: RandomVideo) -> "RandomVideoModel":
        return cls(
            youtube_id=video.youtube_id,
            title=video.title,
            author=video.author,
            duration=video.duration,
            thumbnail=video.thumbnail_url,
            slug=video.slug,
            url=video.url,
        )


RandomVideoResponse = APIResponse[RandomVideoModel]
