"""Videos domain router."""

from fastapi import APIRouter, Depends, Request, status
import redis.asyncio as redis

from src.api.core.constants import (
    RANDOM_VIDEO_RATE_LIMIT,
    RANDOM_VIDEO_WINDOW_SECONDS,
)
from src.api.core.decorators.rate_limit import rate_limit
from src.api.core.dependencies import RandomVideoServiceDep
from src.api.core.exceptions.base import AppException
from src.api.core.messages import APIResponse, MessageCode
from src.modules.videos import NoEnglishVideosAvailable, NoVideosAvailable
from src.redis.client import get_redis_client
from .schemas import RandomVideoModel, RandomVideoResponse

router = APIRouter(prefix="/videos", tags=["videos"])


@router.get("/random", response_model=RandomVideoResponse)
@rate_limit(limit=RANDOM_VIDEO_RATE_LIMIT, window_seconds=RANDOM_VIDEO_WINDOW_SECONDS)
async def get_random_video(
    request: Request,
    video_service: RandomVideoServiceDep,
    redis_client: redis.Redis = Depends(get_redis_client),
) -> RandomVideoResponse:
    """Return a random analyzed English video ("feeling lucky")."""
    try:
        video = await video_service.pick_random_english_video()
    except NoVideosAvailable as e:
        raise AppException(
            MessageCode.NO_VIDEOS_AVAILABLE, status.HTTP_404_NOT_FOUND
        ) from e
    except NoEnglishVideosAvailable as e:
        raise AppException(
            MessageCode.NO_ENGLISH_VIDEOS_AVAILABLE, status.HTTP_404_NOT_FOUND
        ) from e

    return APIResponse.success(data=RandomVideoModel.from_video(video))
