from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from src.api.core.messages import MessageCode
from src.api.core.models.rate_limit import (
    ClientIdentifier,
    RateLimitClientType,
    RateLimitResult,
)
from src.redis.client import get_redis_client
from tests.factories import VideoAnalysisFactory
from tests.utils.assertions import assert_error_response, assert_success_response

pytestmark = pytest.mark.asyncio

RANDOM_VIDEO_URL = "/v1/videos/random"


async def test_returns_random_english_video(public_client: AsyncClient, db_session):
    video = await VideoAnalysisFactory.create_async(
        db_session,
        youtube_id="dQw4w9WgXcQ",
        title="Never Gonna Give You Up",
        author="Rick Astley",
        duration=213,
        slug="never-gonna-give-you-up",
        commit=True,
    )

    response = await public_client.get(RANDOM_VIDEO_URL)

    data = assert_success_response(
        response,
        data_assertions={
            "youtube_id": "dQw4w9WgXcQ",
            "title": "Never Gonna Give You Up",
            "author": "Rick Astley",
            "duration": 213,
            "thumbnail": video.thumbnail_url,
            "slug": "never-gonna-give-you-up",
            "url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        },
    )
    assert "transcript" not in data


async def test_empty_catalog(public_client: AsyncClient):
    response = await public_client.get(RANDOM_VIDEO_URL)

    assert_error_response(response, MessageCode.NO_VIDEOS_AVAILABLE, 404)


async def test_no_english_videos(public_client: AsyncClient, db_session):
    await VideoAnalysisFactory.create_batch_async(
        db_session, 3, language="ja", commit=True
    )

    response = await public_client.get(RANDOM_VIDEO_URL)

    assert_error_response(response, MessageCode.NO_ENGLISH_VIDEOS_AVAILABLE, 404)


async def test_rate_limited_per_client_ip(app: FastAPI, public_client: AsyncClient):
    async def _redis():
        return MagicMock()

    app.dependency_overrides[get_redis_client] = _redis
    denied = RateLimitResult(
        is_allowed=False,
        current_count=30,
        time_to_reset=42,
        client_identifier=ClientIdentifier(
            client_type=RateLimitClientType.IP, client_id="203.0.113.7"
        ),
        limit=30,
        window_seconds=60,
    )

    with patch(
        "src.api.core.decorators.rate_limit.RateLimiter.is_allowed",
        new=AsyncMock(return_value=denied),
    ) as is_allowed:
        response = await public_client.get(
            RANDOM_VIDEO_URL, headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}
        )

    body = assert_error_response(response, MessageCode.RATE_LIMIT_EXCEEDED, 429)
    assert body["details"]["retry_after"] == 42
    assert response.headers["Retry-After"] == "42"
    assert response.headers["X-RateLimit-Limit"] == "30"
    identifier = is_allowed.await_args.args[0]
    assert identifier.to_cache_key() == "rate_limit:ip:203.0.113.7"
