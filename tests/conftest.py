"""Global test configuration and fixtures for the video credits API."""

import os

# The app module builds its engine at import time; keep it off Postgres
os.environ.setdefault("DATABASE_URL", "sqlite:///./video-credits-test.db")
os.environ.setdefault("INTERNAL_API_KEY", "test-internal-key")

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.api.core.constants import INTERNAL_API_KEY_HEADER
from src.database.connection import create_engine_from_url, create_session_factory
from src.database.models import Account, Base
from src.redis.client import get_redis_client
from tests.factories import AccountFactory

INTERNAL_API_KEY = os.environ["INTERNAL_API_KEY"]
BASE_URL = "http://test-video-credits-api"


@pytest.fixture(autouse=True)
def disable_external_cache(monkeypatch):
    """Stub cache helpers so tests do not require Redis."""

    async def _noop_get_cache(*_args, **_kwargs):
        return None

    async def _noop_set_cache(*_args, **_kwargs):
        return True

    monkeypatch.setattr("src.cache.decorator._get_cache", _noop_get_cache)
    monkeypatch.setattr("src.cache.decorator._set_cache", _noop_set_cache)


@pytest_asyncio.fixture
async def async_engine(tmp_path):
    """File-backed SQLite per test so concurrent sessions really contend."""
    engine = create_engine_from_url(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(async_engine)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging and inspecting data.

    Every SQLite transaction holds the write lock, so commit (or roll back)
    before handing control to code that opens its own sessions.
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
def billing_period() -> tuple[datetime, datetime]:
    now = datetime.now(timezone.utc)
    return now - timedelta(days=15), now + timedelta(days=15)


@pytest_asyncio.fixture
async def account(db_session: AsyncSession) -> Account:
    """Account with no top-up credits, committed."""
    return await AccountFactory.create_async(db_session, commit=True)


@pytest.fixture
def account_factory():
    return AccountFactory


@pytest_asyncio.fixture
async def app(session_factory) -> AsyncGenerator[FastAPI, None]:
    """FastAPI application bound to the per-test database, Redis disabled."""
    from src.main import app

    async def _no_redis():
        return None

    async with LifespanManager(app):
        app.state.session_factory = session_factory
        app.dependency_overrides[get_redis_client] = _no_redis
        yield app
        app.dependency_overrides.clear()


# HTTP Client Fixtures
@pytest_asyncio.fixture
async def public_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create HTTP client for testing public endpoints."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as ac:
        yield ac


@pytest_asyncio.fixture
async def internal_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create HTTP client that authenticates as an internal service."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url=BASE_URL,
        headers={
            INTERNAL_API_KEY_HEADER: INTERNAL_API_KEY,
            "X-Service-Name": "video-generator",
        },
    ) as ac:
        yield ac
