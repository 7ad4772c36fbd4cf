import uvicorn
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.core.exceptions.base import register_exception_handlers
from src.api.core.middleware.logging import logging_middleware
from src.api.core.middleware.security import (
    SecurityHeadersMiddleware,
    PayloadSizeMiddleware,
)
from src.api.router import api_router
from src.database.connection import AsyncSessionLocal, async_engine
from src.redis.client import close_redis_pool
from src.utils.settings.app import AppSettings
from src.utils.logger import setup_logging


app_settings = AppSettings()
is_production = app_settings.ENVIRONMENT.upper() == "PROD"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger = setup_logging(is_production, debug=app_settings.DEBUG)
    app_settings.validate_prod()
    logger.info("Starting Video Credits API...")

    app.state.session_factory = AsyncSessionLocal
    logger.info("Database session factory added to app state")

    yield

    logger.info("Shutting down Video Credits API...")
    await close_redis_pool()
    await async_engine.dispose()


app = FastAPI(
    title="Video Credits API",
    description="Credit metering for AI video generation",
    version=app_settings.API_VERSION,
    lifespan=lifespan,
    docs_url=None if is_production else "/docs",
    redoc_url=None if is_production else "/redoc",
    openapi_url=None if is_production else "/openapi.json",
)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware, is_production=is_production)
app.add_middleware(PayloadSizeMiddleware, max_request_size=app_settings.MAX_REQUEST_SIZE)
app.middleware("http")(logging_middleware)

app.include_router(api_router)


def run_dev_server():
    """Run development server with auto-reload."""
    uvicorn.run(
        "src.main:app", host="0.0.0.0", port=8010, reload=True, access_log=False
    )


def run_prod_server():
    """Run production server."""
    uvicorn.run(
        "src.main:app", host="0.0.0.0", port=8010, reload=False, access_log=False
    )
