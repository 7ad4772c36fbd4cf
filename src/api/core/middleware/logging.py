import time
import uuid

import structlog
from fastapi import Request

from src.utils.logger import get_client_ip, get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = {"/health", "/health/", "/health/liveness"}


async def logging_middleware(request: Request, call_next):
    if request.url.path in QUIET_PATHS:
        return await call_next(request)

    start_time = time.perf_counter()

    structlog.contextvars.clear_contextvars()
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    ip_address = get_client_ip(request)
    structlog.contextvars.bind_contextvars(
        ip_address=ip_address,
        method=request.method,
        path=request.url.path,
        request_id=request_id,
    )

    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id

    logger.info(
        "request",
        status_code=response.status_code,
        duration=int((time.perf_counter() - start_time) * 1000),
    )

    return response
