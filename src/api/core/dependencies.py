import secrets
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Header, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.constants import INTERNAL_API_KEY_HEADER
from src.api.core.exceptions.base import AppException
from src.api.core.messages import MessageCode
from src.modules.billing.credits import CreditLedgerService
from src.modules.videos import RandomVideoService
from src.utils.settings.app import AppSettings


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session from app state."""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session


async def get_credit_ledger_service(
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> CreditLedgerService:
    """Get credit ledger service with database session."""
    return CreditLedgerService(db)


async def get_random_video_service(
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> RandomVideoService:
    """Get random video service with database session."""
    return RandomVideoService(db)


async def require_internal_service(
    request: Request,
    internal_key: Annotated[str | None, Header(alias=INTERNAL_API_KEY_HEADER)] = None,
    service_name: Annotated[str | None, Header(alias="X-Service-Name")] = None,
) -> str:
    """Authenticate a service-to-service call by shared secret.

    The credit gate is only reachable from our own API handlers, never
    directly from end users.
    """
    if not internal_key:
        raise AppException(
            MessageCode.AUTH_REQUIRED,
            status.HTTP_401_UNAUTHORIZED,
            {"description": f"Provide the '{INTERNAL_API_KEY_HEADER}' header"},
        )

    expected = AppSettings().INTERNAL_API_KEY.get_secret_value()
    if not secrets.compare_digest(internal_key.encode(), expected.encode()):
        raise AppException(MessageCode.INVALID_API_KEY, status.HTTP_401_UNAUTHORIZED)

    request.state.service_name = service_name or "internal"
    return request.state.service_name


AsyncSessionDep = Annotated[AsyncSession, Depends(get_db_session)]
CreditLedgerServiceDep = Annotated[
    CreditLedgerService, Depends(get_credit_ledger_service)
]
RandomVideoServiceDep = Annotated[
    RandomVideoService, Depends(get_random_video_service)
]
InternalServiceDep = Annotated[str, Depends(require_internal_service)]
