"""Credits domain router."""

from fastapi import APIRouter

from src.api.core.dependencies import CreditLedgerServiceDep, InternalServiceDep
from .handler import consume_credit_handler
from .schemas import ConsumeCreditRequest, CreditDecisionResponse

router = APIRouter(
    prefix="/credits",
    tags=["credits"],
)


@router.post("/consume", response_model=CreditDecisionResponse)
async def consume_credit(
    payload: ConsumeCreditRequest,
    service_name: InternalServiceDep,
    credit_service: CreditLedgerServiceDep,
) -> CreditDecisionResponse:
    """Check and deduct one video credit for an account within a billing period."""
    return await consume_credit_handler(credit_service, payload)
