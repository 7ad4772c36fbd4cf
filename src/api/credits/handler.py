"""Credits domain handlers."""

from fastapi import status

from src.api.core.constants import CREDIT_GATE_RETRY_AFTER_SECONDS
from src.api.core.exceptions.base import AppException
from src.api.core.messages import APIResponse, MessageCode
from src.modules.billing.credits import (
    CreditLedgerService,
    CreditLedgerUnavailable,
    DecisionReason,
    InvalidConsumeRequest,
)
from .schemas import ConsumeCreditRequest, CreditDecisionModel, CreditDecisionResponse

# Denials carry the decision in the error details
DENIAL_RESPONSES = {
    DecisionReason.LIMIT_REACHED: (
        MessageCode.INSUFFICIENT_CREDITS,
        status.HTTP_402_PAYMENT_REQUIRED,
    ),
    DecisionReason.NO_ACCOUNT: (
        MessageCode.ACCOUNT_NOT_FOUND,
        status.HTTP_404_NOT_FOUND,
    ),
}


async def consume_credit_handler(
    credit_service: CreditLedgerService,
    payload: ConsumeCreditRequest,
) -> CreditDecisionResponse:
    """Run the credit gate and translate its decision into an API response."""
    try:
        decision = await credit_service.consume(
            account_id=payload.account_id,
            dedup_key=payload.dedup_key,
            identifier=payload.identifier,
            tier=payload.tier,
            base_limit=payload.base_limit,
            period_start=payload.period_start,
            period_end=payload.period_end,
            resource_id=payload.resource_id,
            counted=payload.counted,
        )
    except InvalidConsumeRequest as e:
        raise AppException(
            MessageCode.INVALID_INPUT,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"description": str(e)},
        ) from e
    except CreditLedgerUnavailable as e:
        raise AppException(
            MessageCode.SERVICE_UNAVAILABLE,
            status.HTTP_503_SERVICE_UNAVAILABLE,
            details={"retryable": True},
            headers={"Retry-After": str(CREDIT_GATE_RETRY_AFTER_SECONDS)},
        ) from e

    decision_model = CreditDecisionModel.from_decision(decision)

    if not decision.allowed:
        message_code, status_code = DENIAL_RESPONSES[decision.reason]
        raise AppException(
            message_code,
            status_code,
            details={"decision": decision_model.model_dump(mode="json")},
        )

    # A refresh of an already billed video is a success, not a second charge
    message_code = (
        MessageCode.CREDIT_ALREADY_COUNTED
        if decision.reason == DecisionReason.ALREADY_COUNTED
        else MessageCode.SUCCESS
    )
    return APIResponse.success(message_code=message_code, data=decision_model)
