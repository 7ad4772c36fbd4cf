"""Credits API schemas."""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from src.api.core.messages import APIResponse
from src.modules.billing.credits import CreditDecision, DecisionReason


class ConsumeCreditRequest(BaseModel):
    account_id: UUID
    dedup_key: str = Field(min_length=1, max_length=255)
    identifier: str = Field(min_length=1, max_length=255)
    tier: str = Field(min_length=1, max_length=64)
    base_limit: int = Field(ge=0)
    period_start: datetime
    period_end: datetime
    resource_id: UUID | None = None
    counted: bool = True

    @field_validator("period_start", "period_end")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # Naive timestamps from callers are UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @model_validator(mode="after")
    def check_period(self) -> "ConsumeCreditRequest":
        if self.period_start > self.period_end:
            raise ValueError("period_start must not be after period_end")
        return self


class CreditDecisionModel(BaseModel):
    allowed: bool
    reason: DecisionReason
    usage_record_id: UUID | None = None
    used_topup: bool
    deduplicated: bool
    base_remaining: int
    topup_remaining: int
    total_remaining: int

    @classmethod
    def from_decision(cls, decision: CreditDecision) -> "CreditDecisionModel":
        return cls(
            allowed=decision.allowed,
            reason=decision.reason,
            usage_record_id=decision.usage_record_id,
            used_topup=decision.used_topup,
            deduplicated=decision.deduplicated,
            base_remaining=decision.base_remaining,
            topup_remaining=decision.topup_remaining,
            total_remaining=decision.total_remaining,
        )


# Response type aliases
CreditDecisionResponse = APIResponse[CreditDecisionModel]
