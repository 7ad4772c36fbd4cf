"""Credit gate decision types."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class DecisionReason(str, Enum):
    OK = "OK"
    ALREADY_COUNTED = "ALREADY_COUNTED"
    LIMIT_REACHED = "LIMIT_REACHED"
    NO_ACCOUNT = "NO_ACCOUNT"


@dataclass(frozen=True)
class CreditDecision:
    """Outcome of a single ``consume`` call.

    Denials are regular decisions with ``allowed=False``; they are never
    raised. ``usage_record_id`` is set whenever a counted record exists for
    the request, either freshly inserted or found by the dedup check.
    """

    allowed: bool
    reason: DecisionReason
    usage_record_id: UUID | None = None
    used_topup: bool = False
    deduplicated: bool = False
    base_remaining: int = 0
    topup_remaining: int = 0
    total_remaining: int = 0

    @classmethod
    def no_account(cls) -> "CreditDecision":
        return cls(allowed=False, reason=DecisionReason.NO_ACCOUNT)

