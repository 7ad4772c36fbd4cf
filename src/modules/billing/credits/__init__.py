from .decision import CreditDecision, DecisionReason
from .exceptions import (
    CreditLedgerError,
    CreditLedgerUnavailable,
    InvalidConsumeRequest,
)
from .service import CreditLedgerService
from .usage import UsageQueryService

__all__ = [
    "CreditDecision",
    "DecisionReason",
    "CreditLedgerError",
    "CreditLedgerUnavailable",
    "InvalidConsumeRequest",
    "CreditLedgerService",
    "UsageQueryService",
]
