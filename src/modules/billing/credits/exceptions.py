"""Credit ledger errors.

Policy denials (no account, limit reached) are returned as decisions and do
not appear here. These exceptions cover malformed requests and storage
faults only.
"""


class CreditLedgerError(Exception):
    """Base class for credit ledger failures."""


class InvalidConsumeRequest(CreditLedgerError, ValueError):
    """Request arguments violate the gate's preconditions."""


class CreditLedgerUnavailable(CreditLedgerError):
    """The unit of work was aborted by a storage fault. Safe to retry."""
