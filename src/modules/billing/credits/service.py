"""Credit ledger gate for metered video generations."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from src.core.base import BaseService
from src.database.models import Account, UsageRecord
from .decision import CreditDecision, DecisionReason
from .exceptions import CreditLedgerUnavailable, InvalidConsumeRequest
from .usage import UsageQueryService


def _as_utc(value: datetime) -> datetime:
    # Naive bounds are UTC; stored timestamps are compared in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CreditLedgerService(BaseService):
    """Atomic check-and-deduct of video credits, serialized per account."""

    def __init__(self, db):
        super().__init__(db)
        self.usage = UsageQueryService(db)

    async def consume(
        self,
        account_id: UUID,
        dedup_key: str,
        identifier: str,
        tier: str,
        base_limit: int,
        period_start: datetime,
        period_end: datetime,
        resource_id: UUID | None = None,
        counted: bool = True,
    ) -> CreditDecision:
        """
        Record one unit of usage and decide whether it is allowed.

        Order of consumption:
        1. Period allowance (``base_limit`` minus counted usage in the period)
        2. Top-up credits on the account

        A counted request whose dedup key was already billed in the period
        returns ``ALREADY_COUNTED`` without writing anything. Non-counted
        requests skip the dedup and limit checks and only append a ledger row.

        Raises:
            InvalidConsumeRequest: period bounds reversed or negative limit
            CreditLedgerUnavailable: storage fault, nothing was written
        """
        period_start = _as_utc(period_start)
        period_end = _as_utc(period_end)
        if period_start > period_end:
            raise InvalidConsumeRequest("period_start must not be after period_end")
        if base_limit < 0:
            raise InvalidConsumeRequest("base_limit must be non-negative")

        async with self._locked_account(account_id) as account:
            if account is None:
                decision = CreditDecision.no_account()
            else:
                decision = await self._consume_locked(
                    account=account,
                    dedup_key=dedup_key,
                    identifier=identifier,
                    tier=tier,
                    base_limit=base_limit,
                    period_start=period_start,
                    period_end=period_end,
                    resource_id=resource_id,
                    counted=counted,
                )

        self.logger.info(
            "credit_decision",
            account_id=str(account_id),
            dedup_key=dedup_key,
            counted=counted,
            allowed=decision.allowed,
            reason=decision.reason.value,
            deduplicated=decision.deduplicated,
            used_topup=decision.used_topup,
            total_remaining=decision.total_remaining,
        )
        return decision

    @asynccontextmanager
    async def _locked_account(
        self, account_id: UUID
    ) -> AsyncIterator[Account | None]:
        """Hold the account row lock for one unit of work.

        Commits when the block exits normally and rolls back otherwise, so
        the lock never outlives the operation.
        """
        try:
            stmt = (
                select(Account)
                .where(Account.id == account_id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(stmt)
            yield result.scalar_one_or_none()
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            self.logger.error(
                "credit_ledger_storage_fault",
                account_id=str(account_id),
                error=str(e),
            )
            raise CreditLedgerUnavailable(
                f"Credit ledger unavailable for account {account_id}"
            ) from e
        except BaseException:
            await self.db.rollback()
            raise

    async def _consume_locked(
        self,
        account: Account,
        dedup_key: str,
        identifier: str,
        tier: str,
        base_limit: int,
        period_start: datetime,
        period_end: datetime,
        resource_id: UUID | None,
        counted: bool,
    ) -> CreditDecision:
        topup_credits = account.topup_credits

        if counted:
            existing_id = await self.usage.find_counted_record(
                account.id, dedup_key, period_start, period_end
            )
            if existing_id is not None:
                base_remaining, topup_remaining = await self._remaining(
                    account.id, base_limit, period_start, period_end
                )
                return CreditDecision(
                    allowed=True,
                    reason=DecisionReason.ALREADY_COUNTED,
                    usage_record_id=existing_id,
                    used_topup=False,
                    deduplicated=True,
                    base_remaining=base_remaining,
                    topup_remaining=topup_remaining,
                    total_remaining=base_remaining + topup_remaining,
                )

        counted_usage = await self.usage.count_counted_usage(
            account.id, period_start, period_end
        )
        base_remaining = max(0, base_limit - counted_usage)
        total_remaining = base_remaining + topup_credits

        if counted and total_remaining <= 0:
            return CreditDecision(
                allowed=False,
                reason=DecisionReason.LIMIT_REACHED,
                base_remaining=base_remaining,
                topup_remaining=topup_credits,
                total_remaining=total_remaining,
            )

        record = UsageRecord(
            account_id=account.id,
            identifier=identifier,
            dedup_key=dedup_key,
            resource_id=resource_id,
            counted_toward_limit=counted,
            subscription_tier=tier,
        )
        self.db.add(record)
        await self.db.flush()

        used_topup = False
        if counted and base_remaining <= 0 and topup_credits > 0:
            used_topup = await self._deduct_topup_credit(account.id)

        # Remainders come from post-write state rather than arithmetic
        base_remaining, topup_remaining = await self._remaining(
            account.id, base_limit, period_start, period_end
        )
        return CreditDecision(
            allowed=True,
            reason=DecisionReason.OK,
            usage_record_id=record.id,
            used_topup=used_topup,
            deduplicated=False,
            base_remaining=base_remaining,
            topup_remaining=topup_remaining,
            total_remaining=base_remaining + topup_remaining,
        )

    async def _deduct_topup_credit(self, account_id: UUID) -> bool:
        """Take one top-up credit, only while the stored balance is positive."""
        stmt = (
            update(Account)
            .where(Account.id == account_id, Account.topup_credits > 0)
            .values(topup_credits=Account.topup_credits - 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def _remaining(
        self,
        account_id: UUID,
        base_limit: int,
        period_start: datetime,
        period_end: datetime,
    ) -> tuple[int, int]:
        """Return (base_remaining, topup_remaining) from current stored state."""
        counted_usage = await self.usage.count_counted_usage(
            account_id, period_start, period_end
        )
        result = await self.db.execute(
            select(Account.topup_credits).where(Account.id == account_id)
        )
        topup_remaining = result.scalar_one()
        return max(0, base_limit - counted_usage), max(0, topup_remaining)
