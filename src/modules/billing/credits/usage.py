"""Usage queries shared by the credit gate."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, func, select

from src.core.base import BaseService
from src.database.models import UsageRecord


class UsageQueryService(BaseService):
    """Read-only queries over the usage ledger for a billing period."""

    @staticmethod
    def _counted_in_period(
        account_id: UUID, period_start: datetime, period_end: datetime
    ):
        return and_(
            UsageRecord.account_id == account_id,
            UsageRecord.counted_toward_limit,
            UsageRecord.created_at >= period_start,
            UsageRecord.created_at <= period_end,
        )

    async def count_counted_usage(
        self, account_id: UUID, period_start: datetime, period_end: datetime
    ) -> int:
        """Count records that count toward the limit within the inclusive period."""
        stmt = select(func.count(UsageRecord.id)).where(
            self._counted_in_period(account_id, period_start, period_end)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def find_counted_record(
        self,
        account_id: UUID,
        dedup_key: str,
        period_start: datetime,
        period_end: datetime,
    ) -> UUID | None:
        """Return the id of an already counted record for this dedup key, if any."""
        stmt = (
            select(UsageRecord.id)
            .where(
                self._counted_in_period(account_id, period_start, period_end),
                UsageRecord.dedup_key == dedup_key,
            )
            .order_by(UsageRecord.created_at.asc())
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
