"""Factory for UsageRecord models."""

from datetime import datetime, timezone

import factory
from src.database.models import UsageRecord
from .base import AsyncSQLAlchemyModelFactory, UUIDFactory


class UsageRecordFactory(AsyncSQLAlchemyModelFactory[UsageRecord]):
    """Factory for creating UsageRecord instances.

    ``account_id`` has no default: every record must belong to an account
    created by ``AccountFactory``.
    """

    class Meta:
        model = UsageRecord

    id = UUIDFactory()
    identifier = factory.Faker("uuid4")
    dedup_key = factory.Sequence(lambda n: f"yt{n:09d}")
    resource_id = None
    counted_toward_limit = True
    subscription_tier = "pro"
    created_at = factory.LazyFunction(lambda: datetime.now(timezone.utc))
