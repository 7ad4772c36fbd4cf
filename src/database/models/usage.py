"""Usage tracking models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class UsageRecord(Base):
    """One row per accepted video generation. Append-only."""

    __tablename__ = "video_generations"
    __table_args__ = (
        Index(
            "idx_video_generations_account_dedup_period",
            "account_id",
            "dedup_key",
            "created_at",
            postgresql_where=text("counted_toward_limit = true"),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    account_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    identifier: Mapped[str] = mapped_column(String, nullable=False)
    dedup_key: Mapped[str] = mapped_column(String, nullable=False)
    resource_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    counted_toward_limit: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    subscription_tier: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    account = relationship("Account", back_populates="usage_records")
