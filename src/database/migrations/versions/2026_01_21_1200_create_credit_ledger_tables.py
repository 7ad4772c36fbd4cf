"""create_credit_ledger_tables

Revision ID: 4f2c9a1d7b3e
Revises:
Create Date: 2026-01-21 12:00:00.000000

"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "4f2c9a1d7b3e"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("topup_credits", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "topup_credits >= 0", name="ck_accounts_topup_non_negative"
        ),
    )

    op.create_table(
        "video_generations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "account_id",
            sa.Uuid(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("identifier", sa.String(), nullable=False),
        sa.Column("dedup_key", sa.String(), nullable=False),
        sa.Column("resource_id", sa.Uuid(), nullable=True),
        sa.Column("counted_toward_limit", sa.Boolean(), nullable=False),
        sa.Column("subscription_tier", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )

    # Dedup lookups only ever look at counted rows
    op.create_index(
        "idx_video_generations_account_dedup_period",
        "video_generations",
        ["account_id", "dedup_key", "created_at"],
        postgresql_where=sa.text("counted_toward_limit = true"),
    )

    op.create_table(
        "video_analyses",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("youtube_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("author", sa.String(), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("thumbnail_url", sa.String(), nullable=True),
        sa.Column("slug", sa.String(), nullable=True),
        sa.Column("language", sa.String(), nullable=True),
        sa.Column("topics", sa.JSON(), nullable=True),
        sa.Column("transcript", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_video_analyses_youtube_id", "video_analyses", ["youtube_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_video_analyses_youtube_id", table_name="video_analyses")
    op.drop_table("video_analyses")
    op.drop_index(
        "idx_video_generations_account_dedup_period", table_name="video_generations"
    )
    op.drop_table("video_generations")
    op.drop_table("accounts")
