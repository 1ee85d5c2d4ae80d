"""initial_schema

Create the schema for the points ledger:
- Users (balances, roles, verification and suspicious flags)
- Promotions (automatic and one-time)
- Transactions (purchase, adjustment, redemption, transfer, event)
- Transaction promotion links and one-time promotion uses
- Events with their points pools, organizers and guests

Revision ID: 3c1f0a9d2b47
Revises:
Create Date: 2026-10-19 10:12:44.318207

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    if nullable:
        return sa.Column(name, sa.TIMESTAMP(timezone=True), nullable=True)
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _id() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE user_role AS ENUM ('regular', 'cashier', 'manager', 'superuser');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE transaction_kind AS ENUM
                ('purchase', 'adjustment', 'redemption', 'transfer', 'event');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE promotion_type AS ENUM ('automatic', 'one-time');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _id(),
        sa.Column("utorid", sa.String(8), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column(
            "role",
            postgresql.ENUM(
                "regular",
                "cashier",
                "manager",
                "superuser",
                name="user_role",
                create_type=False,
            ),
            nullable=False,
            server_default="regular",
        ),
        sa.Column("points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("suspicious", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("utorid", name="uq_users_utorid"),
        sa.CheckConstraint("points >= 0", name="ck_users_points_non_negative"),
    )

    # ========================================================================
    # PROMOTIONS table
    # ========================================================================
    op.create_table(
        "promotions",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "type",
            postgresql.ENUM(
                "automatic", "one-time", name="promotion_type", create_type=False
            ),
            nullable=False,
        ),
        sa.Column("start_time", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("end_time", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("min_spending", sa.Float(), nullable=True),
        sa.Column("rate", sa.Float(), nullable=True),
        sa.Column("points", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("start_time < end_time", name="ck_promotions_window"),
    )
    op.create_index(
        "idx_promotions_window", "promotions", ["type", "start_time", "end_time"]
    )

    # ========================================================================
    # TRANSACTIONS table (every kind in one table)
    # ========================================================================
    op.create_table(
        "transactions",
        _id(),
        sa.Column(
            "kind",
            postgresql.ENUM(
                "purchase",
                "adjustment",
                "redemption",
                "transfer",
                "event",
                name="transaction_kind",
                create_type=False,
            ),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("spent", sa.Float(), nullable=True),
        sa.Column("redeemed", sa.Integer(), nullable=True),
        # Related transaction (adjustment), counterpart user (transfer) or event
        sa.Column("related_id", sa.UUID(), nullable=True),
        sa.Column("suspicious", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("remark", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_by", sa.UUID(), nullable=False),
        _timestamp("created_at"),
        _timestamp("processed_at", nullable=True),
        sa.Column("processed_by", sa.UUID(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
        sa.ForeignKeyConstraint(["processed_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_transactions_user_created",
        "transactions",
        ["user_id", sa.text("created_at DESC")],
    )

    op.create_table(
        "transaction_promotions",
        sa.Column("transaction_id", sa.UUID(), nullable=False),
        sa.Column("promotion_id", sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(
            ["transaction_id"], ["transactions.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["promotion_id"], ["promotions.id"]),
        sa.PrimaryKeyConstraint("transaction_id", "promotion_id"),
    )
    op.create_index(
        "idx_transaction_promotions_promotion",
        "transaction_promotions",
        ["promotion_id"],
    )

    # One row per (user, one-time promotion); the constraint is the race guard
    op.create_table(
        "user_promotion_uses",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("promotion_id", sa.UUID(), nullable=False),
        _timestamp("used_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(
            ["promotion_id"], ["promotions.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint("user_id", "promotion_id", name="uq_user_promotion_use"),
    )

    # ========================================================================
    # EVENTS tables
    # ========================================================================
    op.create_table(
        "events",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("location", sa.String(255), nullable=False, server_default=""),
        sa.Column("start_time", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("end_time", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("points_total", sa.Integer(), nullable=False),
        sa.Column("points_remain", sa.Integer(), nullable=False),
        sa.Column("points_awarded", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("published", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("start_time < end_time", name="ck_events_window"),
        sa.CheckConstraint("points_remain >= 0", name="ck_events_remain_non_negative"),
        sa.CheckConstraint(
            "points_remain + points_awarded = points_total", name="ck_events_pool"
        ),
    )

    op.create_table(
        "event_organizers",
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.UniqueConstraint("event_id", "user_id", name="uq_event_organizer"),
    )

    op.create_table(
        "event_guests",
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("confirmed", sa.Boolean(), nullable=False, server_default="false"),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.UniqueConstraint("event_id", "user_id", name="uq_event_guest"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("event_guests")
    op.drop_table("event_organizers")
    op.drop_table("events")
    op.drop_table("user_promotion_uses")
    op.drop_table("transaction_promotions")
    op.drop_table("transactions")
    op.drop_table("promotions")
    op.drop_table("users")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS promotion_type")
    op.execute("DROP TYPE IF EXISTS transaction_kind")
    op.execute("DROP TYPE IF EXISTS user_role")
