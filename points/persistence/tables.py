"""SQLAlchemy table definitions for the points ledger.

Tables are used through SQLAlchemy Core with manual row mappers.
They match the schema defined in the Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

role_enum = postgresql.ENUM(
    "regular", "cashier", "manager", "superuser", name="user_role", create_type=False
)
transaction_kind_enum = postgresql.ENUM(
    "purchase",
    "adjustment",
    "redemption",
    "transfer",
    "event",
    name="transaction_kind",
    create_type=False,
)
promotion_type_enum = postgresql.ENUM(
    "automatic", "one-time", name="promotion_type", create_type=False
)

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("utorid", String(8), nullable=False),
    Column("name", String(255), nullable=True),
    Column("email", String(255), nullable=True),
    Column("role", role_enum, nullable=False, server_default="regular"),
    Column("points", Integer, nullable=False, server_default="0"),
    Column("verified", Boolean, nullable=False, server_default="false"),
    Column("suspicious", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("utorid", name="uq_users_utorid"),
    CheckConstraint("points >= 0", name="ck_users_points_non_negative"),
)

# ============================================================================
# PROMOTIONS TABLE
# ============================================================================
promotions_table = Table(
    "promotions",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("description", Text, nullable=False, server_default=""),
    Column("type", promotion_type_enum, nullable=False),
    Column("start_time", TIMESTAMP(timezone=True), nullable=False),
    Column("end_time", TIMESTAMP(timezone=True), nullable=False),
    Column("min_spending", Float, nullable=True),
    Column("rate", Float, nullable=True),
    Column("points", Integer, nullable=True),
    CheckConstraint("start_time < end_time", name="ck_promotions_window"),
)

Index(
    "idx_promotions_window",
    promotions_table.c.type,
    promotions_table.c.start_time,
    promotions_table.c.end_time,
)

# ============================================================================
# TRANSACTIONS TABLE
# ============================================================================
# One table for every kind; related_id holds the related transaction
# (adjustment), the counterpart user (transfer) or the event (event).
transactions_table = Table(
    "transactions",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("kind", transaction_kind_enum, nullable=False),
    Column("user_id", UUID, ForeignKey("users.id"), nullable=False),
    Column("amount", Integer, nullable=False, server_default="0"),
    Column("spent", Float, nullable=True),
    Column("redeemed", Integer, nullable=True),
    Column("related_id", UUID, nullable=True),
    Column("suspicious", Boolean, nullable=False, server_default="false"),
    Column("remark", Text, nullable=False, server_default=""),
    Column("created_by", UUID, ForeignKey("users.id"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("processed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("processed_by", UUID, ForeignKey("users.id"), nullable=True),
)

Index(
    "idx_transactions_user_created",
    transactions_table.c.user_id,
    transactions_table.c.created_at.desc(),
)

transaction_promotions_table = Table(
    "transaction_promotions",
    metadata,
    Column(
        "transaction_id",
        UUID,
        ForeignKey("transactions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("promotion_id", UUID, ForeignKey("promotions.id"), nullable=False),
    PrimaryKeyConstraint("transaction_id", "promotion_id"),
)

Index(
    "idx_transaction_promotions_promotion",
    transaction_promotions_table.c.promotion_id,
)

user_promotion_uses_table = Table(
    "user_promotion_uses",
    metadata,
    Column("user_id", UUID, ForeignKey("users.id"), nullable=False),
    Column(
        "promotion_id",
        UUID,
        ForeignKey("promotions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "used_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "promotion_id", name="uq_user_promotion_use"),
)

# ============================================================================
# EVENTS TABLES
# ============================================================================
events_table = Table(
    "events",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("description", Text, nullable=False, server_default=""),
    Column("location", String(255), nullable=False, server_default=""),
    Column("start_time", TIMESTAMP(timezone=True), nullable=False),
    Column("end_time", TIMESTAMP(timezone=True), nullable=False),
    Column("capacity", Integer, nullable=True),
    Column("points_total", Integer, nullable=False),
    Column("points_remain", Integer, nullable=False),
    Column("points_awarded", Integer, nullable=False, server_default="0"),
    Column("published", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("start_time < end_time", name="ck_events_window"),
    CheckConstraint("points_remain >= 0", name="ck_events_remain_non_negative"),
    CheckConstraint(
        "points_remain + points_awarded = points_total", name="ck_events_pool"
    ),
)

event_organizers_table = Table(
    "event_organizers",
    metadata,
    Column(
        "event_id", UUID, ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    ),
    Column("user_id", UUID, ForeignKey("users.id"), nullable=False),
    UniqueConstraint("event_id", "user_id", name="uq_event_organizer"),
)

event_guests_table = Table(
    "event_guests",
    metadata,
    Column(
        "event_id", UUID, ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    ),
    Column("user_id", UUID, ForeignKey("users.id"), nullable=False),
    Column("confirmed", Boolean, nullable=False, server_default="false"),
    UniqueConstraint("event_id", "user_id", name="uq_event_guest"),
)
