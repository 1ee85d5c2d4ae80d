"""Domain value objects for the points ledger."""

from points.domain.value.identifiers import (
    EventId,
    PromotionId,
    TransactionId,
    UserId,
)
from points.domain.value.types import (
    Actor,
    PromotionType,
    Role,
    TransactionKind,
    Utorid,
)

__all__ = [
    # Identifiers
    "UserId",
    "TransactionId",
    "PromotionId",
    "EventId",
    # Types
    "Actor",
    "PromotionType",
    "Role",
    "TransactionKind",
    "Utorid",
]
