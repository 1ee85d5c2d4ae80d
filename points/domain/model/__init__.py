"""Domain model entities for the points ledger."""

from points.domain.model.common import DomainModel, utc_now
from points.domain.model.event import Event, EventGuest
from points.domain.model.promotion import Promotion
from points.domain.model.transaction import (
    AdjustmentTransaction,
    EventTransaction,
    PurchaseTransaction,
    RedemptionTransaction,
    Transaction,
    TransactionBase,
    TransferTransaction,
    promotion_ids_of,
    transaction_adapter,
)
from points.domain.model.user import User

__all__ = [
    "DomainModel",
    "utc_now",
    "User",
    "Promotion",
    "Event",
    "EventGuest",
    "Transaction",
    "TransactionBase",
    "PurchaseTransaction",
    "AdjustmentTransaction",
    "RedemptionTransaction",
    "TransferTransaction",
    "EventTransaction",
    "promotion_ids_of",
    "transaction_adapter",
]
