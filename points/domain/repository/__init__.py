"""Repository interfaces for the points domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from points.domain.repository.event import EventRepository
from points.domain.repository.promotion import PromotionRepository
from points.domain.repository.transaction import (
    AmountOperator,
    TransactionFilter,
    TransactionRepository,
)
from points.domain.repository.unit_of_work import UnitOfWork
from points.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "TransactionRepository",
    "TransactionFilter",
    "AmountOperator",
    "PromotionRepository",
    "EventRepository",
    "UnitOfWork",
]
