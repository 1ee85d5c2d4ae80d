"""PostgreSQL repository implementations."""

from points.persistence.repository.event import PostgresEventRepository
from points.persistence.repository.promotion import PostgresPromotionRepository
from points.persistence.repository.transaction import PostgresTransactionRepository
from points.persistence.repository.unit_of_work import PostgresUnitOfWork
from points.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresTransactionRepository",
    "PostgresPromotionRepository",
    "PostgresEventRepository",
    "PostgresUnitOfWork",
]
