"""In-memory repository implementations for testing."""

from .event import InMemoryEventRepository
from .promotion import InMemoryPromotionRepository
from .store import InMemoryStore
from .transaction import InMemoryTransactionRepository
from .unit_of_work import InMemoryUnitOfWork
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryEventRepository",
    "InMemoryPromotionRepository",
    "InMemoryStore",
    "InMemoryTransactionRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
]
