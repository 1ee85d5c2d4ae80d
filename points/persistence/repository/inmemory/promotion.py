"""In-memory promotion repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from points.domain.model import Promotion, promotion_ids_of
from points.domain.repository import PromotionRepository
from points.domain.value import PromotionId, PromotionType, UserId

from .store import InMemoryStore


class InMemoryPromotionRepository(PromotionRepository):
    """In-memory implementation of PromotionRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, promotion_id: PromotionId) -> Optional[Promotion]:
        """Find a promotion by ID."""
        return self.store.promotions.get(promotion_id)

    async def find_by_ids(
        self, promotion_ids: Sequence[PromotionId]
    ) -> list[Promotion]:
        """Find several promotions at once."""
        promotions = self.store.promotions
        return [promotions[i] for i in promotion_ids if i in promotions]

    async def find_active(
        self, as_of: datetime, promotion_type: Optional[PromotionType] = None
    ) -> list[Promotion]:
        """Find promotions whose window contains ``as_of``."""
        active = [
            p
            for p in self.store.promotions.values()
            if p.is_active(as_of)
            and (promotion_type is None or p.type == promotion_type)
        ]
        return sorted(active, key=lambda p: p.start_time)

    async def find_all(self) -> list[Promotion]:
        """Find every promotion."""
        return sorted(self.store.promotions.values(), key=lambda p: p.start_time)

    async def save(self, promotion: Promotion) -> Promotion:
        """Save or update a promotion."""
        self.store.promotions[promotion.id] = promotion
        return promotion

    async def delete(self, promotion_id: PromotionId) -> bool:
        """Delete a promotion."""
        return self.store.promotions.pop(promotion_id, None) is not None

    async def record_use(self, user_id: UserId, promotion_id: PromotionId) -> None:
        """Record a one-time use.

        Raises:
            IntegrityError: If the use was already recorded (duplicate)
        """
        key = (user_id, promotion_id)
        if key in self.store.promotion_uses:
            raise IntegrityError("Duplicate promotion use", None, Exception())
        self.store.promotion_uses.add(key)

    async def find_used_ids(self, user_id: UserId) -> set[PromotionId]:
        """Find IDs of one-time promotions a user has consumed."""
        return {p for u, p in self.store.promotion_uses if u == user_id}

    async def count_uses(self, promotion_id: PromotionId) -> int:
        """Count recorded one-time uses of a promotion."""
        return sum(1 for _, p in self.store.promotion_uses if p == promotion_id)

    async def count_transaction_links(self, promotion_id: PromotionId) -> int:
        """Count transactions that applied a promotion."""
        return sum(
            1
            for t in self.store.transactions.values()
            if promotion_id in promotion_ids_of(t)
        )
