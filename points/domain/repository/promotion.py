"""Promotion repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from points.domain.model.promotion import Promotion
from points.domain.value import PromotionId, PromotionType, UserId


class PromotionRepository(ABC):
    """Repository for promotions and one-time promotion usage."""

    @abstractmethod
    async def find_by_id(self, promotion_id: PromotionId) -> Optional[Promotion]:
        """Find a promotion by ID.

        Args:
            promotion_id: The promotion's unique identifier

        Returns:
            The promotion if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(
        self, promotion_ids: Sequence[PromotionId]
    ) -> list[Promotion]:
        """Find several promotions at once (batch query).

        Args:
            promotion_ids: IDs to look up; unknown IDs are skipped

        Returns:
            Promotions found
        """
        pass

    @abstractmethod
    async def find_active(
        self, as_of: datetime, promotion_type: Optional[PromotionType] = None
    ) -> list[Promotion]:
        """Find promotions whose window contains ``as_of``.

        Args:
            as_of: Point in time to check
            promotion_type: Restrict to one promotion type

        Returns:
            Active promotions ordered by start time
        """
        pass

    @abstractmethod
    async def find_all(self) -> list[Promotion]:
        """Find every promotion, ordered by start time."""
        pass

    @abstractmethod
    async def save(self, promotion: Promotion) -> Promotion:
        """Save a promotion (create or update).

        Args:
            promotion: The promotion to save

        Returns:
            The saved promotion
        """
        pass

    @abstractmethod
    async def delete(self, promotion_id: PromotionId) -> bool:
        """Delete a promotion.

        Args:
            promotion_id: The promotion to delete

        Returns:
            True if a promotion was deleted
        """
        pass

    @abstractmethod
    async def record_use(self, user_id: UserId, promotion_id: PromotionId) -> None:
        """Record that a user consumed a one-time promotion.

        Args:
            user_id: The consuming user
            promotion_id: The one-time promotion

        Raises:
            IntegrityError: If the use was already recorded (duplicate)
        """
        pass

    @abstractmethod
    async def find_used_ids(self, user_id: UserId) -> set[PromotionId]:
        """Find IDs of one-time promotions a user has consumed.

        Args:
            user_id: The user's ID

        Returns:
            Set of consumed promotion IDs
        """
        pass

    @abstractmethod
    async def count_uses(self, promotion_id: PromotionId) -> int:
        """Count recorded one-time uses of a promotion."""
        pass

    @abstractmethod
    async def count_transaction_links(self, promotion_id: PromotionId) -> int:
        """Count transactions that applied a promotion."""
        pass
