"""PostgreSQL implementation of Promotion repository."""

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from points.domain.model import Promotion
from points.domain.repository import PromotionRepository
from points.domain.value import PromotionId, PromotionType, UserId
from points.persistence.mappers import promotion_to_dict, row_to_promotion
from points.persistence.tables import (
    promotions_table,
    transaction_promotions_table,
    user_promotion_uses_table,
)


class PostgresPromotionRepository(PromotionRepository):
    """PostgreSQL implementation of PromotionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, promotion_id: PromotionId) -> Optional[Promotion]:
        """Find a promotion by ID."""
        stmt = select(promotions_table).where(promotions_table.c.id == promotion_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_promotion(dict(row)) if row else None

    async def find_by_ids(
        self, promotion_ids: Sequence[PromotionId]
    ) -> list[Promotion]:
        """Find several promotions at once."""
        if not promotion_ids:
            return []
        stmt = select(promotions_table).where(
            promotions_table.c.id.in_(list(promotion_ids))
        )
        result = await self.session.execute(stmt)
        return [row_to_promotion(dict(row)) for row in result.mappings().all()]

    async def find_active(
        self, as_of: datetime, promotion_type: Optional[PromotionType] = None
    ) -> list[Promotion]:
        """Find promotions whose window contains ``as_of``."""
        stmt = select(promotions_table).where(
            promotions_table.c.start_time <= as_of,
            promotions_table.c.end_time > as_of,
        )
        if promotion_type is not None:
            stmt = stmt.where(promotions_table.c.type == promotion_type.value)
        stmt = stmt.order_by(promotions_table.c.start_time)
        result = await self.session.execute(stmt)
        return [row_to_promotion(dict(row)) for row in result.mappings().all()]

    async def find_all(self) -> list[Promotion]:
        """Find every promotion."""
        stmt = select(promotions_table).order_by(promotions_table.c.start_time)
        result = await self.session.execute(stmt)
        return [row_to_promotion(dict(row)) for row in result.mappings().all()]

    async def save(self, promotion: Promotion) -> Promotion:
        """Save a promotion (create or update)."""
        existing = await self.find_by_id(promotion.id)
        promotion_dict = promotion_to_dict(promotion)

        if existing:
            stmt = (
                promotions_table.update()
                .where(promotions_table.c.id == promotion.id)
                .values(**promotion_dict)
            )
        else:
            stmt = insert(promotions_table).values(**promotion_dict)
        await self.session.execute(stmt)
        await self.session.flush()
        return promotion

    async def delete(self, promotion_id: PromotionId) -> bool:
        """Delete a promotion."""
        stmt = delete(promotions_table).where(promotions_table.c.id == promotion_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def record_use(self, user_id: UserId, promotion_id: PromotionId) -> None:
        """Record a one-time use; the unique constraint rejects duplicates."""
        stmt = insert(user_promotion_uses_table).values(
            user_id=user_id, promotion_id=promotion_id
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def find_used_ids(self, user_id: UserId) -> set[PromotionId]:
        """Find IDs of one-time promotions a user has consumed."""
        stmt = select(user_promotion_uses_table.c.promotion_id).where(
            user_promotion_uses_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return {PromotionId(promotion_id) for promotion_id in result.scalars().all()}

    async def count_uses(self, promotion_id: PromotionId) -> int:
        """Count recorded one-time uses of a promotion."""
        stmt = select(func.count()).where(
            user_promotion_uses_table.c.promotion_id == promotion_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def count_transaction_links(self, promotion_id: PromotionId) -> int:
        """Count transactions that applied a promotion."""
        stmt = select(func.count()).where(
            transaction_promotions_table.c.promotion_id == promotion_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
