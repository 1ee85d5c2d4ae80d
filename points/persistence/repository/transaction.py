"""PostgreSQL implementation of Transaction repository."""

from collections import defaultdict
from datetime import datetime
from typing import Optional, Sequence, cast
from uuid import UUID

from sqlalchemy import func, insert, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from points.domain.model import (
    RedemptionTransaction,
    Transaction,
    promotion_ids_of,
)
from points.domain.repository import (
    AmountOperator,
    TransactionFilter,
    TransactionRepository,
)
from points.domain.value import TransactionId, TransactionKind, UserId
from points.persistence.mappers import row_to_transaction, transaction_to_dict
from points.persistence.tables import (
    transaction_promotions_table,
    transactions_table,
    users_table,
)


class PostgresTransactionRepository(TransactionRepository):
    """PostgreSQL implementation of TransactionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _promotion_links(
        self, transaction_ids: Sequence[UUID]
    ) -> dict[UUID, list[UUID]]:
        if not transaction_ids:
            return {}
        stmt = select(
            transaction_promotions_table.c.transaction_id,
            transaction_promotions_table.c.promotion_id,
        ).where(transaction_promotions_table.c.transaction_id.in_(transaction_ids))
        result = await self.session.execute(stmt)
        links: dict[UUID, list[UUID]] = defaultdict(list)
        for transaction_id, promotion_id in result.all():
            links[transaction_id].append(promotion_id)
        return links

    async def _load(self, rows: Sequence[dict]) -> list[Transaction]:
        links = await self._promotion_links([row["id"] for row in rows])
        return [row_to_transaction(row, links.get(row["id"], ())) for row in rows]

    async def find_by_id(self, transaction_id: TransactionId) -> Optional[Transaction]:
        """Find a transaction by ID."""
        stmt = select(transactions_table).where(
            transactions_table.c.id == transaction_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return (await self._load([dict(row)]))[0]

    async def find_by_user(
        self, user_id: UserId, kind: Optional[TransactionKind] = None
    ) -> list[Transaction]:
        """Find transactions affecting a user, newest first."""
        stmt = select(transactions_table).where(
            transactions_table.c.user_id == user_id
        )
        if kind is not None:
            stmt = stmt.where(transactions_table.c.kind == kind.value)
        stmt = stmt.order_by(transactions_table.c.created_at.desc())
        result = await self.session.execute(stmt)
        return await self._load([dict(row) for row in result.mappings().all()])

    def _filter(self, stmt: Select, filters: TransactionFilter) -> Select:
        tx = transactions_table.c
        if filters.name is not None:
            matching_users = select(users_table.c.id).where(
                or_(
                    users_table.c.utorid.contains(filters.name, autoescape=True),
                    users_table.c.name.contains(filters.name, autoescape=True),
                )
            )
            stmt = stmt.where(tx.user_id.in_(matching_users))
        if filters.created_by is not None:
            creators = select(users_table.c.id).where(
                users_table.c.utorid == filters.created_by
            )
            stmt = stmt.where(tx.created_by.in_(creators))
        if filters.suspicious is not None:
            stmt = stmt.where(tx.suspicious.is_(filters.suspicious))
        if filters.kind is not None:
            stmt = stmt.where(tx.kind == filters.kind.value)
        if filters.related_id is not None:
            stmt = stmt.where(tx.related_id == filters.related_id)
        if filters.amount is not None:
            if filters.operator == AmountOperator.GTE:
                stmt = stmt.where(tx.amount >= filters.amount)
            else:
                stmt = stmt.where(tx.amount <= filters.amount)
        if filters.promotion_id is not None:
            linked = select(transaction_promotions_table.c.transaction_id).where(
                transaction_promotions_table.c.promotion_id == filters.promotion_id
            )
            stmt = stmt.where(tx.id.in_(linked))
        return stmt

    async def find_all(
        self, filters: TransactionFilter, limit: int = 10, offset: int = 0
    ) -> list[Transaction]:
        """Find transactions matching the filters, newest first."""
        stmt = self._filter(select(transactions_table), filters)
        stmt = (
            stmt.order_by(transactions_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return await self._load([dict(row) for row in result.mappings().all()])

    async def count(self, filters: TransactionFilter) -> int:
        """Count transactions matching the filters."""
        stmt = self._filter(
            select(func.count()).select_from(transactions_table), filters
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def save(self, transaction: Transaction) -> Transaction:
        """Insert a transaction along with its promotion links."""
        stmt = insert(transactions_table).values(**transaction_to_dict(transaction))
        await self.session.execute(stmt)

        promotion_ids = promotion_ids_of(transaction)
        if promotion_ids:
            await self.session.execute(
                insert(transaction_promotions_table),
                [
                    {"transaction_id": transaction.id, "promotion_id": promotion_id}
                    for promotion_id in promotion_ids
                ],
            )
        await self.session.flush()
        return transaction

    async def mark_processed(
        self,
        transaction_id: TransactionId,
        processed_by: UserId,
        processed_at: datetime,
    ) -> Optional[RedemptionTransaction]:
        """Process a pending redemption; conditional on ``processed_at IS NULL``."""
        stmt = (
            transactions_table.update()
            .where(
                transactions_table.c.id == transaction_id,
                transactions_table.c.kind == TransactionKind.REDEMPTION.value,
                transactions_table.c.processed_at.is_(None),
            )
            .values(
                amount=-transactions_table.c.redeemed,
                processed_at=processed_at,
                processed_by=processed_by,
            )
            .returning(*transactions_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        if not row:
            return None
        return cast(RedemptionTransaction, row_to_transaction(dict(row)))

    async def set_suspicious(
        self, transaction_id: TransactionId, suspicious: bool
    ) -> Optional[Transaction]:
        """Flip the suspicious flag; conditional on the old value differing."""
        stmt = (
            transactions_table.update()
            .where(
                transactions_table.c.id == transaction_id,
                transactions_table.c.suspicious.is_not(suspicious),
            )
            .values(suspicious=suspicious)
            .returning(*transactions_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        if not row:
            return None
        return (await self._load([dict(row)]))[0]
