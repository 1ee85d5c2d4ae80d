"""In-memory transaction repository for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from points.domain.model import RedemptionTransaction, Transaction, promotion_ids_of
from points.domain.repository import (
    AmountOperator,
    TransactionFilter,
    TransactionRepository,
)
from points.domain.value import TransactionId, TransactionKind, UserId

from .store import InMemoryStore


class InMemoryTransactionRepository(TransactionRepository):
    """In-memory implementation of TransactionRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, transaction_id: TransactionId) -> Optional[Transaction]:
        """Find a transaction by ID."""
        return self.store.transactions.get(transaction_id)

    async def find_by_user(
        self, user_id: UserId, kind: Optional[TransactionKind] = None
    ) -> list[Transaction]:
        """Find transactions affecting a user, newest first."""
        transactions = [
            t
            for t in self.store.transactions.values()
            if t.user_id == user_id and (kind is None or t.kind == kind)
        ]
        return sorted(transactions, key=lambda t: t.created_at, reverse=True)

    def _matches(self, transaction: Transaction, filters: TransactionFilter) -> bool:
        if filters.name is not None:
            user = self.store.users.get(transaction.user_id)
            if user is None or not (
                filters.name in user.utorid.root or filters.name in (user.name or "")
            ):
                return False
        if filters.created_by is not None:
            creator = self.store.users.get(transaction.created_by)
            if creator is None or creator.utorid.root != filters.created_by:
                return False
        if filters.suspicious is not None:
            if transaction.suspicious != filters.suspicious:
                return False
        if filters.kind is not None and transaction.kind != filters.kind:
            return False
        if filters.related_id is not None:
            if transaction.related_id != filters.related_id:
                return False
        if filters.amount is not None:
            if filters.operator == AmountOperator.GTE:
                if transaction.amount < filters.amount:
                    return False
            elif transaction.amount > filters.amount:
                return False
        if (
            filters.promotion_id is not None
            and filters.promotion_id not in promotion_ids_of(transaction)
        ):
            return False
        return True

    async def find_all(
        self, filters: TransactionFilter, limit: int = 10, offset: int = 0
    ) -> list[Transaction]:
        """Find transactions matching the filters, newest first."""
        transactions = sorted(
            (t for t in self.store.transactions.values() if self._matches(t, filters)),
            key=lambda t: t.created_at,
            reverse=True,
        )
        return transactions[offset : offset + limit]

    async def count(self, filters: TransactionFilter) -> int:
        """Count transactions matching the filters."""
        return sum(
            1 for t in self.store.transactions.values() if self._matches(t, filters)
        )

    async def save(self, transaction: Transaction) -> Transaction:
        """Insert a transaction.

        Raises:
            IntegrityError: If the ID is already used
        """
        if transaction.id in self.store.transactions:
            raise IntegrityError("Duplicate transaction", None, Exception())
        self.store.transactions[transaction.id] = transaction
        return transaction

    async def mark_processed(
        self,
        transaction_id: TransactionId,
        processed_by: UserId,
        processed_at: datetime,
    ) -> Optional[RedemptionTransaction]:
        """Process a pending redemption."""
        transaction = self.store.transactions.get(transaction_id)
        if (
            not isinstance(transaction, RedemptionTransaction)
            or transaction.is_processed
        ):
            return None
        processed = transaction.model_copy(
            update={
                "amount": -transaction.redeemed,
                "processed_at": processed_at,
                "processed_by": processed_by,
            }
        )
        self.store.transactions[transaction_id] = processed
        return processed

    async def set_suspicious(
        self, transaction_id: TransactionId, suspicious: bool
    ) -> Optional[Transaction]:
        """Flip the suspicious flag if it differs."""
        transaction = self.store.transactions.get(transaction_id)
        if transaction is None or transaction.suspicious == suspicious:
            return None
        updated = transaction.model_copy(update={"suspicious": suspicious})
        self.store.transactions[transaction_id] = updated
        return updated
