"""Transaction repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from points.domain.model.transaction import RedemptionTransaction, Transaction
from points.domain.value import PromotionId, TransactionId, TransactionKind, UserId
from points.domain.value.common import ValueObject


class AmountOperator(str, Enum):
    """Comparison applied to the amount filter."""

    GTE = "gte"
    LTE = "lte"


class TransactionFilter(ValueObject):
    """Criteria for browsing the whole ledger. Unset fields match everything."""

    name: Optional[str] = None  # Substring of the affected user's UTORid or name
    created_by: Optional[str] = None  # UTORid of the creator
    suspicious: Optional[bool] = None
    kind: Optional[TransactionKind] = None
    related_id: Optional[UUID] = None
    amount: Optional[int] = None
    operator: AmountOperator = AmountOperator.GTE
    promotion_id: Optional[PromotionId] = None


class TransactionRepository(ABC):
    """Repository for ledger transactions.

    Transactions are append-only. The only in-place changes are the
    one-shot processing of a redemption and the suspicious flag.
    """

    @abstractmethod
    async def find_by_id(self, transaction_id: TransactionId) -> Optional[Transaction]:
        """Find a transaction by ID.

        Args:
            transaction_id: The transaction's unique identifier

        Returns:
            The transaction if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(
        self, user_id: UserId, kind: Optional[TransactionKind] = None
    ) -> list[Transaction]:
        """Find transactions affecting a user, newest first.

        Args:
            user_id: The affected user's ID
            kind: Restrict to one transaction kind

        Returns:
            List of transactions
        """
        pass

    @abstractmethod
    async def find_all(
        self, filters: TransactionFilter, limit: int = 10, offset: int = 0
    ) -> list[Transaction]:
        """Find transactions matching the filters, newest first.

        Args:
            filters: Match criteria
            limit: Maximum number of transactions to return
            offset: Number of transactions to skip

        Returns:
            List of transactions
        """
        pass

    @abstractmethod
    async def count(self, filters: TransactionFilter) -> int:
        """Count transactions matching the filters."""
        pass

    @abstractmethod
    async def save(self, transaction: Transaction) -> Transaction:
        """Insert a transaction along with its promotion links.

        Args:
            transaction: The transaction to insert

        Returns:
            The saved transaction
        """
        pass

    @abstractmethod
    async def mark_processed(
        self,
        transaction_id: TransactionId,
        processed_by: UserId,
        processed_at: datetime,
    ) -> Optional[RedemptionTransaction]:
        """Process a redemption if it is still pending.

        Sets ``amount`` to ``-redeemed`` together with the processing
        fields, conditional on ``processed_at`` still being empty.

        Args:
            transaction_id: The redemption's ID
            processed_by: The cashier processing it
            processed_at: Processing time

        Returns:
            The processed redemption, or None if it was already processed
            (or is not a redemption)
        """
        pass

    @abstractmethod
    async def set_suspicious(
        self, transaction_id: TransactionId, suspicious: bool
    ) -> Optional[Transaction]:
        """Flip the suspicious flag if it differs from ``suspicious``.

        Args:
            transaction_id: The transaction's ID
            suspicious: The new flag value

        Returns:
            The updated transaction, or None if the flag already had that value
        """
        pass
