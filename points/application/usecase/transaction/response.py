"""Transaction result record shared by the transaction use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from points.domain.model import (
    PurchaseTransaction,
    RedemptionTransaction,
    Transaction,
    promotion_ids_of,
)
from points.domain.value import TransactionKind


class TransactionResponse(BaseModel):
    """A transaction as returned to API clients."""

    id: str
    kind: TransactionKind
    user_id: str
    utorid: str
    amount: int
    spent: Optional[float] = None
    earned: Optional[int] = None
    redeemed: Optional[int] = None
    related_id: Optional[str] = None
    promotion_ids: list[str] = []
    suspicious: bool
    remark: str
    created_by: str
    created_at: datetime
    processed_at: Optional[datetime] = None
    processed_by: Optional[str] = None

    @classmethod
    def from_transaction(
        cls, transaction: Transaction, utorid: str
    ) -> "TransactionResponse":
        """Build the response for a transaction.

        Args:
            transaction: Any transaction variant
            utorid: UTORid of the affected user

        Returns:
            Flat response record; kind-specific fields are None elsewhere
        """
        response = cls(
            id=str(transaction.id),
            kind=transaction.kind,
            user_id=str(transaction.user_id),
            utorid=utorid,
            amount=transaction.amount,
            related_id=(
                str(transaction.related_id) if transaction.related_id else None
            ),
            promotion_ids=[str(p) for p in promotion_ids_of(transaction)],
            suspicious=transaction.suspicious,
            remark=transaction.remark,
            created_by=str(transaction.created_by),
            created_at=transaction.created_at,
        )
        if isinstance(transaction, PurchaseTransaction):
            response.spent = transaction.spent
            # Held purchases have not credited anything yet
            response.earned = 0 if transaction.suspicious else transaction.amount
        elif isinstance(transaction, RedemptionTransaction):
            response.redeemed = transaction.redeemed
            response.processed_at = transaction.processed_at
            response.processed_by = (
                str(transaction.processed_by) if transaction.processed_by else None
            )
        return response
