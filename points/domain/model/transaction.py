"""Ledger transaction entities.

A transaction is an append-only record of one point delta on one user. Each
kind carries its own payload, so ``Transaction`` is a tagged union over
``kind`` rather than one record with kind-dependent optional fields.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import Field, TypeAdapter

from points.domain.model.common import DomainModel, utc_now
from points.domain.value import (
    EventId,
    PromotionId,
    TransactionId,
    TransactionKind,
    UserId,
)


class TransactionBase(DomainModel):
    """Fields shared by every transaction kind.

    ``amount`` is the delta actually applied to ``user_id``'s balance, or the
    delta that will be applied once a suspicious hold is lifted.
    """

    id: TransactionId
    user_id: UserId
    amount: int = 0
    suspicious: bool = False
    remark: str = ""
    created_by: UserId
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def related_id(self) -> Optional[UUID]:
        """Polymorphic related id as stored in the transactions table."""
        return None


class PurchaseTransaction(TransactionBase):
    """Points earned from a purchase, including promotion bonuses."""

    kind: Literal[TransactionKind.PURCHASE] = TransactionKind.PURCHASE
    spent: float = Field(gt=0)
    promotion_ids: tuple[PromotionId, ...] = ()


class AdjustmentTransaction(TransactionBase):
    """Manual correction of a balance by a manager."""

    kind: Literal[TransactionKind.ADJUSTMENT] = TransactionKind.ADJUSTMENT
    related_transaction_id: Optional[TransactionId] = None
    promotion_ids: tuple[PromotionId, ...] = ()

    @property
    def related_id(self) -> Optional[UUID]:
        return self.related_transaction_id


class RedemptionTransaction(TransactionBase):
    """A request to spend points, debited only when processed.

    ``amount`` stays 0 until processing sets it to ``-redeemed``.
    """

    kind: Literal[TransactionKind.REDEMPTION] = TransactionKind.REDEMPTION
    redeemed: int = Field(gt=0)
    processed_at: Optional[datetime] = None
    processed_by: Optional[UserId] = None

    @property
    def is_processed(self) -> bool:
        """Whether the redemption has been debited."""
        return self.processed_at is not None


class TransferTransaction(TransactionBase):
    """One side of a peer-to-peer transfer.

    The sender's row has a negative amount, the recipient's a positive one;
    each names the other user as ``counterpart_id``.
    """

    kind: Literal[TransactionKind.TRANSFER] = TransactionKind.TRANSFER
    counterpart_id: UserId

    @property
    def related_id(self) -> Optional[UUID]:
        return self.counterpart_id


class EventTransaction(TransactionBase):
    """Points awarded to a guest from an event pool."""

    kind: Literal[TransactionKind.EVENT] = TransactionKind.EVENT
    event_id: EventId

    @property
    def related_id(self) -> Optional[UUID]:
        return self.event_id


Transaction = Annotated[
    Union[
        PurchaseTransaction,
        AdjustmentTransaction,
        RedemptionTransaction,
        TransferTransaction,
        EventTransaction,
    ],
    Field(discriminator="kind"),
]

transaction_adapter: TypeAdapter[Transaction] = TypeAdapter(Transaction)


def promotion_ids_of(transaction: Transaction) -> tuple[PromotionId, ...]:
    """Promotions linked to a transaction (purchase and adjustment only)."""
    if isinstance(transaction, (PurchaseTransaction, AdjustmentTransaction)):
        return transaction.promotion_ids
    return ()
