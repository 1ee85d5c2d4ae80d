"""Create adjustment use case."""

from typing import Optional
from uuid import UUID

from points.application.usecase.base import ActorRequest
from points.domain.service import TransactionService
from points.domain.value import PromotionId, TransactionId, Utorid

from .response import TransactionResponse


class CreateAdjustmentRequest(ActorRequest):
    """Create adjustment request."""

    utorid: str
    amount: int
    related_id: Optional[str] = None  # UUID of the corrected transaction
    promotion_ids: list[str] = []
    remark: str = ""


class CreateAdjustmentUseCase:
    """Use case for a manager correcting a user's balance."""

    def __init__(self, transaction_service: TransactionService) -> None:
        """Initialize create adjustment use case.

        Args:
            transaction_service: Transaction domain service
        """
        self.transaction_service = transaction_service

    async def execute(self, request: CreateAdjustmentRequest) -> TransactionResponse:
        """Execute create adjustment flow."""
        utorid = Utorid(request.utorid)
        related_id = (
            TransactionId(UUID(request.related_id)) if request.related_id else None
        )
        adjustment = await self.transaction_service.create_adjustment(
            request.actor(),
            utorid,
            request.amount,
            related_id,
            [PromotionId(UUID(p)) for p in request.promotion_ids],
            request.remark,
        )
        return TransactionResponse.from_transaction(adjustment, utorid.root)
