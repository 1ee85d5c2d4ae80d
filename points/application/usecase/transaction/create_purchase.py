"""Create purchase use case."""

from uuid import UUID

from pydantic import Field

from points.application.usecase.base import ActorRequest, BaseUseCase
from points.domain.service import TransactionService
from points.domain.value import PromotionId, Utorid

from .response import TransactionResponse


class CreatePurchaseRequest(ActorRequest):
    """Create purchase request."""

    utorid: str
    spent: float = Field(gt=0)
    promotion_ids: list[str] = []  # UUID strings
    remark: str = ""


class CreatePurchaseUseCase(BaseUseCase):
    """Use case for a cashier recording a customer's purchase."""

    def __init__(self, transaction_service: TransactionService) -> None:
        """Initialize create purchase use case.

        Args:
            transaction_service: Transaction domain service
        """
        self.transaction_service = transaction_service

    async def execute(self, request: CreatePurchaseRequest) -> TransactionResponse:
        """Execute create purchase flow.

        Args:
            request: Create purchase request

        Returns:
            The recorded purchase
        """
        utorid = Utorid(request.utorid)
        purchase = await self.transaction_service.create_purchase(
            request.actor(),
            utorid,
            request.spent,
            [PromotionId(UUID(p)) for p in request.promotion_ids],
            request.remark,
        )
        return TransactionResponse.from_transaction(purchase, utorid.root)
