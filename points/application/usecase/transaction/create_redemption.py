"""Create redemption use case."""

from pydantic import Field

from points.application.usecase.base import ActorRequest
from points.domain.service import TransactionService, UserService

from .response import TransactionResponse


class CreateRedemptionRequest(ActorRequest):
    """Create redemption request (the actor redeems their own points)."""

    amount: int = Field(gt=0)
    remark: str = ""


class CreateRedemptionUseCase:
    """Use case for a user requesting to redeem points."""

    def __init__(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> None:
        """Initialize create redemption use case.

        Args:
            transaction_service: Transaction domain service
            user_service: User domain service
        """
        self.transaction_service = transaction_service
        self.user_service = user_service

    async def execute(self, request: CreateRedemptionRequest) -> TransactionResponse:
        """Execute create redemption flow."""
        actor = request.actor()
        redemption = await self.transaction_service.create_redemption(
            actor, request.amount, request.remark
        )
        user = await self.user_service.get_by_id(actor.user_id)
        return TransactionResponse.from_transaction(redemption, user.utorid.root)
