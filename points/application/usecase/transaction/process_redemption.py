"""Process redemption use case."""

from uuid import UUID

from points.application.usecase.base import ActorRequest, BaseUseCase
from points.domain.service import TransactionService, UserService
from points.domain.value import TransactionId

from .response import TransactionResponse


class ProcessRedemptionRequest(ActorRequest):
    """Process redemption request."""

    transaction_id: str


class ProcessRedemptionUseCase(BaseUseCase):
    """Use case for a cashier processing a pending redemption."""

    def __init__(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> None:
        """Initialize process redemption use case.

        Args:
            transaction_service: Transaction domain service
            user_service: User domain service
        """
        self.transaction_service = transaction_service
        self.user_service = user_service

    async def execute(self, request: ProcessRedemptionRequest) -> TransactionResponse:
        """Execute process redemption flow."""
        redemption = await self.transaction_service.process_redemption(
            request.actor(), TransactionId(UUID(request.transaction_id))
        )
        owner = await self.user_service.get_by_id(redemption.user_id)
        return TransactionResponse.from_transaction(redemption, owner.utorid.root)
