"""Get transaction use case."""

from uuid import UUID

from points.application.usecase.base import ActorRequest
from points.domain.service import TransactionService, UserService
from points.domain.value import TransactionId

from .response import TransactionResponse


class GetTransactionRequest(ActorRequest):
    """Get transaction request."""

    transaction_id: str


class GetTransactionUseCase:
    """Use case for reading a single transaction."""

    def __init__(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> None:
        self.transaction_service = transaction_service
        self.user_service = user_service

    async def execute(self, request: GetTransactionRequest) -> TransactionResponse:
        """Execute get transaction flow."""
        transaction = await self.transaction_service.get_transaction(
            request.actor(), TransactionId(UUID(request.transaction_id))
        )
        user = await self.user_service.get_by_id(transaction.user_id)
        return TransactionResponse.from_transaction(transaction, user.utorid.root)
