"""Set suspicious flag use case."""

from uuid import UUID

from points.application.usecase.base import ActorRequest
from points.domain.service import TransactionService, UserService
from points.domain.value import TransactionId

from .response import TransactionResponse


class SetSuspiciousRequest(ActorRequest):
    """Set suspicious request."""

    transaction_id: str
    suspicious: bool


class SetSuspiciousUseCase:
    """Use case for a manager flagging or clearing a transaction."""

    def __init__(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> None:
        """Initialize set suspicious use case.

        Args:
            transaction_service: Transaction domain service
            user_service: User domain service
        """
        self.transaction_service = transaction_service
        self.user_service = user_service

    async def execute(self, request: SetSuspiciousRequest) -> TransactionResponse:
        """Execute set suspicious flow."""
        transaction = await self.transaction_service.set_suspicious(
            request.actor(),
            TransactionId(UUID(request.transaction_id)),
            request.suspicious,
        )
        user = await self.user_service.get_by_id(transaction.user_id)
        return TransactionResponse.from_transaction(transaction, user.utorid.root)
