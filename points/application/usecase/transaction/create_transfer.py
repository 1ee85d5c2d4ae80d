"""Create transfer use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from points.application.usecase.base import ActorRequest, BaseUseCase
from points.domain.service import TransactionService, UserService
from points.domain.value import UserId

from .response import TransactionResponse


class CreateTransferRequest(ActorRequest):
    """Create transfer request (the actor is the sender)."""

    recipient_id: str
    amount: int = Field(gt=0)
    remark: str = ""


class CreateTransferResponse(BaseModel):
    """Both sides of a transfer."""

    sent: TransactionResponse
    received: TransactionResponse


class CreateTransferUseCase(BaseUseCase):
    """Use case for a user sending points to another user."""

    def __init__(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> None:
        """Initialize create transfer use case.

        Args:
            transaction_service: Transaction domain service
            user_service: User domain service
        """
        self.transaction_service = transaction_service
        self.user_service = user_service

    async def execute(self, request: CreateTransferRequest) -> CreateTransferResponse:
        """Execute create transfer flow."""
        sent, received = await self.transaction_service.create_transfer(
            request.actor(),
            UserId(UUID(request.recipient_id)),
            request.amount,
            request.remark,
        )
        users = await self.user_service.get_many([sent.user_id, received.user_id])
        return CreateTransferResponse(
            sent=TransactionResponse.from_transaction(
                sent, users[sent.user_id].utorid.root
            ),
            received=TransactionResponse.from_transaction(
                received, users[received.user_id].utorid.root
            ),
        )
