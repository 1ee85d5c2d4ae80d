"""List own transactions use case."""

from typing import Optional

from pydantic import BaseModel

from points.application.usecase.base import ActorRequest
from points.domain.service import TransactionService, UserService
from points.domain.value import TransactionKind

from .response import TransactionResponse


class ListUserTransactionsRequest(ActorRequest):
    """List own transactions request."""

    kind: Optional[TransactionKind] = None


class ListUserTransactionsResponse(BaseModel):
    """The caller's transactions, newest first."""

    count: int
    results: list[TransactionResponse]


class ListUserTransactionsUseCase:
    """Use case for a user browsing their own history."""

    def __init__(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> None:
        self.transaction_service = transaction_service
        self.user_service = user_service

    async def execute(
        self, request: ListUserTransactionsRequest
    ) -> ListUserTransactionsResponse:
        """Execute list own transactions flow."""
        actor = request.actor()
        transactions = await self.transaction_service.list_user_transactions(
            actor, request.kind
        )
        user = await self.user_service.get_by_id(actor.user_id)
        return ListUserTransactionsResponse(
            count=len(transactions),
            results=[
                TransactionResponse.from_transaction(t, user.utorid.root)
                for t in transactions
            ],
        )
