"""List all transactions use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from points.application.usecase.base import ActorRequest
from points.domain.repository import AmountOperator, TransactionFilter
from points.domain.service import TransactionService, UserService
from points.domain.value import PromotionId, TransactionKind

from .response import TransactionResponse


class ListTransactionsRequest(ActorRequest):
    """List transactions request; unset filters match everything."""

    name: Optional[str] = None  # Substring of the affected user's UTORid or name
    created_by: Optional[str] = None  # UTORid of the creator
    suspicious: Optional[bool] = None
    kind: Optional[TransactionKind] = None
    related_id: Optional[str] = None
    amount: Optional[int] = None
    operator: AmountOperator = AmountOperator.GTE
    promotion_id: Optional[str] = None
    limit: int = Field(default=10, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListTransactionsResponse(BaseModel):
    """One page of the ledger."""

    count: int  # Matches across all pages
    results: list[TransactionResponse]
    limit: int
    offset: int


class ListTransactionsUseCase:
    """Use case for a manager auditing the ledger."""

    def __init__(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> None:
        self.transaction_service = transaction_service
        self.user_service = user_service

    async def execute(
        self, request: ListTransactionsRequest
    ) -> ListTransactionsResponse:
        """Execute list transactions flow.

        Args:
            request: Filters and page

        Returns:
            Matching transactions, newest first, with the total count
        """
        filters = TransactionFilter(
            name=request.name,
            created_by=request.created_by,
            suspicious=request.suspicious,
            kind=request.kind,
            related_id=UUID(request.related_id) if request.related_id else None,
            amount=request.amount,
            operator=request.operator,
            promotion_id=(
                PromotionId(UUID(request.promotion_id))
                if request.promotion_id
                else None
            ),
        )
        transactions, total = await self.transaction_service.list_transactions(
            request.actor(), filters, request.limit, request.offset
        )
        users = await self.user_service.get_many(
            list({t.user_id for t in transactions})
        )
        return ListTransactionsResponse(
            count=total,
            results=[
                TransactionResponse.from_transaction(t, users[t.user_id].utorid.root)
                for t in transactions
            ],
            limit=request.limit,
            offset=request.offset,
        )
