"""Award event points use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from points.application.usecase.base import ActorRequest, BaseUseCase
from points.domain.service import TransactionService, UserService
from points.domain.value import EventId, Utorid

from .response import TransactionResponse


class AwardEventPointsRequest(ActorRequest):
    """Award event points request.

    Without ``utorid`` every guest of the event is awarded.
    """

    event_id: str
    amount: int = Field(gt=0)
    utorid: Optional[str] = None
    remark: Optional[str] = None


class AwardEventPointsResponse(BaseModel):
    """Transactions created by an award, one per guest."""

    transactions: list[TransactionResponse]
    total: int


class AwardEventPointsUseCase(BaseUseCase):
    """Use case for an organizer or manager awarding event points."""

    def __init__(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> None:
        """Initialize award event points use case.

        Args:
            transaction_service: Transaction domain service
            user_service: User domain service
        """
        self.transaction_service = transaction_service
        self.user_service = user_service

    async def execute(
        self, request: AwardEventPointsRequest
    ) -> AwardEventPointsResponse:
        """Execute award event points flow."""
        awards = await self.transaction_service.award_event_points(
            request.actor(),
            EventId(UUID(request.event_id)),
            request.amount,
            Utorid(request.utorid) if request.utorid else None,
            request.remark,
        )
        users = await self.user_service.get_many([a.user_id for a in awards])
        return AwardEventPointsResponse(
            transactions=[
                TransactionResponse.from_transaction(
                    award, users[award.user_id].utorid.root
                )
                for award in awards
            ],
            total=sum(award.amount for award in awards),
        )
