"""List promotions use case."""

from pydantic import BaseModel

from points.application.usecase.base import ActorRequest
from points.domain.service import PromotionService

from .response import PromotionResponse


class ListPromotionsRequest(ActorRequest):
    """List promotions request."""


class ListPromotionsResponse(BaseModel):
    """Promotions visible to the caller."""

    count: int
    results: list[PromotionResponse]


class ListPromotionsUseCase:
    """Use case for listing promotions.

    Managers get the full catalog; other users get the promotions they can
    still use right now.
    """

    def __init__(self, promotion_service: PromotionService) -> None:
        self.promotion_service = promotion_service

    async def execute(self, request: ListPromotionsRequest) -> ListPromotionsResponse:
        """Execute list promotions flow."""
        promotions = await self.promotion_service.list_promotions(request.actor())
        return ListPromotionsResponse(
            count=len(promotions),
            results=[PromotionResponse.from_promotion(p) for p in promotions],
        )
