"""Update promotion use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from points.application.usecase.base import ActorRequest
from points.domain.service import PromotionService
from points.domain.value import PromotionId, PromotionType

from .response import PromotionResponse


class UpdatePromotionRequest(ActorRequest):
    """Update promotion request; omitted fields stay unchanged."""

    promotion_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[PromotionType] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    min_spending: Optional[float] = None
    rate: Optional[float] = None
    points: Optional[int] = None


class UpdatePromotionUseCase:
    """Use case for a manager editing a promotion."""

    def __init__(self, promotion_service: PromotionService) -> None:
        self.promotion_service = promotion_service

    async def execute(self, request: UpdatePromotionRequest) -> PromotionResponse:
        """Execute update promotion flow."""
        promotion = await self.promotion_service.update_promotion(
            request.actor(),
            PromotionId(UUID(request.promotion_id)),
            name=request.name,
            description=request.description,
            promotion_type=request.type,
            start_time=request.start_time,
            end_time=request.end_time,
            min_spending=request.min_spending,
            rate=request.rate,
            points=request.points,
        )
        return PromotionResponse.from_promotion(promotion)
