"""Create promotion use case."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from points.application.usecase.base import ActorRequest
from points.domain.service import PromotionService
from points.domain.value import PromotionType

from .response import PromotionResponse


class CreatePromotionRequest(ActorRequest):
    """Create promotion request."""

    name: str = Field(min_length=1)
    description: str = ""
    type: PromotionType
    start_time: datetime
    end_time: datetime
    min_spending: Optional[float] = Field(default=None, ge=0)
    rate: Optional[float] = Field(default=None, ge=0)
    points: Optional[int] = Field(default=None, ge=0)


class CreatePromotionUseCase:
    """Use case for a manager creating a promotion."""

    def __init__(self, promotion_service: PromotionService) -> None:
        """Initialize create promotion use case.

        Args:
            promotion_service: Promotion domain service
        """
        self.promotion_service = promotion_service

    async def execute(self, request: CreatePromotionRequest) -> PromotionResponse:
        """Execute create promotion flow."""
        promotion = await self.promotion_service.create_promotion(
            request.actor(),
            name=request.name,
            promotion_type=request.type,
            start_time=request.start_time,
            end_time=request.end_time,
            description=request.description,
            min_spending=request.min_spending,
            rate=request.rate,
            points=request.points,
        )
        return PromotionResponse.from_promotion(promotion)
