"""Get promotion use case."""

from uuid import UUID

from points.application.usecase.base import ActorRequest
from points.domain.service import PromotionService
from points.domain.value import PromotionId

from .response import PromotionResponse


class GetPromotionRequest(ActorRequest):
    """Get promotion request."""

    promotion_id: str


class GetPromotionUseCase:
    """Use case for reading one promotion."""

    def __init__(self, promotion_service: PromotionService) -> None:
        self.promotion_service = promotion_service

    async def execute(self, request: GetPromotionRequest) -> PromotionResponse:
        """Execute get promotion flow."""
        promotion = await self.promotion_service.get_visible_promotion(
            request.actor(), PromotionId(UUID(request.promotion_id))
        )
        return PromotionResponse.from_promotion(promotion)
