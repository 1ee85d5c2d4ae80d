"""Delete promotion use case."""

from uuid import UUID

from pydantic import BaseModel

from points.application.usecase.base import ActorRequest
from points.domain.service import PromotionService
from points.domain.value import PromotionId


class DeletePromotionRequest(ActorRequest):
    """Delete promotion request."""

    promotion_id: str


class DeletePromotionResponse(BaseModel):
    """Delete promotion response."""

    success: bool


class DeletePromotionUseCase:
    """Use case for a manager deleting an unused future promotion."""

    def __init__(self, promotion_service: PromotionService) -> None:
        self.promotion_service = promotion_service

    async def execute(self, request: DeletePromotionRequest) -> DeletePromotionResponse:
        """Execute delete promotion flow."""
        await self.promotion_service.delete_promotion(
            request.actor(), PromotionId(UUID(request.promotion_id))
        )
        return DeletePromotionResponse(success=True)
