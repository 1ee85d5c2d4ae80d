"""Get user use case."""

from uuid import UUID

from points.application.usecase.base import ActorRequest
from points.domain.model import utc_now
from points.domain.service import PromotionService, UserService
from points.domain.value import UserId

from .response import UserDetailResponse


class GetUserRequest(ActorRequest):
    """Get user request."""

    user_id: str


class GetUserUseCase:
    """Use case for a cashier or above reading someone's account."""

    def __init__(
        self, user_service: UserService, promotion_service: PromotionService
    ) -> None:
        self.user_service = user_service
        self.promotion_service = promotion_service

    async def execute(self, request: GetUserRequest) -> UserDetailResponse:
        """Execute get user flow."""
        user = await self.user_service.get_user(
            request.actor(), UserId(UUID(request.user_id))
        )
        promotions = [
            p
            async for p in self.promotion_service.eligible_one_time_for(
                user.id, utc_now()
            )
        ]
        return UserDetailResponse.from_user_with(user, promotions)
