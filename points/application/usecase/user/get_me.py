"""Get current user use case."""

from points.application.usecase.base import ActorRequest
from points.domain.model import utc_now
from points.domain.service import PromotionService, UserService

from .response import UserDetailResponse


class GetMeRequest(ActorRequest):
    """Get current user request."""


class GetMeUseCase:
    """Use case for a caller reading their own account."""

    def __init__(
        self, user_service: UserService, promotion_service: PromotionService
    ) -> None:
        self.user_service = user_service
        self.promotion_service = promotion_service

    async def execute(self, request: GetMeRequest) -> UserDetailResponse:
        """Execute get me flow.

        Args:
            request: The authenticated caller

        Returns:
            The caller's account and their unused one-time promotions

        Raises:
            NotFoundError: If the token outlived the account
        """
        actor = request.actor()
        user = await self.user_service.get_by_id(actor.user_id)
        promotions = [
            p
            async for p in self.promotion_service.eligible_one_time_for(
                user.id, utc_now()
            )
        ]
        return UserDetailResponse.from_user_with(user, promotions)
