"""Look up user use case."""

from points.application.usecase.base import ActorRequest
from points.domain.service import UserService

from .response import UserLookupResponse


class LookupUserRequest(ActorRequest):
    """Look up user request; ``identifier`` is a user ID or UTORid."""

    identifier: str


class LookupUserUseCase:
    """Use case for a cashier confirming a customer's identity."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: LookupUserRequest) -> UserLookupResponse:
        """Execute look up user flow."""
        user = await self.user_service.lookup(request.actor(), request.identifier)
        return UserLookupResponse(
            id=str(user.id),
            utorid=user.utorid.root,
            name=user.name,
            verified=user.verified,
        )
