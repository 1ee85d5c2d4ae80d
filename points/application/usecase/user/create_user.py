"""Create user use case."""

from typing import Optional

from points.application.usecase.base import ActorRequest
from points.domain.service import UserService
from points.domain.value import Utorid

from .response import UserResponse


class CreateUserRequest(ActorRequest):
    """Create user request."""

    utorid: str
    name: Optional[str] = None
    email: Optional[str] = None


class CreateUserUseCase:
    """Use case for a cashier registering a new user."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize create user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: CreateUserRequest) -> UserResponse:
        """Execute create user flow."""
        user = await self.user_service.create_user(
            request.actor(), Utorid(request.utorid), request.name, request.email
        )
        return UserResponse.from_user(user)
