"""Update user use case."""

from typing import Optional
from uuid import UUID

from points.application.usecase.base import ActorRequest
from points.domain.service import UserService
from points.domain.value import Role, UserId

from .response import UserResponse


class UpdateUserRequest(ActorRequest):
    """Update user request; omitted fields stay unchanged."""

    user_id: str
    email: Optional[str] = None
    verified: Optional[bool] = None
    suspicious: Optional[bool] = None
    role: Optional[Role] = None


class UpdateUserUseCase:
    """Use case for a manager or superuser editing an account."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: UpdateUserRequest) -> UserResponse:
        """Execute update user flow."""
        user = await self.user_service.update_user(
            request.actor(),
            UserId(UUID(request.user_id)),
            email=request.email,
            verified=request.verified,
            suspicious=request.suspicious,
            role=request.role,
        )
        return UserResponse.from_user(user)
