"""User record shared by the user use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from points.application.usecase.promotion.response import PromotionResponse
from points.domain.model import Promotion, User
from points.domain.value import Role


class UserResponse(BaseModel):
    """A user account as returned to API clients."""

    id: str
    utorid: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Role
    points: int
    verified: bool
    suspicious: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=str(user.id),
            utorid=user.utorid.root,
            name=user.name,
            email=user.email,
            role=user.role,
            points=user.points,
            verified=user.verified,
            suspicious=user.suspicious,
            created_at=user.created_at,
        )


class UserDetailResponse(UserResponse):
    """A user account together with the one-time promotions still open to it."""

    promotions: list[PromotionResponse]

    @classmethod
    def from_user_with(
        cls, user: User, promotions: list[Promotion]
    ) -> "UserDetailResponse":
        return cls(
            **UserResponse.from_user(user).model_dump(),
            promotions=[PromotionResponse.from_promotion(p) for p in promotions],
        )


class UserLookupResponse(BaseModel):
    """Just enough to confirm who a customer is."""

    id: str
    utorid: str
    name: Optional[str] = None
    verified: bool
