"""Promotion routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel, Field

from points.application.usecase.promotion import (
    CreatePromotionRequest,
    CreatePromotionUseCase,
    DeletePromotionRequest,
    DeletePromotionResponse,
    DeletePromotionUseCase,
    GetPromotionRequest,
    GetPromotionUseCase,
    ListPromotionsRequest,
    ListPromotionsResponse,
    ListPromotionsUseCase,
    PromotionResponse,
    UpdatePromotionRequest,
    UpdatePromotionUseCase,
)
from points.domain.service import JWTService
from points.domain.value import PromotionType
from points.interface.api.auth import authenticate

router = APIRouter(prefix="/promotions", tags=["promotions"], route_class=DishkaRoute)


class CreatePromotionAPIRequest(BaseModel):
    """API request for creating a promotion."""

    name: str = Field(min_length=1)
    description: str = ""
    type: PromotionType
    start_time: datetime
    end_time: datetime
    min_spending: float | None = Field(default=None, ge=0)
    rate: float | None = Field(default=None, ge=0)
    points: int | None = Field(default=None, ge=0)


class UpdatePromotionAPIRequest(BaseModel):
    """API request for editing a promotion; omitted fields stay unchanged."""

    name: str | None = None
    description: str | None = None
    type: PromotionType | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    min_spending: float | None = None
    rate: float | None = None
    points: int | None = None


@router.post(
    "", response_model=PromotionResponse, status_code=status.HTTP_201_CREATED
)
async def create_promotion(
    request: CreatePromotionAPIRequest,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[CreatePromotionUseCase],
    authorization: str | None = Header(default=None),
) -> PromotionResponse:
    """Create a promotion (manager)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        CreatePromotionRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            **request.model_dump(),
        )
    )


@router.get("", response_model=ListPromotionsResponse)
async def list_promotions(
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[ListPromotionsUseCase],
    authorization: str | None = Header(default=None),
) -> ListPromotionsResponse:
    """List promotions.

    Managers see every promotion; other users see the active ones they can
    still use.
    """
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        ListPromotionsRequest(actor_id=str(actor.user_id), actor_role=actor.role)
    )


@router.patch("/{promotion_id}", response_model=PromotionResponse)
async def update_promotion(
    promotion_id: str,
    request: UpdatePromotionAPIRequest,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[UpdatePromotionUseCase],
    authorization: str | None = Header(default=None),
) -> PromotionResponse:
    """Edit a promotion (manager)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        UpdatePromotionRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            promotion_id=promotion_id,
            **request.model_dump(),
        )
    )


@router.delete("/{promotion_id}", response_model=DeletePromotionResponse)
async def delete_promotion(
    promotion_id: str,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[DeletePromotionUseCase],
    authorization: str | None = Header(default=None),
) -> DeletePromotionResponse:
    """Delete a promotion that has not started and was never used (manager)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        DeletePromotionRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            promotion_id=promotion_id,
        )
    )


@router.get("/{promotion_id}", response_model=PromotionResponse)
async def get_promotion(
    promotion_id: str,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[GetPromotionUseCase],
    authorization: str | None = Header(default=None),
) -> PromotionResponse:
    """Get a promotion; users below manager only see active ones."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        GetPromotionRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            promotion_id=promotion_id,
        )
    )
