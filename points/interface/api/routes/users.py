"""User routes: registration, account edits, redemptions and transfers."""

from typing import Literal

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel, Field

from points.application.usecase.transaction import (
    CreateRedemptionRequest,
    CreateRedemptionUseCase,
    CreateTransferRequest,
    CreateTransferResponse,
    CreateTransferUseCase,
    ListUserTransactionsRequest,
    ListUserTransactionsResponse,
    ListUserTransactionsUseCase,
    TransactionResponse,
)
from points.application.usecase.user import (
    CreateUserRequest,
    CreateUserUseCase,
    GetMeRequest,
    GetMeUseCase,
    GetUserRequest,
    GetUserUseCase,
    LookupUserRequest,
    LookupUserUseCase,
    UpdateUserRequest,
    UpdateUserUseCase,
    UserDetailResponse,
    UserLookupResponse,
    UserResponse,
)
from points.domain.service import JWTService
from points.domain.value import Role, TransactionKind
from points.interface.api.auth import authenticate

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class CreateUserAPIRequest(BaseModel):
    """API request for registering a user."""

    utorid: str
    name: str | None = None
    email: str | None = None


class UpdateUserAPIRequest(BaseModel):
    """API request for editing an account; omitted fields stay unchanged."""

    email: str | None = None
    verified: bool | None = None
    suspicious: bool | None = None
    role: Role | None = None


class RedemptionAPIRequest(BaseModel):
    """API request for a redemption of the caller's own points."""

    type: Literal["redemption"] = "redemption"
    amount: int = Field(gt=0)
    remark: str = ""


class TransferAPIRequest(BaseModel):
    """API request for sending points to another user."""

    type: Literal["transfer"] = "transfer"
    amount: int = Field(gt=0)
    remark: str = ""


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserAPIRequest,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[CreateUserUseCase],
    authorization: str | None = Header(default=None),
) -> UserResponse:
    """Register a new user (cashier)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        CreateUserRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            utorid=request.utorid,
            name=request.name,
            email=request.email,
        )
    )


@router.get("/me", response_model=UserDetailResponse)
async def get_me(
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[GetMeUseCase],
    authorization: str | None = Header(default=None),
) -> UserDetailResponse:
    """Get the caller's account and their unused one-time promotions."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        GetMeRequest(actor_id=str(actor.user_id), actor_role=actor.role)
    )


@router.post(
    "/me/transactions",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_redemption(
    request: RedemptionAPIRequest,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[CreateRedemptionUseCase],
    authorization: str | None = Header(default=None),
) -> TransactionResponse:
    """Request a redemption; points move only once a cashier processes it."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        CreateRedemptionRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            amount=request.amount,
            remark=request.remark,
        )
    )


@router.get("/me/transactions", response_model=ListUserTransactionsResponse)
async def list_own_transactions(
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[ListUserTransactionsUseCase],
    kind: TransactionKind | None = None,
    authorization: str | None = Header(default=None),
) -> ListUserTransactionsResponse:
    """List the caller's transactions, newest first."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        ListUserTransactionsRequest(
            actor_id=str(actor.user_id), actor_role=actor.role, kind=kind
        )
    )


@router.get("/lookup/{identifier}", response_model=UserLookupResponse)
async def lookup_user(
    identifier: str,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[LookupUserUseCase],
    authorization: str | None = Header(default=None),
) -> UserLookupResponse:
    """Find a user by ID or UTORid (cashier)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        LookupUserRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            identifier=identifier,
        )
    )


@router.get("/{user_id}", response_model=UserDetailResponse)
async def get_user(
    user_id: str,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[GetUserUseCase],
    authorization: str | None = Header(default=None),
) -> UserDetailResponse:
    """Get any user's account (cashier)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        GetUserRequest(
            actor_id=str(actor.user_id), actor_role=actor.role, user_id=user_id
        )
    )


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: UpdateUserAPIRequest,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[UpdateUserUseCase],
    authorization: str | None = Header(default=None),
) -> UserResponse:
    """Edit a user's email, flags or role (manager)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        UpdateUserRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            user_id=user_id,
            email=request.email,
            verified=request.verified,
            suspicious=request.suspicious,
            role=request.role,
        )
    )


@router.post(
    "/{user_id}/transactions",
    response_model=CreateTransferResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_transfer(
    user_id: str,
    request: TransferAPIRequest,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[CreateTransferUseCase],
    authorization: str | None = Header(default=None),
) -> CreateTransferResponse:
    """Send points from the caller to ``user_id``."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        CreateTransferRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            recipient_id=user_id,
            amount=request.amount,
            remark=request.remark,
        )
    )
