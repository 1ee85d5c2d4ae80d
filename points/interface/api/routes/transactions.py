"""Transaction routes: purchases, adjustments and transaction review."""

from typing import Literal

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel, Field

from points.application.usecase.transaction import (
    CreateAdjustmentRequest,
    CreateAdjustmentUseCase,
    CreatePurchaseRequest,
    CreatePurchaseUseCase,
    GetTransactionRequest,
    GetTransactionUseCase,
    ListTransactionsRequest,
    ListTransactionsResponse,
    ListTransactionsUseCase,
    ProcessRedemptionRequest,
    ProcessRedemptionUseCase,
    SetSuspiciousRequest,
    SetSuspiciousUseCase,
    TransactionResponse,
)
from points.domain.error import ValidationError
from points.domain.repository import AmountOperator
from points.domain.service import JWTService
from points.domain.value import TransactionKind
from points.interface.api.auth import authenticate

router = APIRouter(
    prefix="/transactions", tags=["transactions"], route_class=DishkaRoute
)


class CreateTransactionAPIRequest(BaseModel):
    """API request for a cashier purchase or a manager adjustment."""

    type: Literal["purchase", "adjustment"]
    utorid: str
    spent: float | None = Field(default=None, gt=0)
    amount: int | None = None
    related_id: str | None = None
    promotion_ids: list[str] = []
    remark: str = ""


class SuspiciousAPIRequest(BaseModel):
    """API request for flagging or clearing a transaction."""

    suspicious: bool


class ProcessedAPIRequest(BaseModel):
    """API request for completing a redemption."""

    processed: Literal[True]


@router.post(
    "", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED
)
async def create_transaction(
    request: CreateTransactionAPIRequest,
    jwt_service: FromDishka[JWTService],
    create_purchase_use_case: FromDishka[CreatePurchaseUseCase],
    create_adjustment_use_case: FromDishka[CreateAdjustmentUseCase],
    authorization: str | None = Header(default=None),
) -> TransactionResponse:
    """Record a purchase (cashier) or an adjustment (manager).

    Raises:
        ValidationError: If the body lacks the fields its type needs
    """
    actor = authenticate(authorization, jwt_service)

    if request.type == "purchase":
        if request.spent is None:
            raise ValidationError("Purchases require spent")
        return await create_purchase_use_case.execute(
            CreatePurchaseRequest(
                actor_id=str(actor.user_id),
                actor_role=actor.role,
                utorid=request.utorid,
                spent=request.spent,
                promotion_ids=request.promotion_ids,
                remark=request.remark,
            )
        )

    if request.amount is None:
        raise ValidationError("Adjustments require amount")
    return await create_adjustment_use_case.execute(
        CreateAdjustmentRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            utorid=request.utorid,
            amount=request.amount,
            related_id=request.related_id,
            promotion_ids=request.promotion_ids,
            remark=request.remark,
        )
    )


@router.get("", response_model=ListTransactionsResponse)
async def list_transactions(
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[ListTransactionsUseCase],
    name: str | None = None,
    created_by: str | None = None,
    suspicious: bool | None = None,
    kind: TransactionKind | None = None,
    related_id: str | None = None,
    amount: int | None = None,
    operator: AmountOperator = AmountOperator.GTE,
    promotion_id: str | None = None,
    limit: int = 10,
    offset: int = 0,
    authorization: str | None = Header(default=None),
) -> ListTransactionsResponse:
    """Browse the whole ledger, newest first (manager)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        ListTransactionsRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            name=name,
            created_by=created_by,
            suspicious=suspicious,
            kind=kind,
            related_id=related_id,
            amount=amount,
            operator=operator,
            promotion_id=promotion_id,
            limit=limit,
            offset=offset,
        )
    )


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: str,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[GetTransactionUseCase],
    authorization: str | None = Header(default=None),
) -> TransactionResponse:
    """Get a transaction (its owner, or cashier and above)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        GetTransactionRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            transaction_id=transaction_id,
        )
    )


@router.patch("/{transaction_id}/suspicious", response_model=TransactionResponse)
async def set_suspicious(
    transaction_id: str,
    request: SuspiciousAPIRequest,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[SetSuspiciousUseCase],
    authorization: str | None = Header(default=None),
) -> TransactionResponse:
    """Flag or clear a transaction; the owner's balance follows (manager)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        SetSuspiciousRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            transaction_id=transaction_id,
            suspicious=request.suspicious,
        )
    )


@router.patch("/{transaction_id}/processed", response_model=TransactionResponse)
async def process_redemption(
    transaction_id: str,
    request: ProcessedAPIRequest,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[ProcessRedemptionUseCase],
    authorization: str | None = Header(default=None),
) -> TransactionResponse:
    """Complete a pending redemption and debit the owner (cashier)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        ProcessRedemptionRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            transaction_id=transaction_id,
        )
    )
