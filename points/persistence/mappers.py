"""Mappers for converting between database rows and domain models.

Domain models are frozen pydantic models, so rows are mapped by hand rather
than through SQLAlchemy's ORM mapping.
"""

from typing import Any, Dict, Sequence
from uuid import UUID

from points.domain.model import (
    AdjustmentTransaction,
    Event,
    EventGuest,
    EventTransaction,
    Promotion,
    PurchaseTransaction,
    RedemptionTransaction,
    Transaction,
    TransferTransaction,
    User,
)
from points.domain.value import (
    EventId,
    PromotionId,
    PromotionType,
    Role,
    TransactionId,
    TransactionKind,
    UserId,
    Utorid,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return _uuid(value) if value is not None else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(_uuid(row["id"])),
        utorid=Utorid(row["utorid"]),
        name=row.get("name"),
        email=row.get("email"),
        role=Role(row["role"]),
        points=row["points"],
        verified=row["verified"],
        suspicious=row["suspicious"],
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return {
        "id": user.id,
        "utorid": user.utorid.root,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "points": user.points,
        "verified": user.verified,
        "suspicious": user.suspicious,
        "created_at": user.created_at,
    }


def row_to_promotion(row: Dict[str, Any]) -> Promotion:
    """Convert database row to Promotion domain model."""
    return Promotion(
        id=PromotionId(_uuid(row["id"])),
        name=row["name"],
        description=row.get("description") or "",
        type=PromotionType(row["type"]),
        start_time=row["start_time"],
        end_time=row["end_time"],
        min_spending=row.get("min_spending"),
        rate=row.get("rate"),
        points=row.get("points"),
    )


def promotion_to_dict(promotion: Promotion) -> Dict[str, Any]:
    """Convert Promotion domain model to database dict."""
    data = promotion.model_dump()
    data["type"] = promotion.type.value
    return data


def row_to_event(row: Dict[str, Any]) -> Event:
    """Convert database row to Event domain model."""
    return Event(
        id=EventId(_uuid(row["id"])),
        name=row["name"],
        description=row.get("description") or "",
        location=row.get("location") or "",
        start_time=row["start_time"],
        end_time=row["end_time"],
        capacity=row.get("capacity"),
        points_total=row["points_total"],
        points_remain=row["points_remain"],
        points_awarded=row["points_awarded"],
        published=row["published"],
        created_at=row["created_at"],
    )


def event_to_dict(event: Event) -> Dict[str, Any]:
    """Convert Event domain model to database dict."""
    return event.model_dump()


def row_to_event_guest(row: Dict[str, Any]) -> EventGuest:
    """Convert database row to EventGuest domain model."""
    return EventGuest(
        event_id=EventId(_uuid(row["event_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        confirmed=row["confirmed"],
    )


def row_to_transaction(
    row: Dict[str, Any], promotion_ids: Sequence[UUID] = ()
) -> Transaction:
    """Convert a transactions row to the matching transaction variant.

    Args:
        row: Database row as dict
        promotion_ids: Promotions linked through transaction_promotions

    Returns:
        Transaction domain model of the row's kind
    """
    common = {
        "id": TransactionId(_uuid(row["id"])),
        "user_id": UserId(_uuid(row["user_id"])),
        "amount": row["amount"],
        "suspicious": row["suspicious"],
        "remark": row.get("remark") or "",
        "created_by": UserId(_uuid(row["created_by"])),
        "created_at": row["created_at"],
    }
    linked = tuple(PromotionId(_uuid(p)) for p in promotion_ids)
    related_id = _optional_uuid(row.get("related_id"))
    kind = TransactionKind(row["kind"])

    if kind == TransactionKind.PURCHASE:
        return PurchaseTransaction(
            **common, spent=row["spent"], promotion_ids=linked
        )
    if kind == TransactionKind.ADJUSTMENT:
        return AdjustmentTransaction(
            **common,
            related_transaction_id=(
                TransactionId(related_id) if related_id else None
            ),
            promotion_ids=linked,
        )
    if kind == TransactionKind.REDEMPTION:
        processed_by = _optional_uuid(row.get("processed_by"))
        return RedemptionTransaction(
            **common,
            redeemed=row["redeemed"],
            processed_at=row.get("processed_at"),
            processed_by=UserId(processed_by) if processed_by else None,
        )
    if kind == TransactionKind.TRANSFER:
        return TransferTransaction(**common, counterpart_id=UserId(related_id))
    return EventTransaction(**common, event_id=EventId(related_id))


def transaction_to_dict(transaction: Transaction) -> Dict[str, Any]:
    """Convert a transaction to a transactions row dict.

    Promotion links are stored separately in transaction_promotions.
    """
    data: Dict[str, Any] = {
        "id": transaction.id,
        "kind": transaction.kind.value,
        "user_id": transaction.user_id,
        "amount": transaction.amount,
        "spent": None,
        "redeemed": None,
        "related_id": transaction.related_id,
        "suspicious": transaction.suspicious,
        "remark": transaction.remark,
        "created_by": transaction.created_by,
        "created_at": transaction.created_at,
        "processed_at": None,
        "processed_by": None,
    }
    if isinstance(transaction, PurchaseTransaction):
        data["spent"] = transaction.spent
    elif isinstance(transaction, RedemptionTransaction):
        data["redeemed"] = transaction.redeemed
        data["processed_at"] = transaction.processed_at
        data["processed_by"] = transaction.processed_by
    return data
