"""Promotion catalog domain service."""

import math
from collections.abc import AsyncIterator, Iterable, Sequence
from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from points.domain.error import (
    BusinessRuleViolationError,
    ForbiddenError,
    InvalidPromotionError,
    NotFoundError,
    PromotionAlreadyUsedError,
    ValidationError,
)
from points.domain.model import Promotion, utc_now
from points.domain.repository import PromotionRepository
from points.domain.value import Actor, PromotionId, PromotionType, Role, UserId

from .base import Service
from .role_gate import RoleGate

DEFAULT_POINTS_PER_DOLLAR = 4


def calculate_points(
    spent: float,
    promotions: Iterable[Promotion],
    points_per_dollar: int = DEFAULT_POINTS_PER_DOLLAR,
) -> int:
    """Compute the points earned by a purchase.

    ``base = floor(spent * points_per_dollar)``. Each distinct promotion adds
    ``floor(base * rate)`` when it has a rate and ``points`` when it has a
    flat bonus. The total is floored and never negative.

    Args:
        spent: Amount spent in dollars
        promotions: Promotions applied to the purchase; duplicates count once
        points_per_dollar: Base earning rate

    Returns:
        Points earned
    """
    if not math.isfinite(spent) or spent <= 0:
        return 0

    base = math.floor(spent * points_per_dollar)
    bonus = 0
    seen: set[PromotionId] = set()
    for promotion in promotions:
        if promotion.id in seen:
            continue
        seen.add(promotion.id)
        if promotion.rate and math.isfinite(promotion.rate):
            bonus += math.floor(base * promotion.rate)
        if promotion.points:
            bonus += promotion.points

    return max(0, base + bonus)


class PromotionService(Service):
    """Domain service for the promotion catalog and one-time usage."""

    def __init__(
        self,
        promotion_repository: PromotionRepository,
        role_gate: RoleGate,
        points_per_dollar: int = DEFAULT_POINTS_PER_DOLLAR,
    ) -> None:
        """Initialize promotion service.

        Args:
            promotion_repository: Promotion repository
            role_gate: Role checks
            points_per_dollar: Base earning rate for purchases
        """
        self.promotion_repository = promotion_repository
        self.role_gate = role_gate
        self.points_per_dollar = points_per_dollar

    def calculate_points(self, spent: float, promotions: Iterable[Promotion]) -> int:
        """Compute purchase points at the configured earning rate."""
        return calculate_points(spent, promotions, self.points_per_dollar)

    async def get_by_id(self, promotion_id: PromotionId) -> Promotion:
        """Get promotion by ID.

        Raises:
            NotFoundError: If promotion not found
        """
        promotion = await self.promotion_repository.find_by_id(promotion_id)
        if not promotion:
            raise NotFoundError("Promotion", str(promotion_id))
        return promotion

    async def get_visible_promotion(
        self, actor: Actor, promotion_id: PromotionId
    ) -> Promotion:
        """Get a promotion the actor may see.

        Managers see any promotion; other users only active ones.

        Raises:
            NotFoundError: If the promotion is missing or not active
        """
        promotion = await self.get_by_id(promotion_id)
        if self.role_gate.allows(actor, Role.MANAGER):
            return promotion
        if not promotion.is_active(utc_now()):
            raise NotFoundError("Promotion", str(promotion_id))
        return promotion

    async def active_automatic_promotions(
        self, spend: float, as_of: datetime
    ) -> list[Promotion]:
        """Automatic promotions that apply to a purchase of ``spend``.

        Args:
            spend: Amount spent
            as_of: Purchase time

        Returns:
            Active automatic promotions whose minimum spending is met
        """
        with logfire.span(
            "promotion_service.active_automatic_promotions", spend=spend
        ):
            active = await self.promotion_repository.find_active(
                as_of, PromotionType.AUTOMATIC
            )
            applicable = [p for p in active if p.qualifies(spend)]
            logfire.info(
                "Automatic promotions resolved",
                active=len(active),
                applicable=len(applicable),
            )
            return applicable

    async def resolve_manual_promotions(
        self, promotion_ids: Sequence[PromotionId], spend: float, as_of: datetime
    ) -> list[Promotion]:
        """Resolve promotions a cashier applied by ID.

        Args:
            promotion_ids: Requested promotion IDs
            spend: Amount spent
            as_of: Purchase time

        Returns:
            The requested promotions, deduplicated, in request order

        Raises:
            InvalidPromotionError: If any ID is unknown, inactive, or its
                minimum spending is not met
        """
        with logfire.span(
            "promotion_service.resolve_manual_promotions", count=len(promotion_ids)
        ):
            unique_ids = list(dict.fromkeys(promotion_ids))
            if not unique_ids:
                return []

            found = {
                p.id: p
                for p in await self.promotion_repository.find_by_ids(unique_ids)
            }
            resolved: list[Promotion] = []
            for promotion_id in unique_ids:
                promotion = found.get(promotion_id)
                if promotion is None:
                    raise InvalidPromotionError(str(promotion_id), "not found")
                if not promotion.is_active(as_of):
                    raise InvalidPromotionError(str(promotion_id), "not active")
                if not promotion.qualifies(spend):
                    raise InvalidPromotionError(
                        str(promotion_id), "minimum spending not met"
                    )
                resolved.append(promotion)
            return resolved

    async def ensure_promotions_exist(
        self, promotion_ids: Sequence[PromotionId]
    ) -> None:
        """Check that every ID names a promotion, regardless of its window.

        Raises:
            InvalidPromotionError: If any ID is unknown
        """
        unique_ids = list(dict.fromkeys(promotion_ids))
        found = {
            p.id for p in await self.promotion_repository.find_by_ids(unique_ids)
        }
        for promotion_id in unique_ids:
            if promotion_id not in found:
                raise InvalidPromotionError(str(promotion_id), "not found")

    async def ensure_unused(
        self, user_id: UserId, promotions: Iterable[Promotion]
    ) -> None:
        """Fail early when a one-time promotion was already consumed.

        This is only a fast path for a clear error message;
        ``mark_one_time_used`` remains the race guard.

        Raises:
            PromotionAlreadyUsedError: If any one-time promotion was used
        """
        used = await self.promotion_repository.find_used_ids(user_id)
        for promotion in promotions:
            if promotion.is_one_time and promotion.id in used:
                logfire.warn(
                    "One-time promotion already used",
                    user_id=str(user_id),
                    promotion_id=str(promotion.id),
                )
                raise PromotionAlreadyUsedError(str(user_id), str(promotion.id))

    async def mark_one_time_used(
        self, user_id: UserId, promotion_id: PromotionId
    ) -> None:
        """Record that a user consumed a one-time promotion.

        Race-safe: the (user, promotion) unique constraint decides which of
        two concurrent uses wins.

        Raises:
            PromotionAlreadyUsedError: If the use was already recorded
        """
        with logfire.span(
            "promotion_service.mark_one_time_used",
            user_id=str(user_id),
            promotion_id=str(promotion_id),
        ):
            try:
                await self.promotion_repository.record_use(user_id, promotion_id)
            except IntegrityError:
                logfire.warn(
                    "Duplicate one-time promotion use",
                    user_id=str(user_id),
                    promotion_id=str(promotion_id),
                )
                raise PromotionAlreadyUsedError(str(user_id), str(promotion_id))
            logfire.info(
                "One-time promotion used",
                user_id=str(user_id),
                promotion_id=str(promotion_id),
            )

    async def eligible_one_time_for(
        self, user_id: UserId, as_of: datetime
    ) -> AsyncIterator[Promotion]:
        """Yield active one-time promotions the user has not consumed yet."""
        used = await self.promotion_repository.find_used_ids(user_id)
        for promotion in await self.promotion_repository.find_active(
            as_of, PromotionType.ONE_TIME
        ):
            if promotion.id not in used:
                yield promotion

    async def list_available(self, user_id: UserId, as_of: datetime) -> list[Promotion]:
        """Active promotions a user can still benefit from.

        Automatic promotions are always listed; one-time promotions only
        until the user consumes them.
        """
        with logfire.span("promotion_service.list_available", user_id=str(user_id)):
            automatic = await self.promotion_repository.find_active(
                as_of, PromotionType.AUTOMATIC
            )
            one_time = [p async for p in self.eligible_one_time_for(user_id, as_of)]
            promotions = sorted(automatic + one_time, key=lambda p: p.start_time)
            logfire.info(
                "Available promotions listed",
                user_id=str(user_id),
                count=len(promotions),
            )
            return promotions

    async def list_promotions(self, actor: Actor) -> list[Promotion]:
        """List promotions visible to the actor.

        Managers see the whole catalog; everyone else sees what is
        available to them right now.
        """
        if self.role_gate.allows(actor, Role.MANAGER):
            return await self.promotion_repository.find_all()
        return await self.list_available(actor.user_id, utc_now())

    async def create_promotion(
        self,
        actor: Actor,
        name: str,
        promotion_type: PromotionType,
        start_time: datetime,
        end_time: datetime,
        description: str = "",
        min_spending: Optional[float] = None,
        rate: Optional[float] = None,
        points: Optional[int] = None,
    ) -> Promotion:
        """Create a promotion.

        Args:
            actor: Caller (manager or above)
            name: Display name
            promotion_type: Automatic or one-time
            start_time: Window start, not in the past
            end_time: Window end, after ``start_time``
            description: Free text
            min_spending: Minimum purchase amount
            rate: Bonus multiplier of base points
            points: Flat bonus

        Returns:
            The created promotion

        Raises:
            ForbiddenError: If the actor is below manager
            ValidationError: If the window is invalid
        """
        with logfire.span("promotion_service.create_promotion", name=name):
            self.role_gate.require(actor, Role.MANAGER)
            now = utc_now()
            if start_time < now:
                raise ValidationError("Start time cannot be in the past")
            if start_time >= end_time:
                raise ValidationError("Start time must be before end time")

            promotion = Promotion(
                id=PromotionId(uuid4()),
                name=name,
                description=description,
                type=promotion_type,
                start_time=start_time,
                end_time=end_time,
                min_spending=min_spending,
                rate=rate,
                points=points,
            )
            saved = await self.promotion_repository.save(promotion)
            logfire.info(
                "Promotion created",
                promotion_id=str(saved.id),
                type=saved.type.value,
            )
            return saved

    async def update_promotion(
        self,
        actor: Actor,
        promotion_id: PromotionId,
        name: Optional[str] = None,
        description: Optional[str] = None,
        promotion_type: Optional[PromotionType] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        min_spending: Optional[float] = None,
        rate: Optional[float] = None,
        points: Optional[int] = None,
    ) -> Promotion:
        """Update a promotion. ``None`` leaves a field unchanged.

        Once started only ``end_time`` may change; once ended nothing may.

        Raises:
            ForbiddenError: If the actor is below manager
            NotFoundError: If promotion not found
            BusinessRuleViolationError: If the promotion is locked by its window
            ValidationError: If new values are invalid
        """
        with logfire.span(
            "promotion_service.update_promotion", promotion_id=str(promotion_id)
        ):
            self.role_gate.require(actor, Role.MANAGER)
            promotion = await self.get_by_id(promotion_id)
            now = utc_now()

            updates: dict = {
                "name": name,
                "description": description,
                "type": promotion_type,
                "start_time": start_time,
                "min_spending": min_spending,
                "rate": rate,
                "points": points,
            }
            updates = {k: v for k, v in updates.items() if v is not None}

            if promotion.has_started(now) and updates:
                raise BusinessRuleViolationError(
                    "Cannot update these fields after promotion has started"
                )
            if promotion.has_ended(now) and end_time is not None:
                raise BusinessRuleViolationError(
                    "Cannot update end time after promotion has ended"
                )

            if start_time is not None or end_time is not None:
                new_start = start_time or promotion.start_time
                new_end = end_time or promotion.end_time
                if (start_time is not None and start_time < now) or (
                    end_time is not None and end_time < now
                ):
                    raise ValidationError(
                        "Start time and end time cannot be in the past"
                    )
                if new_start >= new_end:
                    raise ValidationError("Start time must be before end time")
                if end_time is not None:
                    updates["end_time"] = end_time

            for field in ("min_spending", "rate", "points"):
                if field in updates and updates[field] < 0:
                    raise ValidationError(f"Invalid {field}")

            updated = promotion.model_copy(update=updates)
            saved = await self.promotion_repository.save(updated)
            logfire.info(
                "Promotion updated",
                promotion_id=str(promotion_id),
                fields=sorted(updates),
            )
            return saved

    async def delete_promotion(self, actor: Actor, promotion_id: PromotionId) -> None:
        """Delete a promotion that has not started and was never used.

        Raises:
            ForbiddenError: If the actor is below manager, or the promotion
                has started or been used
            NotFoundError: If promotion not found
        """
        with logfire.span(
            "promotion_service.delete_promotion", promotion_id=str(promotion_id)
        ):
            self.role_gate.require(actor, Role.MANAGER)
            promotion = await self.get_by_id(promotion_id)
            if promotion.has_started(utc_now()):
                raise ForbiddenError("Cannot delete promotion that has started")

            uses = await self.promotion_repository.count_uses(promotion_id)
            links = await self.promotion_repository.count_transaction_links(
                promotion_id
            )
            if uses or links:
                logfire.warn(
                    "Delete of used promotion refused",
                    promotion_id=str(promotion_id),
                    uses=uses,
                    links=links,
                )
                raise ForbiddenError("Cannot delete promotion that has been used")

            await self.promotion_repository.delete(promotion_id)
            logfire.info("Promotion deleted", promotion_id=str(promotion_id))
