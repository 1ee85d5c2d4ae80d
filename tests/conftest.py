"""Test configuration and shared builders."""

from datetime import datetime, timedelta
from uuid import uuid4

from points.domain.model import Event, Promotion, User, utc_now
from points.domain.value import (
    Actor,
    EventId,
    PromotionId,
    PromotionType,
    Role,
    UserId,
    Utorid,
)


def make_user(
    utorid: str,
    role: Role = Role.REGULAR,
    points: int = 0,
    verified: bool = True,
    suspicious: bool = False,
) -> User:
    """Build a user; save it through UserRepository to seed a balance."""
    return User(
        id=UserId(uuid4()),
        utorid=Utorid(utorid),
        name=utorid.title(),
        email=f"{utorid}@mail.utoronto.ca",
        role=role,
        points=points,
        verified=verified,
        suspicious=suspicious,
    )


def actor_of(user: User) -> Actor:
    """The user as an authenticated caller."""
    return Actor(user_id=user.id, role=user.role)


def make_promotion(
    promotion_type: PromotionType = PromotionType.AUTOMATIC,
    rate: float | None = None,
    points: int | None = None,
    min_spending: float | None = None,
    start_time: datetime | None = None,
    end_time: datetime | None = None,
) -> Promotion:
    """Build a promotion that is active now unless a window is given."""
    now = utc_now()
    return Promotion(
        id=PromotionId(uuid4()),
        name="Test promotion",
        type=promotion_type,
        start_time=start_time or now - timedelta(days=1),
        end_time=end_time or now + timedelta(days=1),
        min_spending=min_spending,
        rate=rate,
        points=points,
    )


def make_event(
    points: int = 100,
    awarded: int = 0,
    ended: bool = False,
    published: bool = False,
    capacity: int | None = None,
    name: str = "Game night",
    location: str = "",
) -> Event:
    """Build an event running now, or one that has ended."""
    now = utc_now()
    if ended:
        start, end = now - timedelta(days=2), now - timedelta(days=1)
    else:
        start, end = now - timedelta(hours=1), now + timedelta(hours=2)
    return Event(
        id=EventId(uuid4()),
        name=name,
        location=location,
        start_time=start,
        end_time=end,
        points_total=points,
        points_remain=points - awarded,
        points_awarded=awarded,
        capacity=capacity,
        published=published,
    )
