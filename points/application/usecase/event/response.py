"""Event record shared by the event use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from points.domain.model import Event, User


class EventResponse(BaseModel):
    """An event and its points pool as returned to API clients."""

    id: str
    name: str
    description: str
    location: str
    start_time: datetime
    end_time: datetime
    capacity: Optional[int] = None
    points_total: int
    points_remain: int
    points_awarded: int
    published: bool

    @classmethod
    def from_event(cls, event: Event) -> "EventResponse":
        return cls(
            id=str(event.id),
            name=event.name,
            description=event.description,
            location=event.location,
            start_time=event.start_time,
            end_time=event.end_time,
            capacity=event.capacity,
            points_total=event.points_total,
            points_remain=event.points_remain,
            points_awarded=event.points_awarded,
            published=event.published,
        )


class EventPersonResponse(BaseModel):
    """An organizer or guest as listed on an event."""

    id: str
    utorid: str
    name: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "EventPersonResponse":
        return cls(id=str(user.id), utorid=user.utorid.root, name=user.name)


class EventSummaryResponse(BaseModel):
    """An event in a listing.

    Pool figures and ``published`` are only filled in for managers.
    """

    id: str
    name: str
    location: str
    start_time: datetime
    end_time: datetime
    capacity: Optional[int] = None
    num_guests: int
    points_remain: Optional[int] = None
    points_awarded: Optional[int] = None
    published: Optional[bool] = None

    @classmethod
    def from_event(
        cls, event: Event, num_guests: int, full: bool
    ) -> "EventSummaryResponse":
        return cls(
            id=str(event.id),
            name=event.name,
            location=event.location,
            start_time=event.start_time,
            end_time=event.end_time,
            capacity=event.capacity,
            num_guests=num_guests,
            points_remain=event.points_remain if full else None,
            points_awarded=event.points_awarded if full else None,
            published=event.published if full else None,
        )


class EventDetailResponse(BaseModel):
    """A single event with its organizers and guests."""

    id: str
    name: str
    description: str
    location: str
    start_time: datetime
    end_time: datetime
    capacity: Optional[int] = None
    organizers: list[EventPersonResponse]
    guests: list[EventPersonResponse]
    num_guests: int
    points_total: Optional[int] = None
    points_remain: Optional[int] = None
    points_awarded: Optional[int] = None
    published: Optional[bool] = None
