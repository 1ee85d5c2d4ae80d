"""Event entity and guest list entries."""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from points.domain.model.common import DomainModel, utc_now
from points.domain.value import EventId, UserId


class Event(DomainModel):
    """Campus event with a points pool for its guests.

    The pool satisfies ``points_remain + points_awarded == points_total``.
    """

    id: EventId
    name: str
    description: str = ""
    location: str = ""
    start_time: datetime
    end_time: datetime
    capacity: Optional[int] = Field(default=None, gt=0)
    points_total: int = Field(ge=0)
    points_remain: int = Field(ge=0)
    points_awarded: int = Field(default=0, ge=0)
    published: bool = False
    created_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_event(self) -> "Event":
        """Check the window and the pool invariant."""
        if self.start_time >= self.end_time:
            raise ValueError("Event start_time must be before end_time")
        if self.points_remain + self.points_awarded != self.points_total:
            raise ValueError(
                "points_remain + points_awarded must equal points_total"
            )
        return self

    def has_ended(self, as_of: datetime) -> bool:
        """Whether the event is over."""
        return self.end_time <= as_of


class EventGuest(DomainModel):
    """A user on an event's guest list.

    ``confirmed`` becomes true once the guest has been awarded points.
    """

    event_id: EventId
    user_id: UserId
    confirmed: bool = False
