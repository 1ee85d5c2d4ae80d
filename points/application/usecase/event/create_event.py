"""Create event use case."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from points.application.usecase.base import ActorRequest
from points.domain.service import EventService

from .response import EventResponse


class CreateEventRequest(ActorRequest):
    """Create event request."""

    name: str = Field(min_length=1)
    description: str = ""
    location: str = ""
    start_time: datetime
    end_time: datetime
    capacity: Optional[int] = None
    points: int = Field(ge=0)


class CreateEventUseCase:
    """Use case for a manager creating an event."""

    def __init__(self, event_service: EventService) -> None:
        """Initialize create event use case.

        Args:
            event_service: Event domain service
        """
        self.event_service = event_service

    async def execute(self, request: CreateEventRequest) -> EventResponse:
        """Execute create event flow."""
        event = await self.event_service.create_event(
            request.actor(),
            name=request.name,
            start_time=request.start_time,
            end_time=request.end_time,
            points=request.points,
            description=request.description,
            location=request.location,
            capacity=request.capacity,
        )
        return EventResponse.from_event(event)
