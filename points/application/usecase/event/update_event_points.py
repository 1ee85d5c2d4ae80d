"""Update event points use case."""

from uuid import UUID

from pydantic import Field

from points.application.usecase.base import ActorRequest
from points.domain.service import EventService
from points.domain.value import EventId

from .response import EventResponse


class UpdateEventPointsRequest(ActorRequest):
    """Resize an event's points pool."""

    event_id: str
    points: int = Field(ge=0)


class UpdateEventPointsUseCase:
    """Use case for a manager changing an event's total points."""

    def __init__(self, event_service: EventService) -> None:
        self.event_service = event_service

    async def execute(self, request: UpdateEventPointsRequest) -> EventResponse:
        """Execute update event points flow."""
        event = await self.event_service.set_points_total(
            request.actor(), EventId(UUID(request.event_id)), request.points
        )
        return EventResponse.from_event(event)
