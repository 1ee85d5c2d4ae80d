"""Publish event use case."""

from uuid import UUID

from points.application.usecase.base import ActorRequest
from points.domain.service import EventService
from points.domain.value import EventId

from .response import EventResponse


class PublishEventRequest(ActorRequest):
    """Publish event request."""

    event_id: str


class PublishEventUseCase:
    """Use case for a manager opening an event to everyone."""

    def __init__(self, event_service: EventService) -> None:
        self.event_service = event_service

    async def execute(self, request: PublishEventRequest) -> EventResponse:
        """Execute publish event flow."""
        event = await self.event_service.publish(
            request.actor(), EventId(UUID(request.event_id))
        )
        return EventResponse.from_event(event)
