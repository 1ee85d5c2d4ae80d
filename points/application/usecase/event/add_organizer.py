"""Add event organizer use case."""

from uuid import UUID

from pydantic import BaseModel

from points.application.usecase.base import ActorRequest
from points.domain.service import EventService
from points.domain.value import EventId, Utorid


class AddOrganizerRequest(ActorRequest):
    """Add organizer request."""

    event_id: str
    utorid: str


class AddOrganizerResponse(BaseModel):
    """Add organizer response."""

    event_id: str
    organizer_ids: list[str]


class AddOrganizerUseCase:
    """Use case for a manager adding an event organizer."""

    def __init__(self, event_service: EventService) -> None:
        self.event_service = event_service

    async def execute(self, request: AddOrganizerRequest) -> AddOrganizerResponse:
        """Execute add organizer flow."""
        event_id = EventId(UUID(request.event_id))
        await self.event_service.add_organizer(
            request.actor(), event_id, Utorid(request.utorid)
        )
        organizers = await self.event_service.organizer_ids(event_id)
        return AddOrganizerResponse(
            event_id=str(event_id),
            organizer_ids=sorted(str(o) for o in organizers),
        )
