"""Add event guest use case."""

from uuid import UUID

from pydantic import BaseModel

from points.application.usecase.base import ActorRequest
from points.domain.service import EventService
from points.domain.value import EventId, Utorid


class AddGuestRequest(ActorRequest):
    """Add guest request."""

    event_id: str
    utorid: str


class AddGuestResponse(BaseModel):
    """Add guest response."""

    event_id: str
    user_id: str
    utorid: str
    num_guests: int


class AddGuestUseCase:
    """Use case for a manager or organizer adding a guest."""

    def __init__(self, event_service: EventService) -> None:
        self.event_service = event_service

    async def execute(self, request: AddGuestRequest) -> AddGuestResponse:
        """Execute add guest flow."""
        event_id = EventId(UUID(request.event_id))
        guest = await self.event_service.add_guest(
            request.actor(), event_id, Utorid(request.utorid)
        )
        guests = await self.event_service.guests(event_id)
        return AddGuestResponse(
            event_id=str(event_id),
            user_id=str(guest.user_id),
            utorid=request.utorid,
            num_guests=len(guests),
        )
