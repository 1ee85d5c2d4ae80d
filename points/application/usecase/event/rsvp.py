"""RSVP to event use case."""

from uuid import UUID

from points.application.usecase.base import ActorRequest
from points.domain.service import EventService, UserService
from points.domain.value import EventId

from .add_guest import AddGuestResponse


class RsvpRequest(ActorRequest):
    """RSVP request; the actor adds themselves."""

    event_id: str


class RsvpUseCase:
    """Use case for a user joining a published event's guest list."""

    def __init__(self, event_service: EventService, user_service: UserService) -> None:
        self.event_service = event_service
        self.user_service = user_service

    async def execute(self, request: RsvpRequest) -> AddGuestResponse:
        """Execute RSVP flow."""
        event_id = EventId(UUID(request.event_id))
        guest = await self.event_service.rsvp(request.actor(), event_id)
        user = await self.user_service.get_by_id(guest.user_id)
        guests = await self.event_service.guests(event_id)
        return AddGuestResponse(
            event_id=str(event_id),
            user_id=str(guest.user_id),
            utorid=user.utorid.root,
            num_guests=len(guests),
        )
