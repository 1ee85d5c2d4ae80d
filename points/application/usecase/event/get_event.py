"""Get event use case."""

from uuid import UUID

from points.application.usecase.base import ActorRequest
from points.domain.service import EventService, UserService
from points.domain.value import EventId, Role

from .response import EventDetailResponse, EventPersonResponse


class GetEventRequest(ActorRequest):
    """Get event request."""

    event_id: str


class GetEventUseCase:
    """Use case for reading one event.

    Managers and the event's organizers see the pool and every guest;
    anyone else sees only the guest count and themselves on the list.
    """

    def __init__(self, event_service: EventService, user_service: UserService) -> None:
        self.event_service = event_service
        self.user_service = user_service

    async def execute(self, request: GetEventRequest) -> EventDetailResponse:
        """Execute get event flow."""
        actor = request.actor()
        event_id = EventId(UUID(request.event_id))
        event = await self.event_service.get_visible_event(actor, event_id)
        organizer_ids = await self.event_service.organizer_ids(event_id)
        guest_ids = [g.user_id for g in await self.event_service.guests(event_id)]

        full = actor.role.at_least(Role.MANAGER) or actor.user_id in organizer_ids
        shown_guests = (
            guest_ids if full else [u for u in guest_ids if u == actor.user_id]
        )
        users = await self.user_service.get_many(
            list(organizer_ids) + shown_guests
        )

        def people(ids):
            return [EventPersonResponse.from_user(users[i]) for i in ids if i in users]

        return EventDetailResponse(
            id=str(event.id),
            name=event.name,
            description=event.description,
            location=event.location,
            start_time=event.start_time,
            end_time=event.end_time,
            capacity=event.capacity,
            organizers=people(sorted(organizer_ids, key=str)),
            guests=people(shown_guests),
            num_guests=len(guest_ids),
            points_total=event.points_total if full else None,
            points_remain=event.points_remain if full else None,
            points_awarded=event.points_awarded if full else None,
            published=event.published if full else None,
        )
