"""Use cases that take someone off an event."""

from uuid import UUID

from pydantic import BaseModel

from points.application.usecase.base import ActorRequest
from points.domain.service import EventService
from points.domain.value import EventId, UserId


class RemovalResponse(BaseModel):
    """Response for any removal from an event."""

    success: bool


class LeaveEventRequest(ActorRequest):
    """Leave event request."""

    event_id: str


class LeaveEventUseCase:
    """Use case for a guest cancelling their RSVP."""

    def __init__(self, event_service: EventService) -> None:
        self.event_service = event_service

    async def execute(self, request: LeaveEventRequest) -> RemovalResponse:
        """Execute leave event flow."""
        await self.event_service.leave(
            request.actor(), EventId(UUID(request.event_id))
        )
        return RemovalResponse(success=True)


class RemoveGuestRequest(ActorRequest):
    """Remove guest request."""

    event_id: str
    user_id: str


class RemoveGuestUseCase:
    """Use case for a manager removing a guest."""

    def __init__(self, event_service: EventService) -> None:
        self.event_service = event_service

    async def execute(self, request: RemoveGuestRequest) -> RemovalResponse:
        """Execute remove guest flow."""
        await self.event_service.remove_guest(
            request.actor(),
            EventId(UUID(request.event_id)),
            UserId(UUID(request.user_id)),
        )
        return RemovalResponse(success=True)


class RemoveOrganizerRequest(ActorRequest):
    """Remove organizer request."""

    event_id: str
    user_id: str


class RemoveOrganizerUseCase:
    """Use case for a manager removing an organizer."""

    def __init__(self, event_service: EventService) -> None:
        self.event_service = event_service

    async def execute(self, request: RemoveOrganizerRequest) -> RemovalResponse:
        """Execute remove organizer flow."""
        await self.event_service.remove_organizer(
            request.actor(),
            EventId(UUID(request.event_id)),
            UserId(UUID(request.user_id)),
        )
        return RemovalResponse(success=True)
