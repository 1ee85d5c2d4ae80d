"""List events use case."""

from typing import Optional

from pydantic import BaseModel

from points.application.usecase.base import ActorRequest
from points.domain.service import EventService
from points.domain.value import Role

from .response import EventSummaryResponse


class ListEventsRequest(ActorRequest):
    """List events request."""

    name: Optional[str] = None
    location: Optional[str] = None
    started: Optional[bool] = None
    ended: Optional[bool] = None
    show_full: bool = False
    published: Optional[bool] = None


class ListEventsResponse(BaseModel):
    """List events response."""

    count: int
    results: list[EventSummaryResponse]


class ListEventsUseCase:
    """Use case for browsing events."""

    def __init__(self, event_service: EventService) -> None:
        self.event_service = event_service

    async def execute(self, request: ListEventsRequest) -> ListEventsResponse:
        """Execute list events flow.

        Args:
            request: Filters

        Returns:
            Matching events with guest counts; managers also see each pool
        """
        actor = request.actor()
        listed = await self.event_service.list_events(
            actor,
            name=request.name,
            location=request.location,
            started=request.started,
            ended=request.ended,
            show_full=request.show_full,
            published=request.published,
        )
        full = actor.role.at_least(Role.MANAGER)
        return ListEventsResponse(
            count=len(listed),
            results=[
                EventSummaryResponse.from_event(event, num_guests, full)
                for event, num_guests in listed
            ],
        )
