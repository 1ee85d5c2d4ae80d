"""Event use cases."""

from .add_guest import AddGuestRequest, AddGuestResponse, AddGuestUseCase
from .add_organizer import (
    AddOrganizerRequest,
    AddOrganizerResponse,
    AddOrganizerUseCase,
)
from .create_event import CreateEventRequest, CreateEventUseCase
from .get_event import GetEventRequest, GetEventUseCase
from .list_events import ListEventsRequest, ListEventsResponse, ListEventsUseCase
from .publish_event import PublishEventRequest, PublishEventUseCase
from .remove_attendance import (
    LeaveEventRequest,
    LeaveEventUseCase,
    RemovalResponse,
    RemoveGuestRequest,
    RemoveGuestUseCase,
    RemoveOrganizerRequest,
    RemoveOrganizerUseCase,
)
from .response import (
    EventDetailResponse,
    EventPersonResponse,
    EventResponse,
    EventSummaryResponse,
)
from .rsvp import RsvpRequest, RsvpUseCase
from .update_event_points import UpdateEventPointsRequest, UpdateEventPointsUseCase

__all__ = [
    "AddGuestRequest",
    "AddGuestResponse",
    "AddGuestUseCase",
    "AddOrganizerRequest",
    "AddOrganizerResponse",
    "AddOrganizerUseCase",
    "CreateEventRequest",
    "CreateEventUseCase",
    "EventDetailResponse",
    "EventPersonResponse",
    "EventResponse",
    "EventSummaryResponse",
    "GetEventRequest",
    "GetEventUseCase",
    "LeaveEventRequest",
    "LeaveEventUseCase",
    "ListEventsRequest",
    "ListEventsResponse",
    "ListEventsUseCase",
    "PublishEventRequest",
    "PublishEventUseCase",
    "RemovalResponse",
    "RemoveGuestRequest",
    "RemoveGuestUseCase",
    "RemoveOrganizerRequest",
    "RemoveOrganizerUseCase",
    "RsvpRequest",
    "RsvpUseCase",
    "UpdateEventPointsRequest",
    "UpdateEventPointsUseCase",
]
