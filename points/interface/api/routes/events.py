"""Event routes: event setup, guest lists and point awards."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel, Field

from points.application.usecase.event import (
    AddGuestRequest,
    AddGuestResponse,
    AddGuestUseCase,
    AddOrganizerRequest,
    AddOrganizerResponse,
    AddOrganizerUseCase,
    CreateEventRequest,
    CreateEventUseCase,
    EventDetailResponse,
    EventResponse,
    GetEventRequest,
    GetEventUseCase,
    LeaveEventRequest,
    LeaveEventUseCase,
    ListEventsRequest,
    ListEventsResponse,
    ListEventsUseCase,
    PublishEventRequest,
    PublishEventUseCase,
    RemovalResponse,
    RemoveGuestRequest,
    RemoveGuestUseCase,
    RemoveOrganizerRequest,
    RemoveOrganizerUseCase,
    RsvpRequest,
    RsvpUseCase,
    UpdateEventPointsRequest,
    UpdateEventPointsUseCase,
)
from points.application.usecase.transaction import (
    AwardEventPointsRequest,
    AwardEventPointsResponse,
    AwardEventPointsUseCase,
)
from points.domain.service import JWTService
from points.interface.api.auth import authenticate

router = APIRouter(prefix="/events", tags=["events"], route_class=DishkaRoute)


class CreateEventAPIRequest(BaseModel):
    """API request for creating an event."""

    name: str = Field(min_length=1)
    description: str = ""
    location: str = ""
    start_time: datetime
    end_time: datetime
    capacity: int | None = None
    points: int = Field(ge=0)


class UtoridAPIRequest(BaseModel):
    """API request naming a user by UTORid."""

    utorid: str


class EventPointsAPIRequest(BaseModel):
    """API request for resizing an event's points pool."""

    points: int = Field(ge=0)


class AwardAPIRequest(BaseModel):
    """API request for awarding event points.

    Without ``utorid`` every guest receives ``amount``.
    """

    amount: int = Field(gt=0)
    utorid: str | None = None
    remark: str | None = None


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: CreateEventAPIRequest,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[CreateEventUseCase],
    authorization: str | None = Header(default=None),
) -> EventResponse:
    """Create an event with a points pool (manager)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        CreateEventRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            name=request.name,
            description=request.description,
            location=request.location,
            start_time=request.start_time,
            end_time=request.end_time,
            capacity=request.capacity,
            points=request.points,
        )
    )


@router.post(
    "/{event_id}/guests",
    response_model=AddGuestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_guest(
    event_id: str,
    request: UtoridAPIRequest,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[AddGuestUseCase],
    authorization: str | None = Header(default=None),
) -> AddGuestResponse:
    """Add a guest (manager or event organizer)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        AddGuestRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            event_id=event_id,
            utorid=request.utorid,
        )
    )


@router.post(
    "/{event_id}/organizers",
    response_model=AddOrganizerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_organizer(
    event_id: str,
    request: UtoridAPIRequest,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[AddOrganizerUseCase],
    authorization: str | None = Header(default=None),
) -> AddOrganizerResponse:
    """Add an organizer (manager)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        AddOrganizerRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            event_id=event_id,
            utorid=request.utorid,
        )
    )


@router.patch("/{event_id}/points", response_model=EventResponse)
async def update_event_points(
    event_id: str,
    request: EventPointsAPIRequest,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[UpdateEventPointsUseCase],
    authorization: str | None = Header(default=None),
) -> EventResponse:
    """Resize the points pool (manager)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        UpdateEventPointsRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            event_id=event_id,
            points=request.points,
        )
    )


@router.post(
    "/{event_id}/transactions",
    response_model=AwardEventPointsResponse,
    status_code=status.HTTP_201_CREATED,
)
async def award_event_points(
    event_id: str,
    request: AwardAPIRequest,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[AwardEventPointsUseCase],
    authorization: str | None = Header(default=None),
) -> AwardEventPointsResponse:
    """Award points from the event's pool to one guest or to all guests."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        AwardEventPointsRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            event_id=event_id,
            amount=request.amount,
            utorid=request.utorid,
            remark=request.remark,
        )
    )


@router.get("", response_model=ListEventsResponse, response_model_exclude_none=True)
async def list_events(
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[ListEventsUseCase],
    name: str | None = None,
    location: str | None = None,
    started: bool | None = None,
    ended: bool | None = None,
    show_full: bool = False,
    published: bool | None = None,
    authorization: str | None = Header(default=None),
) -> ListEventsResponse:
    """List events; only managers see unpublished ones."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        ListEventsRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            name=name,
            location=location,
            started=started,
            ended=ended,
            show_full=show_full,
            published=published,
        )
    )


@router.get(
    "/{event_id}",
    response_model=EventDetailResponse,
    response_model_exclude_none=True,
)
async def get_event(
    event_id: str,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[GetEventUseCase],
    authorization: str | None = Header(default=None),
) -> EventDetailResponse:
    """Get an event; its pool and guest list only for managers and organizers."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        GetEventRequest(
            actor_id=str(actor.user_id), actor_role=actor.role, event_id=event_id
        )
    )


@router.patch("/{event_id}/published", response_model=EventResponse)
async def publish_event(
    event_id: str,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[PublishEventUseCase],
    authorization: str | None = Header(default=None),
) -> EventResponse:
    """Publish an event (manager)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        PublishEventRequest(
            actor_id=str(actor.user_id), actor_role=actor.role, event_id=event_id
        )
    )


@router.post(
    "/{event_id}/guests/me",
    response_model=AddGuestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def rsvp(
    event_id: str,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[RsvpUseCase],
    authorization: str | None = Header(default=None),
) -> AddGuestResponse:
    """Join a published event's guest list."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        RsvpRequest(
            actor_id=str(actor.user_id), actor_role=actor.role, event_id=event_id
        )
    )


@router.delete("/{event_id}/guests/me", response_model=RemovalResponse)
async def leave_event(
    event_id: str,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[LeaveEventUseCase],
    authorization: str | None = Header(default=None),
) -> RemovalResponse:
    """Leave an event's guest list before it ends."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        LeaveEventRequest(
            actor_id=str(actor.user_id), actor_role=actor.role, event_id=event_id
        )
    )


@router.delete("/{event_id}/guests/{user_id}", response_model=RemovalResponse)
async def remove_guest(
    event_id: str,
    user_id: str,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[RemoveGuestUseCase],
    authorization: str | None = Header(default=None),
) -> RemovalResponse:
    """Remove a guest (manager)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        RemoveGuestRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            event_id=event_id,
            user_id=user_id,
        )
    )


@router.delete("/{event_id}/organizers/{user_id}", response_model=RemovalResponse)
async def remove_organizer(
    event_id: str,
    user_id: str,
    jwt_service: FromDishka[JWTService],
    use_case: FromDishka[RemoveOrganizerUseCase],
    authorization: str | None = Header(default=None),
) -> RemovalResponse:
    """Remove an organizer; an event keeps at least one (manager)."""
    actor = authenticate(authorization, jwt_service)
    return await use_case.execute(
        RemoveOrganizerRequest(
            actor_id=str(actor.user_id),
            actor_role=actor.role,
            event_id=event_id,
            user_id=user_id,
        )
    )
