"""Event domain service."""

from collections.abc import Sequence
from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from points.domain.error import (
    AlreadyExistsError,
    BusinessRuleViolationError,
    InsufficientEventPointsError,
    NotFoundError,
    ValidationError,
)
from points.domain.model import Event, EventGuest, User, utc_now
from points.domain.repository import EventRepository, UnitOfWork
from points.domain.value import Actor, EventId, Role, UserId, Utorid

from .base import Service
from .role_gate import RoleGate
from .user_service import UserService


class EventService(Service):
    """Domain service for events and their points pools.

    The only writer of ``points_total``, ``points_remain`` and
    ``points_awarded``.
    """

    def __init__(
        self,
        event_repository: EventRepository,
        user_service: UserService,
        role_gate: RoleGate,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize event service.

        Args:
            event_repository: Event repository
            user_service: User domain service
            role_gate: Role checks
            unit_of_work: Atomic unit factory
        """
        self.event_repository = event_repository
        self.user_service = user_service
        self.role_gate = role_gate
        self.unit_of_work = unit_of_work

    async def get_event(self, event_id: EventId) -> Event:
        """Get event by ID.

        Raises:
            NotFoundError: If event not found
        """
        event = await self.event_repository.find_by_id(event_id)
        if not event:
            logfire.warn("Event not found", event_id=str(event_id))
            raise NotFoundError("Event", str(event_id))
        return event

    async def organizer_ids(self, event_id: EventId) -> set[UserId]:
        """IDs of the event's organizers."""
        return await self.event_repository.find_organizer_ids(event_id)

    async def guests(self, event_id: EventId) -> list[EventGuest]:
        """The event's guest list."""
        return await self.event_repository.find_guests(event_id)

    async def find_guest(
        self, event_id: EventId, user_id: UserId
    ) -> Optional[EventGuest]:
        """A user's guest entry, if any."""
        return await self.event_repository.find_guest(event_id, user_id)

    async def create_event(
        self,
        actor: Actor,
        name: str,
        start_time: datetime,
        end_time: datetime,
        points: int,
        description: str = "",
        location: str = "",
        capacity: Optional[int] = None,
    ) -> Event:
        """Create an unpublished event with a full points pool.

        Raises:
            ForbiddenError: If the actor is below manager
            ValidationError: If the window or pool size is invalid
        """
        with logfire.span("event_service.create_event", name=name):
            self.role_gate.require(actor, Role.MANAGER)
            if start_time >= end_time:
                raise ValidationError("Start time must be before end time")
            if points < 0:
                raise ValidationError("Invalid points")
            if capacity is not None and capacity <= 0:
                raise ValidationError("Invalid capacity")

            event = Event(
                id=EventId(uuid4()),
                name=name,
                description=description,
                location=location,
                start_time=start_time,
                end_time=end_time,
                capacity=capacity,
                points_total=points,
                points_remain=points,
                points_awarded=0,
            )
            saved = await self.event_repository.save(event)
            logfire.info("Event created", event_id=str(saved.id), points=points)
            return saved

    async def add_organizer(
        self, actor: Actor, event_id: EventId, utorid: Utorid
    ) -> Event:
        """Make a verified user an organizer of an event.

        Raises:
            ForbiddenError: If the actor is below manager
            NotFoundError: If the event or user is not found
            BusinessRuleViolationError: If the event has ended or the user
                is a guest
            ValidationError: If the user is not verified
            AlreadyExistsError: If the user already organizes the event
        """
        with logfire.span(
            "event_service.add_organizer", event_id=str(event_id), utorid=utorid.root
        ):
            self.role_gate.require(actor, Role.MANAGER)
            event = await self.get_event(event_id)
            if event.has_ended(utc_now()):
                raise BusinessRuleViolationError("Event has ended")

            user = await self.user_service.get_by_utorid(utorid)
            if not user.verified:
                raise ValidationError(
                    "User must be verified before becoming an organizer"
                )
            if await self.event_repository.find_guest(event_id, user.id):
                raise BusinessRuleViolationError("User is already a guest")

            try:
                async with self.unit_of_work.atomic():
                    await self.event_repository.add_organizer(event_id, user.id)
            except IntegrityError:
                raise AlreadyExistsError("Organizer", utorid.root)
            logfire.info(
                "Organizer added", event_id=str(event_id), user_id=str(user.id)
            )
            return event

    async def add_guest(
        self, actor: Actor, event_id: EventId, utorid: Utorid
    ) -> EventGuest:
        """Put a verified user on an event's guest list.

        Raises:
            ForbiddenError: If the actor is neither a manager nor an organizer
            NotFoundError: If the event or user is not found
            BusinessRuleViolationError: If the event has ended or is full,
                or the user organizes it
            ValidationError: If the user is not verified
            AlreadyExistsError: If the user is already a guest
        """
        with logfire.span(
            "event_service.add_guest", event_id=str(event_id), utorid=utorid.root
        ):
            event = await self.get_event(event_id)
            organizers = await self.event_repository.find_organizer_ids(event_id)
            self.role_gate.require_manager_or_organizer(actor, organizers)

            user = await self.user_service.get_by_utorid(utorid)
            return await self._admit(event, user, organizers)

    async def rsvp(self, actor: Actor, event_id: EventId) -> EventGuest:
        """Put the actor on a published event's guest list.

        Raises:
            NotFoundError: If the event is missing or unpublished
            BusinessRuleViolationError: If the event has ended or is full,
                or the actor organizes it
            ValidationError: If the actor is not verified
            AlreadyExistsError: If the actor is already a guest
        """
        with logfire.span(
            "event_service.rsvp", event_id=str(event_id), user_id=str(actor.user_id)
        ):
            event = await self.get_event(event_id)
            if not event.published:
                raise NotFoundError("Event", str(event_id))
            organizers = await self.event_repository.find_organizer_ids(event_id)
            user = await self.user_service.get_by_id(actor.user_id)
            return await self._admit(event, user, organizers)

    async def _admit(
        self, event: Event, user: User, organizers: set[UserId]
    ) -> EventGuest:
        if event.has_ended(utc_now()):
            raise BusinessRuleViolationError("Event has ended")
        if not user.verified:
            raise ValidationError("User must be verified before being added to events")

        guests = await self.event_repository.find_guests(event.id)
        if any(g.user_id == user.id for g in guests):
            raise AlreadyExistsError("Guest", user.utorid.root)
        if event.capacity is not None and len(guests) + 1 > event.capacity:
            raise BusinessRuleViolationError("Event is full")
        if user.id in organizers:
            raise BusinessRuleViolationError("User is an organizer")

        try:
            async with self.unit_of_work.atomic():
                guest = await self.event_repository.add_guest(
                    EventGuest(event_id=event.id, user_id=user.id)
                )
        except IntegrityError:
            logfire.warn(
                "Duplicate guest", event_id=str(event.id), user_id=str(user.id)
            )
            raise AlreadyExistsError("Guest", user.utorid.root)
        logfire.info(
            "Guest added",
            event_id=str(event.id),
            user_id=str(user.id),
            guests=len(guests) + 1,
        )
        return guest

    async def leave(self, actor: Actor, event_id: EventId) -> None:
        """Take the actor off an event's guest list.

        Raises:
            NotFoundError: If the event is missing or the actor is not a guest
            BusinessRuleViolationError: If the event has ended
        """
        with logfire.span(
            "event_service.leave", event_id=str(event_id), user_id=str(actor.user_id)
        ):
            event = await self.get_event(event_id)
            if not await self.event_repository.find_guest(event_id, actor.user_id):
                raise NotFoundError("Guest", str(actor.user_id))
            if event.has_ended(utc_now()):
                raise BusinessRuleViolationError("Event has ended")
            await self.event_repository.remove_guest(event_id, actor.user_id)
            logfire.info(
                "Guest left", event_id=str(event_id), user_id=str(actor.user_id)
            )

    async def remove_guest(
        self, actor: Actor, event_id: EventId, user_id: UserId
    ) -> None:
        """Take a user off an event's guest list.

        Raises:
            ForbiddenError: If the actor is below manager
            NotFoundError: If the user is not a guest of the event
        """
        with logfire.span(
            "event_service.remove_guest", event_id=str(event_id), user_id=str(user_id)
        ):
            self.role_gate.require(actor, Role.MANAGER)
            if not await self.event_repository.remove_guest(event_id, user_id):
                raise NotFoundError("Guest", str(user_id))
            logfire.info("Guest removed", event_id=str(event_id), user_id=str(user_id))

    async def remove_organizer(
        self, actor: Actor, event_id: EventId, user_id: UserId
    ) -> None:
        """Remove one of an event's organizers; the last one stays.

        Raises:
            ForbiddenError: If the actor is below manager
            NotFoundError: If the user does not organize the event
            BusinessRuleViolationError: If the user is the only organizer
        """
        with logfire.span(
            "event_service.remove_organizer",
            event_id=str(event_id),
            user_id=str(user_id),
        ):
            self.role_gate.require(actor, Role.MANAGER)
            organizers = await self.event_repository.find_organizer_ids(event_id)
            if user_id not in organizers:
                raise NotFoundError("Organizer", str(user_id))
            if len(organizers) <= 1:
                raise BusinessRuleViolationError(
                    "Event must have at least one organizer"
                )
            await self.event_repository.remove_organizer(event_id, user_id)
            logfire.info(
                "Organizer removed", event_id=str(event_id), user_id=str(user_id)
            )

    async def publish(self, actor: Actor, event_id: EventId) -> Event:
        """Make an event visible to every user.

        Raises:
            ForbiddenError: If the actor is below manager
            NotFoundError: If event not found
        """
        with logfire.span("event_service.publish", event_id=str(event_id)):
            self.role_gate.require(actor, Role.MANAGER)
            event = await self.event_repository.set_published(event_id)
            if event is None:
                raise NotFoundError("Event", str(event_id))
            logfire.info("Event published", event_id=str(event_id))
            return event

    async def get_visible_event(self, actor: Actor, event_id: EventId) -> Event:
        """Get an event the actor may see.

        Unpublished events are only visible to managers and organizers.

        Raises:
            NotFoundError: If the event is missing or hidden from the actor
        """
        event = await self.get_event(event_id)
        if not event.published and not self.role_gate.allows(actor, Role.MANAGER):
            if actor.user_id not in await self.organizer_ids(event_id):
                raise NotFoundError("Event", str(event_id))
        return event

    async def list_events(
        self,
        actor: Actor,
        name: Optional[str] = None,
        location: Optional[str] = None,
        started: Optional[bool] = None,
        ended: Optional[bool] = None,
        show_full: bool = False,
        published: Optional[bool] = None,
    ) -> list[tuple[Event, int]]:
        """List events with their guest counts, earliest start first.

        Users below manager only see published events, and ``published``
        is ignored for them. Full events are left out unless ``show_full``.

        Args:
            actor: Caller
            name: Substring of the event name
            location: Substring of the location
            started: Only events that have (or have not) started
            ended: Only events that have (or have not) ended
            show_full: Include events at capacity
            published: Managers only: restrict by published flag

        Returns:
            Pairs of event and number of guests

        Raises:
            ValidationError: If both ``started`` and ``ended`` are given
        """
        with logfire.span("event_service.list_events", name=name, location=location):
            if started is not None and ended is not None:
                raise ValidationError("Cannot specify both started and ended")
            if not self.role_gate.allows(actor, Role.MANAGER):
                published = True

            now = utc_now()
            events = await self.event_repository.find_all(name, location, published)
            if started is not None:
                events = [e for e in events if (e.start_time <= now) == started]
            if ended is not None:
                events = [e for e in events if e.has_ended(now) == ended]

            counts = await self.event_repository.count_guests([e.id for e in events])
            listed = [
                (event, counts[event.id])
                for event in events
                if show_full
                or event.capacity is None
                or counts[event.id] < event.capacity
            ]
            logfire.info("Events listed", count=len(listed))
            return listed

    async def set_points_total(
        self, actor: Actor, event_id: EventId, total: int
    ) -> Event:
        """Resize an event's pool; the remaining points move by the same delta.

        Raises:
            ForbiddenError: If the actor is below manager
            NotFoundError: If event not found
            ValidationError: If ``total`` is negative
            BusinessRuleViolationError: If ``total`` is below what was awarded
        """
        with logfire.span(
            "event_service.set_points_total", event_id=str(event_id), total=total
        ):
            self.role_gate.require(actor, Role.MANAGER)
            if total < 0:
                raise ValidationError("Invalid points")

            event = await self.get_event(event_id)
            updated = await self.event_repository.set_points_total(event_id, total)
            if updated is None:
                logfire.warn(
                    "Pool shrink below awarded refused",
                    event_id=str(event_id),
                    awarded=event.points_awarded,
                    total=total,
                )
                raise BusinessRuleViolationError(
                    "Cannot reduce points below awarded amount"
                )
            logfire.info(
                "Event pool resized",
                event_id=str(event_id),
                total=updated.points_total,
                remain=updated.points_remain,
            )
            return updated

    async def draw(self, event_id: EventId, amount: int) -> Event:
        """Move ``amount`` from the event's remaining pool to awarded.

        Raises:
            NotFoundError: If event not found
            InsufficientEventPointsError: If the pool cannot cover ``amount``
        """
        with logfire.span("event_service.draw", event_id=str(event_id), amount=amount):
            updated = await self.event_repository.draw_points(event_id, amount)
            if updated is not None:
                logfire.info(
                    "Event points drawn",
                    event_id=str(event_id),
                    amount=amount,
                    remain=updated.points_remain,
                )
                return updated

            event = await self.get_event(event_id)
            raise InsufficientEventPointsError(
                str(event_id), event.points_remain, amount
            )

    async def confirm_guests(
        self, event_id: EventId, user_ids: Sequence[UserId]
    ) -> None:
        """Mark guests as confirmed once they have been awarded."""
        await self.event_repository.confirm_guests(event_id, user_ids)
