"""In-memory event repository for testing."""

from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from points.domain.model import Event, EventGuest
from points.domain.repository import EventRepository
from points.domain.value import EventId, UserId

from .store import InMemoryStore


class InMemoryEventRepository(EventRepository):
    """In-memory implementation of EventRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, event_id: EventId) -> Optional[Event]:
        """Find an event by ID."""
        return self.store.events.get(event_id)

    async def find_all(
        self,
        name: Optional[str] = None,
        location: Optional[str] = None,
        published: Optional[bool] = None,
    ) -> list[Event]:
        """Find events, earliest start first."""
        events = [
            e
            for e in self.store.events.values()
            if (name is None or name in e.name)
            and (location is None or location in e.location)
            and (published is None or e.published == published)
        ]
        return sorted(events, key=lambda e: e.start_time)

    async def save(self, event: Event) -> Event:
        """Insert or replace an event."""
        self.store.events[event.id] = event
        return event

    async def set_published(self, event_id: EventId) -> Optional[Event]:
        """Publish an event."""
        event = self.store.events.get(event_id)
        if event is None:
            return None
        updated = event.model_copy(update={"published": True})
        self.store.events[event_id] = updated
        return updated

    async def draw_points(self, event_id: EventId, amount: int) -> Optional[Event]:
        """Move points from remaining to awarded if the pool covers them."""
        event = self.store.events.get(event_id)
        if event is None or event.points_remain < amount:
            return None
        updated = event.model_copy(
            update={
                "points_remain": event.points_remain - amount,
                "points_awarded": event.points_awarded + amount,
            }
        )
        self.store.events[event_id] = updated
        return updated

    async def set_points_total(self, event_id: EventId, total: int) -> Optional[Event]:
        """Resize the pool unless it would drop below what was awarded."""
        event = self.store.events.get(event_id)
        if event is None or total < event.points_awarded:
            return None
        updated = event.model_copy(
            update={
                "points_total": total,
                "points_remain": total - event.points_awarded,
            }
        )
        self.store.events[event_id] = updated
        return updated

    async def find_guests(self, event_id: EventId) -> list[EventGuest]:
        """Find all guests of an event."""
        return [g for (e, _), g in self.store.event_guests.items() if e == event_id]

    async def find_guest(
        self, event_id: EventId, user_id: UserId
    ) -> Optional[EventGuest]:
        """Find one guest entry."""
        return self.store.event_guests.get((event_id, user_id))

    async def add_guest(self, guest: EventGuest) -> EventGuest:
        """Add a guest.

        Raises:
            IntegrityError: If the user is already a guest (duplicate)
        """
        key = (guest.event_id, guest.user_id)
        if key in self.store.event_guests:
            raise IntegrityError("Duplicate guest", None, Exception())
        self.store.event_guests[key] = guest
        return guest

    async def confirm_guests(
        self, event_id: EventId, user_ids: Sequence[UserId]
    ) -> None:
        """Mark guests as confirmed."""
        for user_id in user_ids:
            guest = self.store.event_guests.get((event_id, user_id))
            if guest:
                self.store.event_guests[(event_id, user_id)] = guest.model_copy(
                    update={"confirmed": True}
                )

    async def find_organizer_ids(self, event_id: EventId) -> set[UserId]:
        """Find IDs of an event's organizers."""
        return {u for e, u in self.store.event_organizers if e == event_id}

    async def add_organizer(self, event_id: EventId, user_id: UserId) -> None:
        """Add an organizer.

        Raises:
            IntegrityError: If the user is already an organizer (duplicate)
        """
        key = (event_id, user_id)
        if key in self.store.event_organizers:
            raise IntegrityError("Duplicate organizer", None, Exception())
        self.store.event_organizers.add(key)

    async def remove_organizer(self, event_id: EventId, user_id: UserId) -> bool:
        """Remove an organizer."""
        key = (event_id, user_id)
        if key not in self.store.event_organizers:
            return False
        self.store.event_organizers.discard(key)
        return True

    async def remove_guest(self, event_id: EventId, user_id: UserId) -> bool:
        """Remove a guest."""
        return self.store.event_guests.pop((event_id, user_id), None) is not None

    async def count_guests(self, event_ids: Sequence[EventId]) -> dict[EventId, int]:
        """Count guests per event."""
        counts = {event_id: 0 for event_id in event_ids}
        for event_id, _ in self.store.event_guests:
            if event_id in counts:
                counts[event_id] += 1
        return counts
