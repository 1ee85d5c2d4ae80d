"""Event repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from points.domain.model.event import Event, EventGuest
from points.domain.value import EventId, UserId


class EventRepository(ABC):
    """Repository for events, their points pools, organizers and guests."""

    @abstractmethod
    async def find_by_id(self, event_id: EventId) -> Optional[Event]:
        """Find an event by ID.

        Args:
            event_id: The event's unique identifier

        Returns:
            The event if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        name: Optional[str] = None,
        location: Optional[str] = None,
        published: Optional[bool] = None,
    ) -> list[Event]:
        """Find events, earliest start first.

        Args:
            name: Substring of the event name
            location: Substring of the location
            published: Restrict to published or unpublished events

        Returns:
            List of events
        """
        pass

    @abstractmethod
    async def save(self, event: Event) -> Event:
        """Insert a new event.

        Args:
            event: The event to save

        Returns:
            The saved event
        """
        pass

    @abstractmethod
    async def set_published(self, event_id: EventId) -> Optional[Event]:
        """Publish an event.

        Returns:
            The updated event, or None if the event is missing
        """
        pass

    @abstractmethod
    async def draw_points(self, event_id: EventId, amount: int) -> Optional[Event]:
        """Atomically move ``amount`` from remaining to awarded.

        Conditional on ``points_remain >= amount``.

        Args:
            event_id: The event's ID
            amount: Points to draw from the pool

        Returns:
            The updated event, or None if the event is missing or the pool
            is too small
        """
        pass

    @abstractmethod
    async def set_points_total(self, event_id: EventId, total: int) -> Optional[Event]:
        """Atomically resize the pool, moving ``points_remain`` by the same delta.

        Conditional on ``points_remain`` staying non-negative.

        Args:
            event_id: The event's ID
            total: New ``points_total``

        Returns:
            The updated event, or None if the event is missing or the new
            total is below what was already awarded
        """
        pass

    @abstractmethod
    async def find_guests(self, event_id: EventId) -> list[EventGuest]:
        """Find all guests of an event."""
        pass

    @abstractmethod
    async def find_guest(
        self, event_id: EventId, user_id: UserId
    ) -> Optional[EventGuest]:
        """Find one guest entry.

        Returns:
            The guest entry if the user is on the list, None otherwise
        """
        pass

    @abstractmethod
    async def add_guest(self, guest: EventGuest) -> EventGuest:
        """Add a user to the guest list.

        Args:
            guest: The guest entry

        Returns:
            The saved entry

        Raises:
            IntegrityError: If the user is already a guest (duplicate)
        """
        pass

    @abstractmethod
    async def confirm_guests(
        self, event_id: EventId, user_ids: Sequence[UserId]
    ) -> None:
        """Mark guests as confirmed after they were awarded points."""
        pass

    @abstractmethod
    async def find_organizer_ids(self, event_id: EventId) -> set[UserId]:
        """Find IDs of an event's organizers."""
        pass

    @abstractmethod
    async def add_organizer(self, event_id: EventId, user_id: UserId) -> None:
        """Add an organizer to an event.

        Raises:
            IntegrityError: If the user is already an organizer (duplicate)
        """
        pass

    @abstractmethod
    async def remove_organizer(self, event_id: EventId, user_id: UserId) -> bool:
        """Remove an organizer from an event.

        Returns:
            True if the user was an organizer
        """
        pass

    @abstractmethod
    async def remove_guest(self, event_id: EventId, user_id: UserId) -> bool:
        """Remove a user from the guest list.

        Returns:
            True if the user was a guest
        """
        pass

    @abstractmethod
    async def count_guests(self, event_ids: Sequence[EventId]) -> dict[EventId, int]:
        """Count guests per event (batch query).

        Args:
            event_ids: Events to count; events without guests map to 0

        Returns:
            Guest count keyed by event ID
        """
        pass
