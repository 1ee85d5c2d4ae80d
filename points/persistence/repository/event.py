"""PostgreSQL implementation of Event repository."""

from typing import Optional, Sequence

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from points.domain.model import Event, EventGuest
from points.domain.repository import EventRepository
from points.domain.value import EventId, UserId
from points.persistence.mappers import event_to_dict, row_to_event, row_to_event_guest
from points.persistence.tables import (
    event_guests_table,
    event_organizers_table,
    events_table,
)


class PostgresEventRepository(EventRepository):
    """PostgreSQL implementation of EventRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, event_id: EventId) -> Optional[Event]:
        """Find an event by ID."""
        stmt = select(events_table).where(events_table.c.id == event_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_event(dict(row)) if row else None

    async def find_all(
        self,
        name: Optional[str] = None,
        location: Optional[str] = None,
        published: Optional[bool] = None,
    ) -> list[Event]:
        """Find events, earliest start first."""
        stmt = select(events_table)
        if name is not None:
            stmt = stmt.where(events_table.c.name.contains(name, autoescape=True))
        if location is not None:
            stmt = stmt.where(
                events_table.c.location.contains(location, autoescape=True)
            )
        if published is not None:
            stmt = stmt.where(events_table.c.published.is_(published))
        stmt = stmt.order_by(events_table.c.start_time)
        result = await self.session.execute(stmt)
        return [row_to_event(dict(row)) for row in result.mappings().all()]

    async def save(self, event: Event) -> Event:
        """Insert a new event."""
        stmt = insert(events_table).values(**event_to_dict(event))
        await self.session.execute(stmt)
        await self.session.flush()
        return event

    async def set_published(self, event_id: EventId) -> Optional[Event]:
        """Publish an event."""
        stmt = (
            events_table.update()
            .where(events_table.c.id == event_id)
            .values(published=True)
            .returning(*events_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_event(dict(row)) if row else None

    async def draw_points(self, event_id: EventId, amount: int) -> Optional[Event]:
        """Move points from remaining to awarded if the pool covers them."""
        stmt = (
            events_table.update()
            .where(
                events_table.c.id == event_id,
                events_table.c.points_remain >= amount,
            )
            .values(
                points_remain=events_table.c.points_remain - amount,
                points_awarded=events_table.c.points_awarded + amount,
            )
            .returning(*events_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_event(dict(row)) if row else None

    async def set_points_total(self, event_id: EventId, total: int) -> Optional[Event]:
        """Resize the pool unless it would drop below what was awarded."""
        stmt = (
            events_table.update()
            .where(
                events_table.c.id == event_id,
                events_table.c.points_awarded <= total,
            )
            .values(
                points_total=total,
                points_remain=total - events_table.c.points_awarded,
            )
            .returning(*events_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_event(dict(row)) if row else None

    async def find_guests(self, event_id: EventId) -> list[EventGuest]:
        """Find all guests of an event."""
        stmt = select(event_guests_table).where(
            event_guests_table.c.event_id == event_id
        )
        result = await self.session.execute(stmt)
        return [row_to_event_guest(dict(row)) for row in result.mappings().all()]

    async def find_guest(
        self, event_id: EventId, user_id: UserId
    ) -> Optional[EventGuest]:
        """Find one guest entry."""
        stmt = select(event_guests_table).where(
            event_guests_table.c.event_id == event_id,
            event_guests_table.c.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_event_guest(dict(row)) if row else None

    async def add_guest(self, guest: EventGuest) -> EventGuest:
        """Add a guest; the unique constraint rejects duplicates."""
        stmt = insert(event_guests_table).values(**guest.model_dump())
        await self.session.execute(stmt)
        await self.session.flush()
        return guest

    async def confirm_guests(
        self, event_id: EventId, user_ids: Sequence[UserId]
    ) -> None:
        """Mark guests as confirmed."""
        if not user_ids:
            return
        stmt = (
            event_guests_table.update()
            .where(
                event_guests_table.c.event_id == event_id,
                event_guests_table.c.user_id.in_(list(user_ids)),
            )
            .values(confirmed=True)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def find_organizer_ids(self, event_id: EventId) -> set[UserId]:
        """Find IDs of an event's organizers."""
        stmt = select(event_organizers_table.c.user_id).where(
            event_organizers_table.c.event_id == event_id
        )
        result = await self.session.execute(stmt)
        return {UserId(user_id) for user_id in result.scalars().all()}

    async def add_organizer(self, event_id: EventId, user_id: UserId) -> None:
        """Add an organizer; the unique constraint rejects duplicates."""
        stmt = insert(event_organizers_table).values(
            event_id=event_id, user_id=user_id
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def remove_organizer(self, event_id: EventId, user_id: UserId) -> bool:
        """Remove an organizer."""
        stmt = delete(event_organizers_table).where(
            event_organizers_table.c.event_id == event_id,
            event_organizers_table.c.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def remove_guest(self, event_id: EventId, user_id: UserId) -> bool:
        """Remove a guest."""
        stmt = delete(event_guests_table).where(
            event_guests_table.c.event_id == event_id,
            event_guests_table.c.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def count_guests(self, event_ids: Sequence[EventId]) -> dict[EventId, int]:
        """Count guests per event in one grouped query."""
        counts = {event_id: 0 for event_id in event_ids}
        if not event_ids:
            return counts
        stmt = (
            select(event_guests_table.c.event_id, func.count())
            .where(event_guests_table.c.event_id.in_(list(event_ids)))
            .group_by(event_guests_table.c.event_id)
        )
        result = await self.session.execute(stmt)
        for event_id, count in result.all():
            counts[EventId(event_id)] = count
        return counts
