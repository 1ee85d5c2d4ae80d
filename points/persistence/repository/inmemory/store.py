"""Shared state for the in-memory repositories."""

import copy
from dataclasses import dataclass, field
from typing import Any

from points.domain.model import Event, EventGuest, Promotion, Transaction, User
from points.domain.value import EventId, PromotionId, TransactionId, UserId


@dataclass
class InMemoryStore:
    """All tables of one in-memory database.

    Repositories of one request share a store so that the in-memory unit of
    work can snapshot and restore every table at once.
    """

    users: dict[UserId, User] = field(default_factory=dict)
    transactions: dict[TransactionId, Transaction] = field(default_factory=dict)
    promotions: dict[PromotionId, Promotion] = field(default_factory=dict)
    promotion_uses: set[tuple[UserId, PromotionId]] = field(default_factory=set)
    events: dict[EventId, Event] = field(default_factory=dict)
    event_organizers: set[tuple[EventId, UserId]] = field(default_factory=set)
    event_guests: dict[tuple[EventId, UserId], EventGuest] = field(
        default_factory=dict
    )

    def snapshot(self) -> dict[str, Any]:
        """Copy every table."""
        return copy.deepcopy(vars(self))

    def restore(self, state: dict[str, Any]) -> None:
        """Replace every table with a previous snapshot."""
        for name, table in state.items():
            setattr(self, name, table)
