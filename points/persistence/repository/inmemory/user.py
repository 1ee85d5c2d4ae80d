"""In-memory user repository for testing."""

from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from points.domain.model import User
from points.domain.repository import UserRepository
from points.domain.value import UserId, Utorid

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self.store.users.get(user_id)

    async def find_by_utorid(self, utorid: Utorid) -> Optional[User]:
        """Find a user by UTORid."""
        for user in self.store.users.values():
            if user.utorid == utorid:
                return user
        return None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once."""
        return [self.store.users[i] for i in user_ids if i in self.store.users]

    async def save(self, user: User) -> User:
        """Save or update a user, keeping the stored balance on update.

        Raises:
            IntegrityError: If another user has the same UTORid
        """
        for other in self.store.users.values():
            if other.utorid == user.utorid and other.id != user.id:
                raise IntegrityError("Duplicate utorid", None, Exception())

        existing = self.store.users.get(user.id)
        if existing:
            user = user.model_copy(update={"points": existing.points})
        self.store.users[user.id] = user
        return user

    async def adjust_points(self, user_id: UserId, delta: int) -> Optional[int]:
        """Add ``delta`` to the balance unless it would go negative."""
        user = self.store.users.get(user_id)
        if user is None or user.points + delta < 0:
            return None
        self.store.users[user_id] = user.model_copy(
            update={"points": user.points + delta}
        )
        return user.points + delta

