"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from points.domain.model.user import User
from points.domain.value import UserId, Utorid


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_utorid(self, utorid: Utorid) -> Optional[User]:
        """Find a user by UTORid.

        Args:
            utorid: The user's campus identity

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once (batch query).

        Args:
            user_ids: IDs to look up; unknown IDs are skipped

        Returns:
            Users found, in no particular order
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Updates write profile, role and flags only. The ``points`` column is
        written on insert and afterwards only through ``adjust_points``.

        Args:
            user: The user to save

        Returns:
            The saved user

        Raises:
            IntegrityError: If the UTORid is already taken by another user
        """
        pass

    @abstractmethod
    async def adjust_points(self, user_id: UserId, delta: int) -> Optional[int]:
        """Atomically add ``delta`` to a user's balance.

        The update only applies when the resulting balance is non-negative.

        Args:
            user_id: The user's unique identifier
            delta: Signed number of points to add

        Returns:
            The new balance, or None if the user is missing or the balance
            would go negative
        """
        pass
