"""Points ledger domain service."""

import logfire

from points.domain.error import InsufficientPointsError, NotFoundError
from points.domain.repository import UserRepository
from points.domain.value import UserId

from .base import Service


class LedgerService(Service):
    """The only writer of user point balances.

    Callers run ``adjust_balance`` inside the same atomic unit as the
    transaction row that justifies the change.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize ledger service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def balance(self, user_id: UserId) -> int:
        """Read a user's current balance.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        return user.points

    async def adjust_balance(self, user_id: UserId, delta: int) -> int:
        """Apply a signed delta to a user's balance.

        The storage update is conditional on the result staying
        non-negative, so a debit racing another debit cannot overdraw.

        Args:
            user_id: User ID
            delta: Points to add (negative to debit)

        Returns:
            The new balance

        Raises:
            NotFoundError: If user not found
            InsufficientPointsError: If the balance would go negative
        """
        with logfire.span(
            "ledger_service.adjust_balance", user_id=str(user_id), delta=delta
        ):
            new_balance = await self.user_repository.adjust_points(user_id, delta)
            if new_balance is not None:
                logfire.info(
                    "Balance adjusted",
                    user_id=str(user_id),
                    delta=delta,
                    balance=new_balance,
                )
                return new_balance

            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn(
                    "Balance adjustment for unknown user", user_id=str(user_id)
                )
                raise NotFoundError("User", str(user_id))
            logfire.warn(
                "Balance would go negative",
                user_id=str(user_id),
                balance=user.points,
                delta=delta,
            )
            raise InsufficientPointsError(str(user_id), user.points, -delta)
