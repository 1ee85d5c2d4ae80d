"""Role-based capability checks."""

from collections.abc import Collection

import logfire

from points.domain.error import ForbiddenError
from points.domain.value import Actor, Role, UserId

from .base import Service


class RoleGate(Service):
    """Pure capability checks over the role ordering.

    ``regular < cashier < manager < superuser``; every check holds for the
    named role and anything above it.
    """

    def allows(self, actor: Actor, minimum: Role) -> bool:
        """Whether the actor's role is at least ``minimum``."""
        return actor.role.at_least(minimum)

    def require(self, actor: Actor, minimum: Role) -> None:
        """Require the actor's role to be at least ``minimum``.

        Raises:
            ForbiddenError: If the role is below ``minimum``
        """
        if not self.allows(actor, minimum):
            logfire.warn(
                "Role check failed",
                user_id=str(actor.user_id),
                role=actor.role.value,
                required=minimum.value,
            )
            raise ForbiddenError(f"Requires role {minimum.value} or higher")

    def require_self_or(self, actor: Actor, owner_id: UserId, minimum: Role) -> None:
        """Require the actor to be ``owner_id`` or hold at least ``minimum``.

        Raises:
            ForbiddenError: If neither holds
        """
        if actor.user_id == owner_id:
            return
        self.require(actor, minimum)

    def require_manager_or_organizer(
        self, actor: Actor, organizer_ids: Collection[UserId]
    ) -> None:
        """Require a manager (or above) or one of the event's organizers.

        Raises:
            ForbiddenError: If the actor is neither
        """
        if self.allows(actor, Role.MANAGER) or actor.user_id in organizer_ids:
            return
        logfire.warn(
            "Organizer check failed",
            user_id=str(actor.user_id),
            role=actor.role.value,
        )
        raise ForbiddenError("Requires manager role or event organizer")
