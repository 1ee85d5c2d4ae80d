"""Unit tests for RoleGate."""

from uuid import uuid4

import pytest

from points.domain.error import ForbiddenError
from points.domain.service import RoleGate
from points.domain.value import Actor, Role, UserId


def _actor(role: Role) -> Actor:
    return Actor(user_id=UserId(uuid4()), role=role)


class TestRoleOrdering:
    """Tests for the role ordering."""

    @pytest.mark.parametrize(
        "role, minimum, allowed",
        [
            (Role.REGULAR, Role.REGULAR, True),
            (Role.REGULAR, Role.CASHIER, False),
            (Role.CASHIER, Role.CASHIER, True),
            (Role.CASHIER, Role.MANAGER, False),
            (Role.MANAGER, Role.CASHIER, True),
            (Role.SUPERUSER, Role.MANAGER, True),
        ],
    )
    def test_allows_role_and_above(self, role, minimum, allowed):
        assert RoleGate().allows(_actor(role), minimum) is allowed

    def test_require_raises_below_minimum(self):
        with pytest.raises(ForbiddenError, match="manager"):
            RoleGate().require(_actor(Role.CASHIER), Role.MANAGER)


class TestOwnershipChecks:
    """Tests for self-or-role and organizer checks."""

    def test_owner_passes_without_role(self):
        actor = _actor(Role.REGULAR)

        RoleGate().require_self_or(actor, actor.user_id, Role.MANAGER)

    def test_other_user_needs_role(self):
        with pytest.raises(ForbiddenError):
            RoleGate().require_self_or(
                _actor(Role.REGULAR), UserId(uuid4()), Role.CASHIER
            )

    def test_organizer_passes_without_manager_role(self):
        actor = _actor(Role.REGULAR)

        RoleGate().require_manager_or_organizer(actor, {actor.user_id})

    def test_non_organizer_regular_is_forbidden(self):
        with pytest.raises(ForbiddenError):
            RoleGate().require_manager_or_organizer(_actor(Role.CASHIER), set())

    def test_manager_passes_without_being_organizer(self):
        RoleGate().require_manager_or_organizer(_actor(Role.MANAGER), set())
