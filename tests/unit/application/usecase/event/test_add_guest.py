"""Unit tests for the event use cases."""

import pytest

from points.application.usecase.event.add_guest import AddGuestRequest, AddGuestUseCase
from points.application.usecase.event.add_organizer import (
    AddOrganizerRequest,
    AddOrganizerUseCase,
)
from points.application.usecase.event.update_event_points import (
    UpdateEventPointsRequest,
    UpdateEventPointsUseCase,
)
from points.domain.error import BusinessRuleViolationError
from points.domain.repository import EventRepository, UserRepository
from points.domain.value import Role
from tests.conftest import make_event, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestEventUseCases:
    """Tests for guest, organizer and pool use cases."""

    @pytest.mark.asyncio
    async def test_organizer_adds_guest(self, unit_env):
        # Arrange
        add_organizer = await unit_env.get(AddOrganizerUseCase)
        add_guest = await unit_env.get(AddGuestUseCase)
        events = await unit_env.get(EventRepository)
        users = await unit_env.get(UserRepository)
        manager = await users.save(make_user("manager1", Role.MANAGER))
        organizer = await users.save(make_user("organiz1"))
        guest = await users.save(make_user("guest001"))
        event = await events.save(make_event())

        # Act
        organizers = await add_organizer.execute(
            AddOrganizerRequest(
                actor_id=str(manager.id),
                actor_role=manager.role,
                event_id=str(event.id),
                utorid="organiz1",
            )
        )
        added = await add_guest.execute(
            AddGuestRequest(
                actor_id=str(organizer.id),
                actor_role=organizer.role,
                event_id=str(event.id),
                utorid="guest001",
            )
        )

        # Assert
        assert organizers.organizer_ids == [str(organizer.id)]
        assert added.user_id == str(guest.id)
        assert added.num_guests == 1

    @pytest.mark.asyncio
    async def test_pool_cannot_shrink_below_awarded(self, unit_env):
        use_case = await unit_env.get(UpdateEventPointsUseCase)
        events = await unit_env.get(EventRepository)
        users = await unit_env.get(UserRepository)
        manager = await users.save(make_user("manager1", Role.MANAGER))
        event = await events.save(make_event(points=100, awarded=60))

        with pytest.raises(BusinessRuleViolationError):
            await use_case.execute(
                UpdateEventPointsRequest(
                    actor_id=str(manager.id),
                    actor_role=manager.role,
                    event_id=str(event.id),
                    points=59,
                )
            )

        grown = await use_case.execute(
            UpdateEventPointsRequest(
                actor_id=str(manager.id),
                actor_role=manager.role,
                event_id=str(event.id),
                points=150,
            )
        )
        assert grown.points_remain == 90
        assert grown.points_awarded == 60
