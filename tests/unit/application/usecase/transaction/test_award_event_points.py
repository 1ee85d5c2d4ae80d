"""Unit tests for AwardEventPointsUseCase."""

from datetime import timedelta
from uuid import UUID

import pytest

from points.application.usecase.event.add_guest import AddGuestRequest, AddGuestUseCase
from points.application.usecase.event.create_event import (
    CreateEventRequest,
    CreateEventUseCase,
)
from points.application.usecase.transaction.award_event_points import (
    AwardEventPointsRequest,
    AwardEventPointsUseCase,
)
from points.domain.error import InsufficientEventPointsError
from points.domain.model import utc_now
from points.domain.repository import (
    EventRepository,
    TransactionRepository,
    UserRepository,
)
from points.domain.value import EventId, Role, Utorid
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _event_with_guests(unit_env, manager, points, utorids):
    create = await unit_env.get(CreateEventUseCase)
    add_guest = await unit_env.get(AddGuestUseCase)
    users = await unit_env.get(UserRepository)
    now = utc_now()
    event = await create.execute(
        CreateEventRequest(
            actor_id=str(manager.id),
            actor_role=manager.role,
            name="Hackathon",
            start_time=now,
            end_time=now + timedelta(days=1),
            points=points,
        )
    )
    for utorid in utorids:
        await users.save(make_user(utorid))
        await add_guest.execute(
            AddGuestRequest(
                actor_id=str(manager.id),
                actor_role=manager.role,
                event_id=event.id,
                utorid=utorid,
            )
        )
    return event


class TestAwardEventPointsUseCase:
    """Tests for AwardEventPointsUseCase."""

    @pytest.mark.asyncio
    async def test_award_every_guest(self, unit_env):
        # Arrange
        use_case = await unit_env.get(AwardEventPointsUseCase)
        events = await unit_env.get(EventRepository)
        users = await unit_env.get(UserRepository)
        manager = await users.save(make_user("manager1", Role.MANAGER))
        event = await _event_with_guests(
            unit_env, manager, 50, ["guest001", "guest002"]
        )

        # Act
        response = await use_case.execute(
            AwardEventPointsRequest(
                actor_id=str(manager.id),
                actor_role=manager.role,
                event_id=event.id,
                amount=20,
            )
        )

        # Assert
        assert response.total == 40
        assert sorted(t.utorid for t in response.transactions) == [
            "guest001",
            "guest002",
        ]
        assert all(t.remark == "Hackathon" for t in response.transactions)
        stored = await events.find_by_id(EventId(UUID(event.id)))
        assert stored.points_remain == 10

    @pytest.mark.asyncio
    async def test_pool_too_small(self, unit_env):
        """Ten points each for four guests from a pool of thirty awards nobody."""
        # Arrange
        use_case = await unit_env.get(AwardEventPointsUseCase)
        events = await unit_env.get(EventRepository)
        transactions = await unit_env.get(TransactionRepository)
        users = await unit_env.get(UserRepository)
        manager = await users.save(make_user("manager1", Role.MANAGER))
        guest_utorids = ["guest001", "guest002", "guest003", "guest004"]
        event = await _event_with_guests(unit_env, manager, 30, guest_utorids)

        # Act
        with pytest.raises(InsufficientEventPointsError):
            await use_case.execute(
                AwardEventPointsRequest(
                    actor_id=str(manager.id),
                    actor_role=manager.role,
                    event_id=event.id,
                    amount=10,
                )
            )

        # Assert
        stored = await events.find_by_id(EventId(UUID(event.id)))
        assert stored.points_remain == 30
        assert stored.points_awarded == 0
        for utorid in guest_utorids:
            guest = await users.find_by_utorid(Utorid(utorid))
            assert guest.points == 0
            assert await transactions.find_by_user(guest.id) == []
            assert not (await events.find_guest(stored.id, guest.id)).confirmed
