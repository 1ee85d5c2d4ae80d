"""Unit tests for the in-memory unit of work and race guards."""

import pytest
from sqlalchemy.exc import IntegrityError

from points.domain.model import EventGuest
from points.persistence.repository.inmemory import (
    InMemoryEventRepository,
    InMemoryPromotionRepository,
    InMemoryStore,
    InMemoryUnitOfWork,
    InMemoryUserRepository,
)
from tests.conftest import make_event, make_promotion, make_user


class TestInMemoryUnitOfWork:
    """Tests for snapshot and restore on failure."""

    @pytest.mark.asyncio
    async def test_failed_unit_restores_every_table(self):
        # Arrange
        store = InMemoryStore()
        users = InMemoryUserRepository(store)
        promotions = InMemoryPromotionRepository(store)
        uow = InMemoryUnitOfWork(store)
        user = await users.save(make_user("alice001", points=10))
        promotion = await promotions.save(make_promotion(points=5))

        # Act
        with pytest.raises(RuntimeError):
            async with uow.atomic():
                await users.adjust_points(user.id, 50)
                await promotions.record_use(user.id, promotion.id)
                raise RuntimeError("boom")

        # Assert
        assert (await users.find_by_id(user.id)).points == 10
        assert await promotions.find_used_ids(user.id) == set()

    @pytest.mark.asyncio
    async def test_successful_unit_keeps_changes(self):
        store = InMemoryStore()
        users = InMemoryUserRepository(store)
        uow = InMemoryUnitOfWork(store)
        user = await users.save(make_user("alice001"))

        async with uow.atomic():
            await users.adjust_points(user.id, 30)

        assert (await users.find_by_id(user.id)).points == 30

    @pytest.mark.asyncio
    async def test_nested_failure_only_undoes_inner_unit(self):
        store = InMemoryStore()
        users = InMemoryUserRepository(store)
        uow = InMemoryUnitOfWork(store)
        user = await users.save(make_user("alice001"))

        async with uow.atomic():
            await users.adjust_points(user.id, 5)
            with pytest.raises(ValueError):
                async with uow.atomic():
                    await users.adjust_points(user.id, 100)
                    raise ValueError

        assert (await users.find_by_id(user.id)).points == 5


class TestRaceGuards:
    """Tests for the conditional updates and unique keys."""

    @pytest.mark.asyncio
    async def test_balance_never_goes_negative(self):
        users = InMemoryUserRepository(InMemoryStore())
        user = await users.save(make_user("alice001", points=10))

        assert await users.adjust_points(user.id, -11) is None
        assert await users.adjust_points(user.id, -10) == 0

    @pytest.mark.asyncio
    async def test_saving_user_keeps_stored_balance(self):
        users = InMemoryUserRepository(InMemoryStore())
        user = await users.save(make_user("alice001", points=10))

        await users.save(user.model_copy(update={"points": 999, "verified": False}))

        stored = await users.find_by_id(user.id)
        assert stored.points == 10
        assert not stored.verified

    @pytest.mark.asyncio
    async def test_duplicate_utorid(self):
        users = InMemoryUserRepository(InMemoryStore())
        await users.save(make_user("alice001"))

        with pytest.raises(IntegrityError):
            await users.save(make_user("alice001"))

    @pytest.mark.asyncio
    async def test_one_time_use_recorded_once(self):
        store = InMemoryStore()
        promotions = InMemoryPromotionRepository(store)
        user = make_user("alice001")
        promotion = await promotions.save(make_promotion(points=5))

        await promotions.record_use(user.id, promotion.id)
        with pytest.raises(IntegrityError):
            await promotions.record_use(user.id, promotion.id)
        assert await promotions.count_uses(promotion.id) == 1

    @pytest.mark.asyncio
    async def test_draw_refuses_more_than_remaining(self):
        events = InMemoryEventRepository(InMemoryStore())
        event = await events.save(make_event(points=30))

        assert await events.draw_points(event.id, 40) is None
        drawn = await events.draw_points(event.id, 30)

        assert drawn.points_remain == 0
        assert drawn.points_awarded == 30

    @pytest.mark.asyncio
    async def test_resize_keeps_awarded(self):
        events = InMemoryEventRepository(InMemoryStore())
        event = await events.save(make_event(points=100, awarded=40))

        assert await events.set_points_total(event.id, 39) is None
        resized = await events.set_points_total(event.id, 60)

        assert resized.points_remain == 20
        assert resized.points_awarded == 40

    @pytest.mark.asyncio
    async def test_duplicate_guest(self):
        events = InMemoryEventRepository(InMemoryStore())
        event = await events.save(make_event())
        user = make_user("alice001")

        await events.add_guest(EventGuest(event_id=event.id, user_id=user.id))
        with pytest.raises(IntegrityError):
            await events.add_guest(EventGuest(event_id=event.id, user_id=user.id))
