"""Unit tests for the promotion use cases."""

from datetime import timedelta

import pytest

from points.application.usecase.promotion.create_promotion import (
    CreatePromotionRequest,
    CreatePromotionUseCase,
)
from points.application.usecase.promotion.delete_promotion import (
    DeletePromotionRequest,
    DeletePromotionUseCase,
)
from points.application.usecase.promotion.list_promotions import (
    ListPromotionsRequest,
    ListPromotionsUseCase,
)
from points.domain.model import utc_now
from points.domain.repository import PromotionRepository, UserRepository
from points.domain.value import PromotionType, Role
from tests.conftest import make_promotion, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestPromotionUseCases:
    """Tests for creating, listing and deleting promotions."""

    @pytest.mark.asyncio
    async def test_manager_creates_and_deletes_future_promotion(self, unit_env):
        create = await unit_env.get(CreatePromotionUseCase)
        delete = await unit_env.get(DeletePromotionUseCase)
        promotions = await unit_env.get(PromotionRepository)
        users = await unit_env.get(UserRepository)
        manager = await users.save(make_user("manager1", Role.MANAGER))
        start = utc_now() + timedelta(days=1)

        created = await create.execute(
            CreatePromotionRequest(
                actor_id=str(manager.id),
                actor_role=manager.role,
                name="Double points",
                type=PromotionType.AUTOMATIC,
                start_time=start,
                end_time=start + timedelta(days=7),
                rate=1.0,
            )
        )
        deleted = await delete.execute(
            DeletePromotionRequest(
                actor_id=str(manager.id),
                actor_role=manager.role,
                promotion_id=created.id,
            )
        )

        assert created.rate == 1.0
        assert deleted.success
        assert await promotions.find_all() == []

    @pytest.mark.asyncio
    async def test_regular_user_sees_only_unused_active_promotions(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListPromotionsUseCase)
        promotions = await unit_env.get(PromotionRepository)
        users = await unit_env.get(UserRepository)
        user = await users.save(make_user("alice001"))
        automatic = await promotions.save(make_promotion(rate=0.1))
        used = await promotions.save(make_promotion(PromotionType.ONE_TIME, points=5))
        unused = await promotions.save(
            make_promotion(PromotionType.ONE_TIME, points=10)
        )
        await promotions.save(
            make_promotion(
                rate=0.5,
                start_time=utc_now() + timedelta(days=1),
                end_time=utc_now() + timedelta(days=2),
            )
        )
        await promotions.record_use(user.id, used.id)

        # Act
        response = await use_case.execute(
            ListPromotionsRequest(actor_id=str(user.id), actor_role=user.role)
        )

        # Assert
        assert {p.id for p in response.results} == {str(automatic.id), str(unused.id)}
        assert response.count == 2

    @pytest.mark.asyncio
    async def test_manager_sees_whole_catalog(self, unit_env):
        use_case = await unit_env.get(ListPromotionsUseCase)
        promotions = await unit_env.get(PromotionRepository)
        users = await unit_env.get(UserRepository)
        manager = await users.save(make_user("manager1", Role.MANAGER))
        await promotions.save(make_promotion(rate=0.1))
        await promotions.save(
            make_promotion(
                rate=0.5,
                start_time=utc_now() + timedelta(days=1),
                end_time=utc_now() + timedelta(days=2),
            )
        )

        response = await use_case.execute(
            ListPromotionsRequest(actor_id=str(manager.id), actor_role=manager.role)
        )

        assert response.count == 2
