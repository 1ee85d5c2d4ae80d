"""Tests for the promotion routes."""

from datetime import timedelta

import pytest

from points.domain.model import utc_now
from points.domain.value import Role
from tests.conftest import make_promotion, make_user
from tests.harness import create_api_fixture

api_env = create_api_fixture()


class TestPromotionRoutes:
    """Tests for the promotion catalog endpoints."""

    @pytest.mark.asyncio
    async def test_create_promotion(self, api_env):
        manager = make_user("manager1", Role.MANAGER)
        await api_env.seed(manager)
        start = utc_now() + timedelta(hours=1)

        response = await api_env.client.post(
            "/promotions",
            json={
                "name": "Welcome bonus",
                "type": "one-time",
                "start_time": start.isoformat(),
                "end_time": (start + timedelta(days=30)).isoformat(),
                "points": 25,
            },
            headers=await api_env.headers(manager),
        )

        assert response.status_code == 201
        assert response.json()["type"] == "one-time"
        assert response.json()["points"] == 25

    @pytest.mark.asyncio
    async def test_started_promotion_only_extends(self, api_env):
        # Arrange
        manager = make_user("manager1", Role.MANAGER)
        promotion = make_promotion(rate=0.1)
        await api_env.seed(manager, promotion)
        headers = await api_env.headers(manager)
        url = f"/promotions/{promotion.id}"
        new_end = promotion.end_time + timedelta(days=5)

        # Act
        extended = await api_env.client.patch(
            url, json={"end_time": new_end.isoformat()}, headers=headers
        )
        rerated = await api_env.client.patch(url, json={"rate": 0.9}, headers=headers)
        deleted = await api_env.client.delete(url, headers=headers)

        # Assert
        assert extended.status_code == 200
        assert rerated.status_code == 400
        assert deleted.status_code == 403

    @pytest.mark.asyncio
    async def test_regular_user_lists_active_promotions(self, api_env):
        user = make_user("alice001")
        active = make_promotion(rate=0.1)
        upcoming = make_promotion(
            rate=0.2,
            start_time=utc_now() + timedelta(days=1),
            end_time=utc_now() + timedelta(days=2),
        )
        await api_env.seed(user, active, upcoming)

        response = await api_env.client.get(
            "/promotions", headers=await api_env.headers(user)
        )

        assert response.status_code == 200
        assert [p["id"] for p in response.json()["results"]] == [str(active.id)]

    @pytest.mark.asyncio
    async def test_regular_user_cannot_create(self, api_env):
        user = make_user("alice001")
        await api_env.seed(user)
        start = utc_now() + timedelta(hours=1)

        response = await api_env.client.post(
            "/promotions",
            json={
                "name": "Sneaky",
                "type": "automatic",
                "start_time": start.isoformat(),
                "end_time": (start + timedelta(days=1)).isoformat(),
                "rate": 5.0,
            },
            headers=await api_env.headers(user),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_get_promotion_by_role(self, api_env):
        # Arrange
        manager = make_user("manager1", Role.MANAGER)
        user = make_user("alice001")
        now = utc_now()
        active = make_promotion(rate=0.1)
        upcoming = make_promotion(
            rate=0.1,
            start_time=now + timedelta(days=1),
            end_time=now + timedelta(days=2),
        )
        await api_env.seed(manager, user, active, upcoming)
        user_headers = await api_env.headers(user)

        # Act
        seen_active = await api_env.client.get(
            f"/promotions/{active.id}", headers=user_headers
        )
        hidden = await api_env.client.get(
            f"/promotions/{upcoming.id}", headers=user_headers
        )
        as_manager = await api_env.client.get(
            f"/promotions/{upcoming.id}", headers=await api_env.headers(manager)
        )

        # Assert
        assert seen_active.status_code == 200
        assert seen_active.json()["rate"] == 0.1
        assert hidden.status_code == 404
        assert as_manager.status_code == 200
        assert as_manager.json()["id"] == str(upcoming.id)
