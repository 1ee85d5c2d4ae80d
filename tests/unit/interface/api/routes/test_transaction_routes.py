"""Tests for the transaction routes."""

from uuid import uuid4

import pytest

from points.domain.value import PromotionType, Role
from tests.conftest import make_promotion, make_user
from tests.harness import create_api_fixture

api_env = create_api_fixture()


class TestCreateTransaction:
    """Tests for POST /transactions."""

    @pytest.mark.asyncio
    async def test_purchase_with_automatic_promotion(self, api_env):
        # Arrange
        cashier = make_user("cashier1", Role.CASHIER)
        customer = make_user("alice001")
        await api_env.seed(cashier, customer, make_promotion(rate=0.5))

        # Act
        response = await api_env.client.post(
            "/transactions",
            json={"type": "purchase", "utorid": "alice001", "spent": 100},
            headers=await api_env.headers(cashier),
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["kind"] == "purchase"
        assert body["earned"] == 600
        assert await api_env.balance(customer) == 600

    @pytest.mark.asyncio
    async def test_reused_one_time_promotion_conflicts(self, api_env):
        cashier = make_user("cashier1", Role.CASHIER)
        customer = make_user("alice001")
        promotion = make_promotion(PromotionType.ONE_TIME, points=10)
        await api_env.seed(cashier, customer, promotion)
        body = {
            "type": "purchase",
            "utorid": "alice001",
            "spent": 5,
            "promotion_ids": [str(promotion.id)],
        }
        headers = await api_env.headers(cashier)

        first = await api_env.client.post("/transactions", json=body, headers=headers)
        second = await api_env.client.post("/transactions", json=body, headers=headers)

        assert first.status_code == 201
        assert second.status_code == 409
        assert await api_env.balance(customer) == 30

    @pytest.mark.asyncio
    async def test_purchase_without_spent(self, api_env):
        cashier = make_user("cashier1", Role.CASHIER)
        await api_env.seed(cashier, make_user("alice001"))

        response = await api_env.client.post(
            "/transactions",
            json={"type": "purchase", "utorid": "alice001"},
            headers=await api_env.headers(cashier),
        )

        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_regular_user_is_forbidden(self, api_env):
        regular = make_user("bobby001")
        await api_env.seed(regular, make_user("alice001"))

        response = await api_env.client.post(
            "/transactions",
            json={"type": "purchase", "utorid": "alice001", "spent": 10},
            headers=await api_env.headers(regular),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_adjustment_below_zero(self, api_env):
        manager = make_user("manager1", Role.MANAGER)
        await api_env.seed(manager, make_user("alice001", points=5))

        response = await api_env.client.post(
            "/transactions",
            json={"type": "adjustment", "utorid": "alice001", "amount": -6},
            headers=await api_env.headers(manager),
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_token(self, api_env):
        response = await api_env.client.post(
            "/transactions",
            json={"type": "purchase", "utorid": "alice001", "spent": 10},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_garbage_token(self, api_env):
        response = await api_env.client.post(
            "/transactions",
            json={"type": "purchase", "utorid": "alice001", "spent": 10},
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401


class TestTransactionReview:
    """Tests for reading, flagging and processing transactions."""

    @pytest.mark.asyncio
    async def test_flag_and_clear(self, api_env):
        # Arrange
        cashier = make_user("cashier1", Role.CASHIER)
        manager = make_user("manager1", Role.MANAGER)
        customer = make_user("alice001")
        await api_env.seed(cashier, manager, customer)
        created = await api_env.client.post(
            "/transactions",
            json={"type": "purchase", "utorid": "alice001", "spent": 10},
            headers=await api_env.headers(cashier),
        )
        transaction_id = created.json()["id"]
        manager_headers = await api_env.headers(manager)

        # Act
        flagged = await api_env.client.patch(
            f"/transactions/{transaction_id}/suspicious",
            json={"suspicious": True},
            headers=manager_headers,
        )
        balance_when_flagged = await api_env.balance(customer)
        cleared = await api_env.client.patch(
            f"/transactions/{transaction_id}/suspicious",
            json={"suspicious": False},
            headers=manager_headers,
        )

        # Assert
        assert flagged.status_code == 200
        assert flagged.json()["suspicious"] is True
        assert balance_when_flagged == 0
        assert cleared.status_code == 200
        assert await api_env.balance(customer) == 40

    @pytest.mark.asyncio
    async def test_process_redemption_once(self, api_env):
        cashier = make_user("cashier1", Role.CASHIER)
        customer = make_user("alice001", points=100)
        await api_env.seed(cashier, customer)
        requested = await api_env.client.post(
            "/users/me/transactions",
            json={"type": "redemption", "amount": 40},
            headers=await api_env.headers(customer),
        )
        url = f"/transactions/{requested.json()['id']}/processed"
        cashier_headers = await api_env.headers(cashier)

        first = await api_env.client.patch(
            url, json={"processed": True}, headers=cashier_headers
        )
        second = await api_env.client.patch(
            url, json={"processed": True}, headers=cashier_headers
        )

        assert requested.status_code == 201
        assert first.status_code == 200
        assert first.json()["processed_by"] == str(cashier.id)
        assert second.status_code == 409
        assert await api_env.balance(customer) == 60

    @pytest.mark.asyncio
    async def test_get_own_and_foreign_transaction(self, api_env):
        cashier = make_user("cashier1", Role.CASHIER)
        customer = make_user("alice001")
        other = make_user("bobby001")
        await api_env.seed(cashier, customer, other)
        created = await api_env.client.post(
            "/transactions",
            json={"type": "purchase", "utorid": "alice001", "spent": 10},
            headers=await api_env.headers(cashier),
        )
        url = f"/transactions/{created.json()['id']}"

        own = await api_env.client.get(url, headers=await api_env.headers(customer))
        foreign = await api_env.client.get(url, headers=await api_env.headers(other))

        assert own.status_code == 200
        assert own.json()["utorid"] == "alice001"
        assert foreign.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_and_malformed_ids(self, api_env):
        manager = make_user("manager1", Role.MANAGER)
        await api_env.seed(manager)
        headers = await api_env.headers(manager)

        unknown = await api_env.client.get(f"/transactions/{uuid4()}", headers=headers)
        malformed = await api_env.client.get("/transactions/abc", headers=headers)

        assert unknown.status_code == 404
        assert malformed.status_code == 400


class TestLedgerBrowsing:
    """Tests for GET /transactions."""

    @pytest.mark.asyncio
    async def test_manager_filters_ledger(self, api_env):
        # Arrange
        cashier = make_user("cashier1", Role.CASHIER)
        manager = make_user("manager1", Role.MANAGER)
        alice = make_user("alice001")
        bob = make_user("bobby001")
        await api_env.seed(cashier, manager, alice, bob)
        cashier_headers = await api_env.headers(cashier)
        for utorid, spent in (("alice001", 10), ("alice001", 25), ("bobby001", 5)):
            await api_env.client.post(
                "/transactions",
                json={"type": "purchase", "utorid": utorid, "spent": spent},
                headers=cashier_headers,
            )
        headers = await api_env.headers(manager)

        # Act
        by_name = await api_env.client.get(
            "/transactions", params={"name": "alice"}, headers=headers
        )
        large = await api_env.client.get(
            "/transactions",
            params={"amount": 40, "operator": "gte", "limit": 1},
            headers=headers,
        )

        # Assert
        assert by_name.status_code == 200
        body = by_name.json()
        assert body["count"] == 2
        assert {t["utorid"] for t in body["results"]} == {"alice001"}
        assert large.json()["count"] == 2
        assert len(large.json()["results"]) == 1
        assert large.json()["limit"] == 1

    @pytest.mark.asyncio
    async def test_cashier_cannot_browse(self, api_env):
        cashier = make_user("cashier1", Role.CASHIER)
        await api_env.seed(cashier)

        response = await api_env.client.get(
            "/transactions", headers=await api_env.headers(cashier)
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_limit_out_of_range(self, api_env):
        manager = make_user("manager1", Role.MANAGER)
        await api_env.seed(manager)

        response = await api_env.client.get(
            "/transactions",
            params={"limit": 0},
            headers=await api_env.headers(manager),
        )

        assert response.status_code == 400
