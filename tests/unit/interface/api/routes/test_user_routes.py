"""Tests for the user routes."""

import pytest

from points.domain.value import PromotionType, Role
from tests.conftest import make_promotion, make_user
from tests.harness import create_api_fixture

api_env = create_api_fixture()


class TestUserAccounts:
    """Tests for registering and editing users."""

    @pytest.mark.asyncio
    async def test_cashier_registers_user(self, api_env):
        cashier = make_user("cashier1", Role.CASHIER)
        await api_env.seed(cashier)
        headers = await api_env.headers(cashier)

        created = await api_env.client.post(
            "/users", json={"utorid": "newuser1", "name": "New"}, headers=headers
        )
        duplicate = await api_env.client.post(
            "/users", json={"utorid": "newuser1"}, headers=headers
        )

        assert created.status_code == 201
        assert created.json()["verified"] is False
        assert created.json()["points"] == 0
        assert duplicate.status_code == 409

    @pytest.mark.asyncio
    async def test_invalid_utorid(self, api_env):
        cashier = make_user("cashier1", Role.CASHIER)
        await api_env.seed(cashier)

        response = await api_env.client.post(
            "/users",
            json={"utorid": "no"},
            headers=await api_env.headers(cashier),
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_manager_verifies_and_promotes(self, api_env):
        manager = make_user("manager1", Role.MANAGER)
        user = make_user("alice001", verified=False)
        await api_env.seed(manager, user)

        response = await api_env.client.patch(
            f"/users/{user.id}",
            json={"verified": True, "role": "cashier"},
            headers=await api_env.headers(manager),
        )

        assert response.status_code == 200
        assert response.json()["role"] == "cashier"
        assert response.json()["verified"] is True

    @pytest.mark.asyncio
    async def test_manager_cannot_promote_to_manager(self, api_env):
        manager = make_user("manager1", Role.MANAGER)
        user = make_user("alice001")
        await api_env.seed(manager, user)

        response = await api_env.client.patch(
            f"/users/{user.id}",
            json={"role": "manager"},
            headers=await api_env.headers(manager),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_me_lists_unused_one_time_promotions(self, api_env):
        # Arrange
        user = make_user("alice001", points=30)
        one_time = make_promotion(PromotionType.ONE_TIME, points=50)
        automatic = make_promotion(rate=0.1)
        await api_env.seed(user, one_time, automatic)

        # Act
        response = await api_env.client.get(
            "/users/me", headers=await api_env.headers(user)
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["utorid"] == "alice001"
        assert body["points"] == 30
        assert [p["id"] for p in body["promotions"]] == [str(one_time.id)]

    @pytest.mark.asyncio
    async def test_cashier_reads_user_and_regular_cannot(self, api_env):
        cashier = make_user("cashier1", Role.CASHIER)
        user = make_user("alice001")
        other = make_user("bobby001")
        await api_env.seed(cashier, user, other)

        as_cashier = await api_env.client.get(
            f"/users/{user.id}", headers=await api_env.headers(cashier)
        )
        as_regular = await api_env.client.get(
            f"/users/{user.id}", headers=await api_env.headers(other)
        )

        assert as_cashier.status_code == 200
        assert as_cashier.json()["id"] == str(user.id)
        assert as_regular.status_code == 403

    @pytest.mark.asyncio
    async def test_lookup_by_utorid_and_id(self, api_env):
        # Arrange
        cashier = make_user("cashier1", Role.CASHIER)
        user = make_user("alice001")
        await api_env.seed(cashier, user)
        headers = await api_env.headers(cashier)

        # Act
        by_utorid = await api_env.client.get("/users/lookup/alice001", headers=headers)
        by_id = await api_env.client.get(f"/users/lookup/{user.id}", headers=headers)
        unknown = await api_env.client.get("/users/lookup/nobody01", headers=headers)

        # Assert
        assert by_utorid.status_code == 200
        assert by_utorid.json() == {
            "id": str(user.id),
            "utorid": "alice001",
            "name": "Alice001",
            "verified": True,
        }
        assert by_id.json()["utorid"] == "alice001"
        assert unknown.status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_user_id(self, api_env):
        cashier = make_user("cashier1", Role.CASHIER)
        await api_env.seed(cashier)

        response = await api_env.client.get(
            f"/users/{make_user('alice001').id}",
            headers=await api_env.headers(cashier),
        )

        assert response.status_code == 404


class TestUserTransactions:
    """Tests for redemptions, transfers and history."""

    @pytest.mark.asyncio
    async def test_redemption_over_balance(self, api_env):
        customer = make_user("alice001", points=40)
        await api_env.seed(customer)

        response = await api_env.client.post(
            "/users/me/transactions",
            json={"type": "redemption", "amount": 50},
            headers=await api_env.headers(customer),
        )

        assert response.status_code == 400
        assert await api_env.balance(customer) == 40

    @pytest.mark.asyncio
    async def test_transfer_and_history(self, api_env):
        # Arrange
        sender = make_user("alice001", points=150)
        recipient = make_user("bobby001")
        await api_env.seed(sender, recipient)
        headers = await api_env.headers(sender)

        # Act
        transfer = await api_env.client.post(
            f"/users/{recipient.id}/transactions",
            json={"type": "transfer", "amount": 100},
            headers=headers,
        )
        history = await api_env.client.get(
            "/users/me/transactions", params={"kind": "transfer"}, headers=headers
        )

        # Assert
        assert transfer.status_code == 201
        assert transfer.json()["sent"]["amount"] == -100
        assert transfer.json()["received"]["amount"] == 100
        assert await api_env.balance(sender) == 50
        assert await api_env.balance(recipient) == 100
        assert history.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_transfer_to_unverified_user(self, api_env):
        sender = make_user("alice001", points=150)
        recipient = make_user("bobby001", verified=False)
        await api_env.seed(sender, recipient)

        response = await api_env.client.post(
            f"/users/{recipient.id}/transactions",
            json={"type": "transfer", "amount": 10},
            headers=await api_env.headers(sender),
        )

        assert response.status_code == 400
        assert await api_env.balance(sender) == 150

    @pytest.mark.asyncio
    async def test_unverified_sender(self, api_env):
        sender = make_user("alice001", points=150, verified=False)
        recipient = make_user("bobby001")
        await api_env.seed(sender, recipient)

        response = await api_env.client.post(
            f"/users/{recipient.id}/transactions",
            json={"type": "transfer", "amount": 10},
            headers=await api_env.headers(sender),
        )

        assert response.status_code == 403
