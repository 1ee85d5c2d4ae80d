"""Unit tests for LedgerService."""

from uuid import uuid4

import pytest

from points.domain.error import InsufficientPointsError, NotFoundError
from points.domain.repository import UserRepository
from points.domain.service import LedgerService
from points.domain.value import UserId
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestAdjustBalance:
    """Tests for adjust_balance."""

    @pytest.mark.asyncio
    async def test_credit_and_debit(self, unit_env):
        # Arrange
        ledger = await unit_env.get(LedgerService)
        users = await unit_env.get(UserRepository)
        user = await users.save(make_user("alice001", points=100))

        # Act
        after_credit = await ledger.adjust_balance(user.id, 50)
        after_debit = await ledger.adjust_balance(user.id, -120)

        # Assert
        assert after_credit == 150
        assert after_debit == 30
        assert await ledger.balance(user.id) == 30

    @pytest.mark.asyncio
    async def test_overdraw_is_rejected_and_balance_unchanged(self, unit_env):
        ledger = await unit_env.get(LedgerService)
        users = await unit_env.get(UserRepository)
        user = await users.save(make_user("alice001", points=40))

        with pytest.raises(InsufficientPointsError) as exc_info:
            await ledger.adjust_balance(user.id, -50)

        assert exc_info.value.balance == 40
        assert exc_info.value.requested == 50
        assert await ledger.balance(user.id) == 40

    @pytest.mark.asyncio
    async def test_debit_to_exactly_zero_is_allowed(self, unit_env):
        ledger = await unit_env.get(LedgerService)
        users = await unit_env.get(UserRepository)
        user = await users.save(make_user("alice001", points=40))

        assert await ledger.adjust_balance(user.id, -40) == 0

    @pytest.mark.asyncio
    async def test_unknown_user(self, unit_env):
        ledger = await unit_env.get(LedgerService)

        with pytest.raises(NotFoundError):
            await ledger.adjust_balance(UserId(uuid4()), 10)

    @pytest.mark.asyncio
    async def test_profile_save_never_changes_balance(self, unit_env):
        """Saving a stale copy of a user keeps the ledger's balance."""
        ledger = await unit_env.get(LedgerService)
        users = await unit_env.get(UserRepository)
        user = await users.save(make_user("alice001", points=10))
        await ledger.adjust_balance(user.id, 90)

        await users.save(user.model_copy(update={"email": "new@mail.utoronto.ca"}))

        assert await ledger.balance(user.id) == 100
