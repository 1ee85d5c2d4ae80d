"""Unit tests for CreateTransferUseCase."""

import pytest

from points.application.usecase.transaction.create_transfer import (
    CreateTransferRequest,
    CreateTransferUseCase,
)
from points.application.usecase.transaction.list_user_transactions import (
    ListUserTransactionsRequest,
    ListUserTransactionsUseCase,
)
from points.domain.repository import UserRepository
from points.domain.value import TransactionKind
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateTransferUseCase:
    """Tests for CreateTransferUseCase."""

    @pytest.mark.asyncio
    async def test_both_sides_are_returned(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateTransferUseCase)
        users = await unit_env.get(UserRepository)
        sender = await users.save(make_user("alice001", points=150))
        recipient = await users.save(make_user("bobby001"))

        # Act
        response = await use_case.execute(
            CreateTransferRequest(
                actor_id=str(sender.id),
                actor_role=sender.role,
                recipient_id=str(recipient.id),
                amount=100,
                remark="lunch",
            )
        )

        # Assert
        assert response.sent.utorid == "alice001"
        assert response.sent.amount == -100
        assert response.sent.related_id == str(recipient.id)
        assert response.received.utorid == "bobby001"
        assert response.received.amount == 100
        assert response.received.related_id == str(sender.id)
        assert response.received.remark == "lunch"

    @pytest.mark.asyncio
    async def test_history_shows_the_sent_side(self, unit_env):
        transfer = await unit_env.get(CreateTransferUseCase)
        history = await unit_env.get(ListUserTransactionsUseCase)
        users = await unit_env.get(UserRepository)
        sender = await users.save(make_user("alice001", points=150))
        recipient = await users.save(make_user("bobby001"))
        await transfer.execute(
            CreateTransferRequest(
                actor_id=str(sender.id),
                actor_role=sender.role,
                recipient_id=str(recipient.id),
                amount=30,
            )
        )

        response = await history.execute(
            ListUserTransactionsRequest(
                actor_id=str(sender.id),
                actor_role=sender.role,
                kind=TransactionKind.TRANSFER,
            )
        )

        assert response.count == 1
        assert response.results[0].amount == -30
