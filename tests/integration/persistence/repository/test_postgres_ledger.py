"""Integration tests for the PostgreSQL repositories.

These run against a migrated database named by DATABASE__URL and are
skipped when it is not set.
"""

import os
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from points.domain.model import (
    EventGuest,
    PurchaseTransaction,
    RedemptionTransaction,
    utc_now,
)
from points.domain.repository import (
    EventRepository,
    PromotionRepository,
    TransactionFilter,
    TransactionRepository,
    UnitOfWork,
    UserRepository,
)
from points.domain.value import PromotionType, TransactionId, TransactionKind
from tests.conftest import make_event, make_promotion, make_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ, reason="PostgreSQL not configured"
)

integration_env = create_env_fixture(unmock={"persistence"})


def _utorid() -> str:
    return f"it{uuid4().hex[:6]}"


class TestPostgresLedger:
    """Integration tests for balance and transaction storage."""

    @pytest.mark.asyncio
    async def test_conditional_balance_update(self, integration_env):
        users = await integration_env.get(UserRepository)
        user = await users.save(make_user(_utorid(), points=10))

        assert await users.adjust_points(user.id, -11) is None
        assert await users.adjust_points(user.id, -4) == 6
        assert (await users.find_by_id(user.id)).points == 6

    @pytest.mark.asyncio
    async def test_purchase_keeps_promotion_links(self, integration_env):
        # Arrange
        users = await integration_env.get(UserRepository)
        promotions = await integration_env.get(PromotionRepository)
        transactions = await integration_env.get(TransactionRepository)
        user = await users.save(make_user(_utorid()))
        promotion = await promotions.save(make_promotion(rate=0.5))
        purchase = PurchaseTransaction(
            id=TransactionId(uuid4()),
            user_id=user.id,
            amount=60,
            created_by=user.id,
            spent=10.0,
            promotion_ids=(promotion.id,),
        )

        # Act
        await transactions.save(purchase)
        loaded = await transactions.find_by_id(purchase.id)
        history = await transactions.find_by_user(user.id, TransactionKind.PURCHASE)

        # Assert
        assert loaded == purchase
        assert [t.id for t in history] == [purchase.id]
        assert await promotions.count_transaction_links(promotion.id) == 1

    @pytest.mark.asyncio
    async def test_redemption_processed_once(self, integration_env):
        users = await integration_env.get(UserRepository)
        transactions = await integration_env.get(TransactionRepository)
        user = await users.save(make_user(_utorid(), points=50))
        redemption = await transactions.save(
            RedemptionTransaction(
                id=TransactionId(uuid4()),
                user_id=user.id,
                created_by=user.id,
                redeemed=20,
            )
        )

        first = await transactions.mark_processed(redemption.id, user.id, utc_now())
        second = await transactions.mark_processed(redemption.id, user.id, utc_now())

        assert first.amount == -20
        assert first.is_processed
        assert second is None

    @pytest.mark.asyncio
    async def test_duplicate_use_rolls_back_unit(self, integration_env):
        # Arrange
        users = await integration_env.get(UserRepository)
        promotions = await integration_env.get(PromotionRepository)
        uow = await integration_env.get(UnitOfWork)
        user = await users.save(make_user(_utorid()))
        promotion = await promotions.save(
            make_promotion(PromotionType.ONE_TIME, points=5)
        )
        await promotions.record_use(user.id, promotion.id)

        # Act
        with pytest.raises(IntegrityError):
            async with uow.atomic():
                await users.adjust_points(user.id, 100)
                await promotions.record_use(user.id, promotion.id)

        # Assert
        assert (await users.find_by_id(user.id)).points == 0
        assert await promotions.count_uses(promotion.id) == 1

    @pytest.mark.asyncio
    async def test_ledger_filters_by_user_and_promotion(self, integration_env):
        # Arrange
        users = await integration_env.get(UserRepository)
        promotions = await integration_env.get(PromotionRepository)
        transactions = await integration_env.get(TransactionRepository)
        utorid = _utorid()
        user = await users.save(make_user(utorid))
        promotion = await promotions.save(make_promotion(rate=0.5))
        for spent, linked in ((10.0, (promotion.id,)), (20.0, ())):
            await transactions.save(
                PurchaseTransaction(
                    id=TransactionId(uuid4()),
                    user_id=user.id,
                    amount=int(spent * 4),
                    created_by=user.id,
                    spent=spent,
                    promotion_ids=linked,
                )
            )

        # Act
        mine = await transactions.find_all(TransactionFilter(name=utorid))
        promoted = await transactions.find_all(
            TransactionFilter(name=utorid, promotion_id=promotion.id)
        )

        # Assert
        assert [t.amount for t in mine] == [80, 40]
        assert await transactions.count(TransactionFilter(name=utorid)) == 2
        assert [t.amount for t in promoted] == [40]


class TestPostgresEvents:
    """Integration tests for event listing and attendance."""

    @pytest.mark.asyncio
    async def test_publish_and_count_guests(self, integration_env):
        # Arrange
        users = await integration_env.get(UserRepository)
        events = await integration_env.get(EventRepository)
        name = f"Event {uuid4().hex[:8]}"
        event = await events.save(make_event(name=name))
        user = await users.save(make_user(_utorid()))
        await events.add_guest(EventGuest(event_id=event.id, user_id=user.id))

        # Act
        hidden = await events.find_all(name=name, published=True)
        await events.set_published(event.id)
        shown = await events.find_all(name=name, published=True)
        counts = await events.count_guests([event.id])
        removed = await events.remove_guest(event.id, user.id)

        # Assert
        assert hidden == []
        assert [e.id for e in shown] == [event.id]
        assert counts == {event.id: 1}
        assert removed
        assert not await events.remove_guest(event.id, user.id)
