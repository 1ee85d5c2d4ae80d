"""Unit tests for UserService."""

from unittest.mock import AsyncMock

import pytest

from points.domain.error import (
    AlreadyExistsError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from points.domain.repository import UserRepository
from points.domain.service import UserService
from points.domain.value import Role, Utorid
from tests.conftest import actor_of, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _count_units(unit_of_work, monkeypatch) -> list[int]:
    """Record each atomic unit the service opens."""
    entered = []
    atomic = unit_of_work.atomic

    def counting_atomic():
        entered.append(1)
        return atomic()

    monkeypatch.setattr(unit_of_work, "atomic", counting_atomic)
    return entered


class TestCreateUser:
    """Tests for create_user."""

    @pytest.mark.asyncio
    async def test_cashier_registers_unverified_regular(self, unit_env):
        # Arrange
        service = await unit_env.get(UserService)
        cashier = make_user("cashier1", Role.CASHIER)

        # Act
        user = await service.create_user(
            actor_of(cashier), Utorid("newuser1"), "New User", "new@mail.utoronto.ca"
        )

        # Assert
        assert user.role == Role.REGULAR
        assert user.points == 0
        assert not user.verified
        assert (await service.get_by_utorid(Utorid("newuser1"))).id == user.id

    @pytest.mark.asyncio
    async def test_regular_cannot_register(self, unit_env):
        service = await unit_env.get(UserService)

        with pytest.raises(ForbiddenError):
            await service.create_user(
                actor_of(make_user("alice001")), Utorid("newuser1")
            )

    @pytest.mark.asyncio
    async def test_duplicate_utorid(self, unit_env):
        service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        await users.save(make_user("alice001"))

        with pytest.raises(AlreadyExistsError):
            await service.create_user(
                actor_of(make_user("cashier1", Role.CASHIER)), Utorid("alice001")
            )

    @pytest.mark.asyncio
    async def test_registration_racing_the_check_is_a_duplicate(
        self, unit_env, monkeypatch
    ):
        """A UTORid taken after the lookup is refused by the insert's unit."""
        # Arrange
        service = await unit_env.get(UserService)
        existing = await service.user_repository.save(make_user("alice001"))
        monkeypatch.setattr(
            service.user_repository, "find_by_utorid", AsyncMock(return_value=None)
        )
        entered = _count_units(service.unit_of_work, monkeypatch)

        # Act
        with pytest.raises(AlreadyExistsError):
            await service.create_user(
                actor_of(make_user("cashier1", Role.CASHIER)), Utorid("alice001")
            )

        # Assert
        assert entered == [1]
        monkeypatch.undo()
        stored = await service.get_by_utorid(Utorid("alice001"))
        assert stored.id == existing.id

    def test_malformed_utorid_is_rejected(self):
        with pytest.raises(ValueError):
            Utorid("ab")


class TestUpdateUser:
    """Tests for update_user role and flag rules."""

    @pytest.mark.asyncio
    async def test_manager_promotes_verified_user_to_cashier(self, unit_env):
        # Arrange
        service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        target = await users.save(make_user("alice001", verified=True))
        manager = make_user("manager1", Role.MANAGER)

        # Act
        updated = await service.update_user(
            actor_of(manager), target.id, role=Role.CASHIER
        )

        # Assert
        assert updated.role == Role.CASHIER
        assert not updated.suspicious

    @pytest.mark.asyncio
    async def test_promotion_requires_verification(self, unit_env):
        service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        target = await users.save(make_user("alice001", verified=False))

        with pytest.raises(ValidationError, match="verified"):
            await service.update_user(
                actor_of(make_user("manager1", Role.MANAGER)),
                target.id,
                role=Role.CASHIER,
            )

    @pytest.mark.asyncio
    async def test_verify_and_promote_in_one_edit(self, unit_env):
        service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        target = await users.save(make_user("alice001", verified=False))

        updated = await service.update_user(
            actor_of(make_user("manager1", Role.MANAGER)),
            target.id,
            verified=True,
            role=Role.CASHIER,
        )

        assert updated.verified
        assert updated.role == Role.CASHIER

    @pytest.mark.asyncio
    async def test_suspicious_user_cannot_become_cashier(self, unit_env):
        service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        target = await users.save(make_user("alice001", suspicious=True))

        with pytest.raises(ValidationError, match="Suspicious"):
            await service.update_user(
                actor_of(make_user("manager1", Role.MANAGER)),
                target.id,
                role=Role.CASHIER,
            )

    @pytest.mark.asyncio
    async def test_manager_cannot_grant_manager(self, unit_env):
        service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        target = await users.save(make_user("alice001"))

        with pytest.raises(ForbiddenError):
            await service.update_user(
                actor_of(make_user("manager1", Role.MANAGER)),
                target.id,
                role=Role.MANAGER,
            )

    @pytest.mark.asyncio
    async def test_manager_cannot_edit_other_manager(self, unit_env):
        service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        target = await users.save(make_user("manager2", Role.MANAGER))

        with pytest.raises(ForbiddenError):
            await service.update_user(
                actor_of(make_user("manager1", Role.MANAGER)),
                target.id,
                email="x@mail.utoronto.ca",
            )

    @pytest.mark.asyncio
    async def test_superuser_cannot_change_own_role(self, unit_env):
        service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        superuser = await users.save(make_user("admin001", Role.SUPERUSER))

        with pytest.raises(ForbiddenError):
            await service.update_user(
                actor_of(superuser), superuser.id, role=Role.MANAGER
            )

    @pytest.mark.asyncio
    async def test_verified_cannot_be_unset(self, unit_env):
        service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        target = await users.save(make_user("alice001"))

        with pytest.raises(ValidationError):
            await service.update_user(
                actor_of(make_user("manager1", Role.MANAGER)),
                target.id,
                verified=False,
            )

    @pytest.mark.asyncio
    async def test_empty_edit_is_rejected(self, unit_env):
        service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        target = await users.save(make_user("alice001"))

        with pytest.raises(ValidationError):
            await service.update_user(
                actor_of(make_user("manager1", Role.MANAGER)), target.id
            )

    @pytest.mark.asyncio
    async def test_unknown_user(self, unit_env):
        service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await service.get_by_utorid(Utorid("nobody01"))


class TestReadUsers:
    """Tests for get_user and lookup."""

    @pytest.mark.asyncio
    async def test_cashier_reads_any_account(self, unit_env):
        service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        target = await users.save(make_user("alice001", points=40))

        user = await service.get_user(
            actor_of(make_user("cashier1", Role.CASHIER)), target.id
        )

        assert user.utorid == Utorid("alice001")
        assert user.points == 40

    @pytest.mark.asyncio
    async def test_regular_cannot_read_other_accounts(self, unit_env):
        service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        target = await users.save(make_user("alice001"))

        with pytest.raises(ForbiddenError):
            await service.get_user(actor_of(make_user("bobby001")), target.id)

    @pytest.mark.asyncio
    async def test_lookup_by_utorid_or_id(self, unit_env):
        # Arrange
        service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        target = await users.save(make_user("alice001"))
        cashier = actor_of(make_user("cashier1", Role.CASHIER))

        # Act
        by_utorid = await service.lookup(cashier, " alice001 ")
        by_id = await service.lookup(cashier, str(target.id))

        # Assert
        assert by_utorid.id == target.id
        assert by_id.id == target.id

    @pytest.mark.asyncio
    async def test_lookup_of_unknown_user(self, unit_env):
        service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await service.lookup(
                actor_of(make_user("cashier1", Role.CASHIER)), "nobody01"
            )

    @pytest.mark.asyncio
    async def test_lookup_of_malformed_identifier(self, unit_env):
        service = await unit_env.get(UserService)

        with pytest.raises(ValueError):
            await service.lookup(actor_of(make_user("cashier1", Role.CASHIER)), "a")

    @pytest.mark.asyncio
    async def test_regular_cannot_look_up(self, unit_env):
        service = await unit_env.get(UserService)

        with pytest.raises(ForbiddenError):
            await service.lookup(actor_of(make_user("bobby001")), "alice001")
