"""User domain service."""

from typing import Optional
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from points.domain.error import (
    AlreadyExistsError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from points.domain.model import User
from points.domain.repository import UnitOfWork, UserRepository
from points.domain.value import Actor, Role, UserId, Utorid

from .base import Service
from .role_gate import RoleGate


class UserService(Service):
    """Domain service for user lookup, registration and account edits.

    Never touches ``points``; balances belong to the ledger.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        role_gate: RoleGate,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            role_gate: Role checks
            unit_of_work: Atomic unit factory
        """
        self.user_repository = user_repository
        self.role_gate = role_gate
        self.unit_of_work = unit_of_work

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_by_utorid(self, utorid: Utorid) -> User:
        """Get user by UTORid.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_utorid", utorid=utorid.root):
            user = await self.user_repository.find_by_utorid(utorid)
            if not user:
                logfire.warn("User not found", utorid=utorid.root)
                raise NotFoundError("User", utorid.root)
            return user

    async def find_by_utorid(self, utorid: Utorid) -> Optional[User]:
        """Find a user by UTORid, or None."""
        return await self.user_repository.find_by_utorid(utorid)

    async def get_user(self, actor: Actor, user_id: UserId) -> User:
        """Get any user's account on behalf of a cashier.

        Raises:
            ForbiddenError: If the actor is below cashier
            NotFoundError: If user not found
        """
        self.role_gate.require(actor, Role.CASHIER)
        return await self.get_by_id(user_id)

    async def lookup(self, actor: Actor, identifier: str) -> User:
        """Find a user by ID, or by UTORid when ``identifier`` is not an ID.

        Lets a cashier confirm a customer's identity before processing
        their redemption.

        Raises:
            ForbiddenError: If the actor is below cashier
            NotFoundError: If no user matches
            ValueError: If ``identifier`` is neither an ID nor a UTORid
        """
        self.role_gate.require(actor, Role.CASHIER)
        with logfire.span("user_service.lookup", identifier=identifier):
            identifier = identifier.strip()
            try:
                user_id = UserId(UUID(identifier))
            except ValueError:
                return await self.get_by_utorid(Utorid(identifier))
            return await self.get_by_id(user_id)

    async def get_many(self, user_ids: list[UserId]) -> dict[UserId, User]:
        """Get several users keyed by ID; unknown IDs are left out."""
        users = await self.user_repository.find_by_ids(user_ids)
        return {user.id: user for user in users}

    async def create_user(
        self,
        actor: Actor,
        utorid: Utorid,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        """Register a new user on behalf of a cashier.

        New users are unverified regulars with no points.

        Args:
            actor: Caller (cashier or above)
            utorid: Campus identity, must be unused
            name: Display name
            email: Contact email

        Returns:
            The created user

        Raises:
            ForbiddenError: If the actor is below cashier
            AlreadyExistsError: If the UTORid is taken
        """
        with logfire.span("user_service.create_user", utorid=utorid.root):
            self.role_gate.require(actor, Role.CASHIER)
            if await self.user_repository.find_by_utorid(utorid):
                raise AlreadyExistsError("User", utorid.root)

            user = User(id=UserId(uuid4()), utorid=utorid, name=name, email=email)
            try:
                async with self.unit_of_work.atomic():
                    saved = await self.user_repository.save(user)
            except IntegrityError:
                logfire.warn("Duplicate user registration", utorid=utorid.root)
                raise AlreadyExistsError("User", utorid.root)
            logfire.info("User created", user_id=str(saved.id), utorid=utorid.root)
            return saved

    async def update_user(
        self,
        actor: Actor,
        user_id: UserId,
        email: Optional[str] = None,
        verified: Optional[bool] = None,
        suspicious: Optional[bool] = None,
        role: Optional[Role] = None,
    ) -> User:
        """Edit another user's account flags or role.

        Rules:
        - managers may only edit regular or cashier users, and may only
          set the role to regular or cashier
        - only a superuser may promote to superuser
        - a superuser may not change their own role or another superuser's
        - ``verified`` can only be set to true
        - promoting to a higher role requires the user to be verified
        - promoting to cashier requires the user not to be suspicious and
          clears the flag

        Raises:
            ForbiddenError: If the actor may not make this edit
            NotFoundError: If user not found
            ValidationError: If the requested values break a rule
        """
        with logfire.span(
            "user_service.update_user",
            user_id=str(user_id),
            actor_id=str(actor.user_id),
        ):
            self.role_gate.require(actor, Role.MANAGER)
            target = await self.get_by_id(user_id)

            if actor.role == Role.MANAGER and target.role.at_least(Role.MANAGER):
                raise ForbiddenError(
                    "Managers cannot edit users with manager or superuser roles"
                )
            if role is not None and actor.role == Role.SUPERUSER:
                if actor.user_id == user_id:
                    raise ForbiddenError("Superusers cannot modify their own role")
                if target.role == Role.SUPERUSER:
                    raise ForbiddenError(
                        "Superusers cannot modify other superusers' roles"
                    )

            if all(v is None for v in (email, verified, suspicious, role)):
                raise ValidationError("No fields to update")

            updates: dict = {}
            if email is not None:
                updates["email"] = email
            if verified is not None:
                if verified is not True:
                    raise ValidationError("Verified can only be set to true")
                updates["verified"] = True
            if suspicious is not None:
                updates["suspicious"] = suspicious

            if role is not None:
                if role == Role.SUPERUSER and actor.role != Role.SUPERUSER:
                    raise ForbiddenError("Only superuser can promote to superuser")
                if actor.role == Role.MANAGER and role not in (
                    Role.REGULAR,
                    Role.CASHIER,
                ):
                    raise ForbiddenError(
                        "Managers can only set role to regular or cashier"
                    )
                if role.rank > target.role.rank:
                    will_be_verified = updates.get("verified", target.verified)
                    if not will_be_verified:
                        raise ValidationError(
                            "User must be verified before role promotion"
                        )
                if role == Role.CASHIER:
                    if updates.get("suspicious", target.suspicious):
                        raise ValidationError(
                            "Suspicious users cannot be promoted to cashier"
                        )
                    updates["suspicious"] = False
                updates["role"] = role

            updated = target.model_copy(update=updates)
            saved = await self.user_repository.save(updated)
            logfire.info(
                "User updated",
                user_id=str(user_id),
                fields=sorted(updates),
            )
            return saved
