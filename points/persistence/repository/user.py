"""PostgreSQL implementation of User repository."""

from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from points.domain.model import User
from points.domain.repository import UserRepository
from points.domain.value import UserId, Utorid
from points.persistence.mappers import row_to_user, user_to_dict
from points.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_utorid(self, utorid: Utorid) -> Optional[User]:
        """Find a user by UTORid."""
        stmt = select(users_table).where(users_table.c.utorid == utorid.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once."""
        if not user_ids:
            return []
        stmt = select(users_table).where(users_table.c.id.in_(list(user_ids)))
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Updates never write ``points``; that column belongs to
        ``adjust_points``.
        """
        existing = await self.find_by_id(user.id)
        user_dict = user_to_dict(user)

        if existing:
            user_dict.pop("id")
            user_dict.pop("points")
            user_dict.pop("created_at")
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
            await self.session.execute(stmt)
            await self.session.flush()
            return user.model_copy(update={"points": existing.points})

        stmt = users_table.insert().values(**user_dict)
        await self.session.execute(stmt)
        await self.session.flush()
        return user

    async def adjust_points(self, user_id: UserId, delta: int) -> Optional[int]:
        """Add ``delta`` to the balance unless it would go negative."""
        stmt = (
            users_table.update()
            .where(
                users_table.c.id == user_id,
                users_table.c.points + delta >= 0,
            )
            .values(points=users_table.c.points + delta)
            .returning(users_table.c.points)
        )
        result = await self.session.execute(stmt)
        new_balance = result.scalar_one_or_none()
        await self.session.flush()
        return new_balance
