"""PostgreSQL unit of work backed by savepoints."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from points.domain.repository import UnitOfWork


class PostgresUnitOfWork(UnitOfWork):
    """Runs each atomic unit in a SAVEPOINT of the request session.

    The enclosing request transaction is committed by the session provider
    at the end of the request.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize unit of work with database session.

        Args:
            session: SQLAlchemy async session shared with the repositories
        """
        self.session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Open a savepoint; roll it back if the block raises."""
        try:
            async with self.session.begin_nested():
                yield
        except Exception as e:
            logfire.warn("Atomic unit rolled back", error=str(e))
            raise
