"""Engine and session factory for the ledger database."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from points.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async PostgreSQL engine.

    Sessions run at READ COMMITTED. Balance, pool and redemption updates are
    single conditional statements, so they re-check their guard against the
    row they lock and need no stricter isolation.

    Args:
        settings: Application settings

    Returns:
        Async engine
    """
    database = settings.database
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        isolation_level="READ COMMITTED",
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for request-scoped sessions.

    Autoflush is off; repositories flush explicitly so a constraint violation
    is raised inside the atomic unit that caused it.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
