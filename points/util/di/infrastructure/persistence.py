"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from points.config import Settings
from points.domain.repository import (
    EventRepository,
    PromotionRepository,
    TransactionRepository,
    UnitOfWork,
    UserRepository,
)
from points.persistence.database import create_engine, create_session_factory
from points.persistence.repository import (
    PostgresEventRepository,
    PostgresPromotionRepository,
    PostgresTransactionRepository,
    PostgresUnitOfWork,
    PostgresUserRepository,
)
from points.util.di.base import ProviderBase
from points.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL persistence.

    One session per request. Everything a request writes commits together
    when the request succeeds and rolls back together when it raises.
    """

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide the request's database session."""
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        """Provide savepoint-backed unit of work on the request session."""
        return PostgresUnitOfWork(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_transaction_repository(
        self, session: AsyncSession
    ) -> TransactionRepository:
        return PostgresTransactionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_promotion_repository(self, session: AsyncSession) -> PromotionRepository:
        return PostgresPromotionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_event_repository(self, session: AsyncSession) -> EventRepository:
        return PostgresEventRepository(session)
