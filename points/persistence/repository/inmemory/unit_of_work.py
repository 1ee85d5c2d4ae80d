"""In-memory unit of work for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from points.domain.repository import UnitOfWork

from .store import InMemoryStore


class InMemoryUnitOfWork(UnitOfWork):
    """Snapshots the store on entry and restores it if the block raises."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Open an atomic unit over the whole store."""
        state = self.store.snapshot()
        try:
            yield
        except BaseException:
            self.store.restore(state)
            raise
