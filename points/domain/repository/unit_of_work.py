"""Unit of work interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Groups repository writes into one all-or-nothing unit.

    Usage:
        async with unit_of_work.atomic():
            await transaction_repository.save(tx)
            await user_repository.adjust_points(user_id, tx.amount)

    If the block raises, every write made inside it is undone and the
    exception propagates. Units may nest.
    """

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic unit."""
        pass
