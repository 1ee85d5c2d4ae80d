"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from points.domain.value import Actor, Role, UserId


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


class ActorRequest(BaseModel):
    """Request made on behalf of an authenticated caller."""

    actor_id: str  # User ID from the verified token
    actor_role: Role

    def actor(self) -> Actor:
        """The caller as a domain value."""
        return Actor(user_id=UserId(UUID(self.actor_id)), role=self.actor_role)
