"""Domain value objects for the points ledger."""

import re
from enum import Enum

from pydantic import field_validator

from points.domain.value.common import RootValueObject, ValueObject
from points.domain.value.identifiers import UserId


class Role(str, Enum):
    """User role, totally ordered from least to most privileged."""

    REGULAR = "regular"
    CASHIER = "cashier"
    MANAGER = "manager"
    SUPERUSER = "superuser"

    @property
    def rank(self) -> int:
        """Position in the privilege ordering."""
        return list(Role).index(self)

    def at_least(self, other: "Role") -> bool:
        """Whether this role is equal to or above ``other``."""
        return self.rank >= other.rank


class TransactionKind(str, Enum):
    """Kind of ledger transaction."""

    PURCHASE = "purchase"
    ADJUSTMENT = "adjustment"
    REDEMPTION = "redemption"
    TRANSFER = "transfer"
    EVENT = "event"


class PromotionType(str, Enum):
    """How a promotion is applied to purchases."""

    AUTOMATIC = "automatic"
    ONE_TIME = "one-time"


class Utorid(RootValueObject[str]):
    """Campus identity of a user: 7 or 8 alphanumeric characters."""

    @field_validator("root")
    @classmethod
    def validate_utorid(cls, v: str) -> str:
        """Validate UTORid format."""
        if not re.match(r"^[a-zA-Z0-9]{7,8}$", v):
            raise ValueError("UTORid must be 7-8 alphanumeric characters")
        return v


class Actor(ValueObject):
    """The authenticated caller of an engine operation."""

    user_id: UserId
    role: Role
