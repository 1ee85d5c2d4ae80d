"""User aggregate root.

Users hold the ledger balance. Only the points ledger changes ``points``;
profile and role edits never touch it.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from points.domain.model.common import DomainModel, utc_now
from points.domain.value import Role, UserId, Utorid


class User(DomainModel):
    """User aggregate root.

    Business rules:
    - ``points`` is never negative at rest
    - ``verified`` gates redemption, transfer, and role promotion
    - purchases created by a ``suspicious`` cashier are held off the ledger
    """

    id: UserId
    utorid: Utorid
    name: Optional[str] = None
    email: Optional[str] = None
    role: Role = Role.REGULAR
    points: int = Field(default=0, ge=0)
    verified: bool = False
    suspicious: bool = False
    created_at: datetime = Field(default_factory=utc_now)
