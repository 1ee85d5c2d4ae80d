"""Promotion entity.

Promotions add bonus points to purchases, either automatically for every
qualifying purchase or once per user when a cashier applies them.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from points.domain.model.common import DomainModel
from points.domain.value import PromotionId, PromotionType


class Promotion(DomainModel):
    """Promotion entity.

    Business rules:
    - Active over the half-open window [start_time, end_time)
    - ``rate`` multiplies base points, ``points`` is a flat bonus; both stack
    - A one-time promotion is consumed at most once per user
    """

    id: PromotionId
    name: str
    description: str = ""
    type: PromotionType
    start_time: datetime
    end_time: datetime
    min_spending: Optional[float] = Field(default=None, ge=0)
    rate: Optional[float] = Field(default=None, ge=0)
    points: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_window(self) -> "Promotion":
        """Ensure the window is non-empty."""
        if self.start_time >= self.end_time:
            raise ValueError("Promotion start_time must be before end_time")
        return self

    @property
    def is_one_time(self) -> bool:
        """Whether the promotion is consumed on use."""
        return self.type == PromotionType.ONE_TIME

    def is_active(self, as_of: datetime) -> bool:
        """Whether ``as_of`` falls inside the promotion window."""
        return self.start_time <= as_of < self.end_time

    def has_started(self, as_of: datetime) -> bool:
        """Whether the promotion window has opened."""
        return self.start_time <= as_of

    def has_ended(self, as_of: datetime) -> bool:
        """Whether the promotion window has closed."""
        return self.end_time <= as_of

    def qualifies(self, spent: float) -> bool:
        """Whether a spend meets the minimum spending requirement."""
        return self.min_spending is None or spent >= self.min_spending
