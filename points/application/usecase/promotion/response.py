"""Promotion record shared by the promotion use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from points.domain.model import Promotion
from points.domain.value import PromotionType


class PromotionResponse(BaseModel):
    """A promotion as returned to API clients."""

    id: str
    name: str
    description: str
    type: PromotionType
    start_time: datetime
    end_time: datetime
    min_spending: Optional[float] = None
    rate: Optional[float] = None
    points: Optional[int] = None

    @classmethod
    def from_promotion(cls, promotion: Promotion) -> "PromotionResponse":
        return cls(
            id=str(promotion.id),
            name=promotion.name,
            description=promotion.description,
            type=promotion.type,
            start_time=promotion.start_time,
            end_time=promotion.end_time,
            min_spending=promotion.min_spending,
            rate=promotion.rate,
            points=promotion.points,
        )
