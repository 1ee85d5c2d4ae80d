"""Promotion use cases."""

from .create_promotion import CreatePromotionRequest, CreatePromotionUseCase
from .delete_promotion import (
    DeletePromotionRequest,
    DeletePromotionResponse,
    DeletePromotionUseCase,
)
from .get_promotion import GetPromotionRequest, GetPromotionUseCase
from .list_promotions import (
    ListPromotionsRequest,
    ListPromotionsResponse,
    ListPromotionsUseCase,
)
from .response import PromotionResponse
from .update_promotion import UpdatePromotionRequest, UpdatePromotionUseCase

__all__ = [
    "CreatePromotionRequest",
    "CreatePromotionUseCase",
    "DeletePromotionRequest",
    "DeletePromotionResponse",
    "DeletePromotionUseCase",
    "GetPromotionRequest",
    "GetPromotionUseCase",
    "ListPromotionsRequest",
    "ListPromotionsResponse",
    "ListPromotionsUseCase",
    "PromotionResponse",
    "UpdatePromotionRequest",
    "UpdatePromotionUseCase",
]
