"""Domain services."""

from .base import Service
from .event_service import EventService
from .jwt_service import JWTService
from .ledger_service import LedgerService
from .promotion_service import PromotionService, calculate_points
from .role_gate import RoleGate
from .transaction_service import TransactionService
from .user_service import UserService

__all__ = [
    "EventService",
    "JWTService",
    "LedgerService",
    "PromotionService",
    "RoleGate",
    "Service",
    "TransactionService",
    "UserService",
    "calculate_points",
]
