"""Transaction use cases."""

from .award_event_points import (
    AwardEventPointsRequest,
    AwardEventPointsResponse,
    AwardEventPointsUseCase,
)
from .create_adjustment import CreateAdjustmentRequest, CreateAdjustmentUseCase
from .create_purchase import CreatePurchaseRequest, CreatePurchaseUseCase
from .create_redemption import CreateRedemptionRequest, CreateRedemptionUseCase
from .create_transfer import (
    CreateTransferRequest,
    CreateTransferResponse,
    CreateTransferUseCase,
)
from .get_transaction import GetTransactionRequest, GetTransactionUseCase
from .list_transactions import (
    ListTransactionsRequest,
    ListTransactionsResponse,
    ListTransactionsUseCase,
)
from .list_user_transactions import (
    ListUserTransactionsRequest,
    ListUserTransactionsResponse,
    ListUserTransactionsUseCase,
)
from .process_redemption import ProcessRedemptionRequest, ProcessRedemptionUseCase
from .response import TransactionResponse
from .set_suspicious import SetSuspiciousRequest, SetSuspiciousUseCase

__all__ = [
    "AwardEventPointsRequest",
    "AwardEventPointsResponse",
    "AwardEventPointsUseCase",
    "CreateAdjustmentRequest",
    "CreateAdjustmentUseCase",
    "CreatePurchaseRequest",
    "CreatePurchaseUseCase",
    "CreateRedemptionRequest",
    "CreateRedemptionUseCase",
    "CreateTransferRequest",
    "CreateTransferResponse",
    "CreateTransferUseCase",
    "GetTransactionRequest",
    "GetTransactionUseCase",
    "ListTransactionsRequest",
    "ListTransactionsResponse",
    "ListTransactionsUseCase",
    "ListUserTransactionsRequest",
    "ListUserTransactionsResponse",
    "ListUserTransactionsUseCase",
    "ProcessRedemptionRequest",
    "ProcessRedemptionUseCase",
    "SetSuspiciousRequest",
    "SetSuspiciousUseCase",
    "TransactionResponse",
]
