"""Domain layer DI providers."""

from dishka import Scope, provide

from points.config import AuthSettings, LoyaltySettings
from points.domain.repository import (
    EventRepository,
    PromotionRepository,
    TransactionRepository,
    UnitOfWork,
    UserRepository,
)
from points.domain.service import (
    EventService,
    JWTService,
    LedgerService,
    PromotionService,
    RoleGate,
    TransactionService,
    UserService,
)
from points.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider.

    Services are REQUEST-scoped so every request shares one session and
    one unit of work across all the services it touches.
    """

    scope = Scope.REQUEST

    @provide
    def get_role_gate(self) -> RoleGate:
        return RoleGate()

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide token verification service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_ledger_service(self, user_repository: UserRepository) -> LedgerService:
        """Provide balance ledger service."""
        return LedgerService(user_repository=user_repository)

    @provide
    def get_user_service(
        self,
        user_repository: UserRepository,
        role_gate: RoleGate,
        unit_of_work: UnitOfWork,
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository,
            role_gate=role_gate,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_promotion_service(
        self,
        promotion_repository: PromotionRepository,
        role_gate: RoleGate,
        loyalty_settings: LoyaltySettings,
    ) -> PromotionService:
        """Provide promotion domain service at the configured earning rate."""
        return PromotionService(
            promotion_repository=promotion_repository,
            role_gate=role_gate,
            points_per_dollar=loyalty_settings.points_per_dollar,
        )

    @provide
    def get_event_service(
        self,
        event_repository: EventRepository,
        user_service: UserService,
        role_gate: RoleGate,
        unit_of_work: UnitOfWork,
    ) -> EventService:
        """Provide event domain service."""
        return EventService(
            event_repository=event_repository,
            user_service=user_service,
            role_gate=role_gate,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_transaction_service(
        self,
        transaction_repository: TransactionRepository,
        user_service: UserService,
        ledger_service: LedgerService,
        promotion_service: PromotionService,
        event_service: EventService,
        role_gate: RoleGate,
        unit_of_work: UnitOfWork,
    ) -> TransactionService:
        """Provide transaction engine."""
        return TransactionService(
            transaction_repository=transaction_repository,
            user_service=user_service,
            ledger_service=ledger_service,
            promotion_service=promotion_service,
            event_service=event_service,
            role_gate=role_gate,
            unit_of_work=unit_of_work,
        )
