"""Application layer DI providers."""

from dishka import Scope, provide

from points.application.usecase.event import (
    AddGuestUseCase,
    AddOrganizerUseCase,
    CreateEventUseCase,
    GetEventUseCase,
    LeaveEventUseCase,
    ListEventsUseCase,
    PublishEventUseCase,
    RemoveGuestUseCase,
    RemoveOrganizerUseCase,
    RsvpUseCase,
    UpdateEventPointsUseCase,
)
from points.application.usecase.promotion import (
    CreatePromotionUseCase,
    DeletePromotionUseCase,
    GetPromotionUseCase,
    ListPromotionsUseCase,
    UpdatePromotionUseCase,
)
from points.application.usecase.transaction import (
    AwardEventPointsUseCase,
    CreateAdjustmentUseCase,
    CreatePurchaseUseCase,
    CreateRedemptionUseCase,
    CreateTransferUseCase,
    GetTransactionUseCase,
    ListTransactionsUseCase,
    ListUserTransactionsUseCase,
    ProcessRedemptionUseCase,
    SetSuspiciousUseCase,
)
from points.application.usecase.user import (
    CreateUserUseCase,
    GetMeUseCase,
    GetUserUseCase,
    LookupUserUseCase,
    UpdateUserUseCase,
)
from points.domain.service import (
    EventService,
    PromotionService,
    TransactionService,
    UserService,
)
from points.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider."""

    # Transaction use cases
    @provide(scope=Scope.REQUEST)
    def get_create_purchase_use_case(
        self, transaction_service: TransactionService
    ) -> CreatePurchaseUseCase:
        """Provide create purchase use case."""
        return CreatePurchaseUseCase(transaction_service=transaction_service)

    @provide(scope=Scope.REQUEST)
    def get_create_adjustment_use_case(
        self, transaction_service: TransactionService
    ) -> CreateAdjustmentUseCase:
        """Provide create adjustment use case."""
        return CreateAdjustmentUseCase(transaction_service=transaction_service)

    @provide(scope=Scope.REQUEST)
    def get_create_redemption_use_case(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> CreateRedemptionUseCase:
        """Provide create redemption use case."""
        return CreateRedemptionUseCase(
            transaction_service=transaction_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_process_redemption_use_case(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> ProcessRedemptionUseCase:
        """Provide process redemption use case."""
        return ProcessRedemptionUseCase(
            transaction_service=transaction_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_create_transfer_use_case(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> CreateTransferUseCase:
        """Provide create transfer use case."""
        return CreateTransferUseCase(
            transaction_service=transaction_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_award_event_points_use_case(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> AwardEventPointsUseCase:
        """Provide award event points use case."""
        return AwardEventPointsUseCase(
            transaction_service=transaction_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_set_suspicious_use_case(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> SetSuspiciousUseCase:
        """Provide set suspicious use case."""
        return SetSuspiciousUseCase(
            transaction_service=transaction_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_transaction_use_case(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> GetTransactionUseCase:
        """Provide get transaction use case."""
        return GetTransactionUseCase(
            transaction_service=transaction_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_user_transactions_use_case(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> ListUserTransactionsUseCase:
        """Provide list user transactions use case."""
        return ListUserTransactionsUseCase(
            transaction_service=transaction_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_transactions_use_case(
        self, transaction_service: TransactionService, user_service: UserService
    ) -> ListTransactionsUseCase:
        """Provide list transactions use case."""
        return ListTransactionsUseCase(
            transaction_service=transaction_service, user_service=user_service
        )

    # Promotion use cases
    @provide(scope=Scope.REQUEST)
    def get_create_promotion_use_case(
        self, promotion_service: PromotionService
    ) -> CreatePromotionUseCase:
        """Provide create promotion use case."""
        return CreatePromotionUseCase(promotion_service=promotion_service)

    @provide(scope=Scope.REQUEST)
    def get_update_promotion_use_case(
        self, promotion_service: PromotionService
    ) -> UpdatePromotionUseCase:
        """Provide update promotion use case."""
        return UpdatePromotionUseCase(promotion_service=promotion_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_promotion_use_case(
        self, promotion_service: PromotionService
    ) -> DeletePromotionUseCase:
        """Provide delete promotion use case."""
        return DeletePromotionUseCase(promotion_service=promotion_service)

    @provide(scope=Scope.REQUEST)
    def get_list_promotions_use_case(
        self, promotion_service: PromotionService
    ) -> ListPromotionsUseCase:
        """Provide list promotions use case."""
        return ListPromotionsUseCase(promotion_service=promotion_service)

    @provide(scope=Scope.REQUEST)
    def get_get_promotion_use_case(
        self, promotion_service: PromotionService
    ) -> GetPromotionUseCase:
        """Provide get promotion use case."""
        return GetPromotionUseCase(promotion_service=promotion_service)

    # Event use cases
    @provide(scope=Scope.REQUEST)
    def get_create_event_use_case(
        self, event_service: EventService
    ) -> CreateEventUseCase:
        """Provide create event use case."""
        return CreateEventUseCase(event_service=event_service)

    @provide(scope=Scope.REQUEST)
    def get_add_guest_use_case(
        self, event_service: EventService
    ) -> AddGuestUseCase:
        """Provide add guest use case."""
        return AddGuestUseCase(event_service=event_service)

    @provide(scope=Scope.REQUEST)
    def get_add_organizer_use_case(
        self, event_service: EventService
    ) -> AddOrganizerUseCase:
        """Provide add organizer use case."""
        return AddOrganizerUseCase(event_service=event_service)

    @provide(scope=Scope.REQUEST)
    def get_update_event_points_use_case(
        self, event_service: EventService
    ) -> UpdateEventPointsUseCase:
        """Provide update event points use case."""
        return UpdateEventPointsUseCase(event_service=event_service)

    @provide(scope=Scope.REQUEST)
    def get_list_events_use_case(
        self, event_service: EventService
    ) -> ListEventsUseCase:
        """Provide list events use case."""
        return ListEventsUseCase(event_service=event_service)

    @provide(scope=Scope.REQUEST)
    def get_get_event_use_case(
        self, event_service: EventService, user_service: UserService
    ) -> GetEventUseCase:
        """Provide get event use case."""
        return GetEventUseCase(event_service=event_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_publish_event_use_case(
        self, event_service: EventService
    ) -> PublishEventUseCase:
        """Provide publish event use case."""
        return PublishEventUseCase(event_service=event_service)

    @provide(scope=Scope.REQUEST)
    def get_rsvp_use_case(
        self, event_service: EventService, user_service: UserService
    ) -> RsvpUseCase:
        """Provide RSVP use case."""
        return RsvpUseCase(event_service=event_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_leave_event_use_case(
        self, event_service: EventService
    ) -> LeaveEventUseCase:
        """Provide leave event use case."""
        return LeaveEventUseCase(event_service=event_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_guest_use_case(
        self, event_service: EventService
    ) -> RemoveGuestUseCase:
        """Provide remove guest use case."""
        return RemoveGuestUseCase(event_service=event_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_organizer_use_case(
        self, event_service: EventService
    ) -> RemoveOrganizerUseCase:
        """Provide remove organizer use case."""
        return RemoveOrganizerUseCase(event_service=event_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_create_user_use_case(self, user_service: UserService) -> CreateUserUseCase:
        """Provide create user use case."""
        return CreateUserUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_update_user_use_case(self, user_service: UserService) -> UpdateUserUseCase:
        """Provide update user use case."""
        return UpdateUserUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_get_user_use_case(
        self, user_service: UserService, promotion_service: PromotionService
    ) -> GetUserUseCase:
        """Provide get user use case."""
        return GetUserUseCase(
            user_service=user_service, promotion_service=promotion_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_me_use_case(
        self, user_service: UserService, promotion_service: PromotionService
    ) -> GetMeUseCase:
        """Provide get me use case."""
        return GetMeUseCase(
            user_service=user_service, promotion_service=promotion_service
        )

    @provide(scope=Scope.REQUEST)
    def get_lookup_user_use_case(self, user_service: UserService) -> LookupUserUseCase:
        """Provide look up user use case."""
        return LookupUserUseCase(user_service=user_service)
