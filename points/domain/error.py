"""Domain layer errors.

Every engine failure is one of these; none is fatal to the process and none
is retried by the engine.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when a role or ownership check fails."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class InvalidTransactionKindError(DomainError):
    """Raised when an operation is applied to the wrong kind of transaction."""

    def __init__(self, transaction_id: str, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Transaction {transaction_id} is a {actual}, expected {expected}"
        )


class InvalidPromotionError(DomainError):
    """Raised for unknown, inactive, or unqualified promotions."""

    def __init__(self, promotion_id: str, reason: str):
        self.promotion_id = promotion_id
        self.reason = reason
        super().__init__(f"Invalid promotion {promotion_id}: {reason}")


class PromotionAlreadyUsedError(DomainError):
    """Raised when a one-time promotion was already consumed by the user."""

    def __init__(self, user_id: str, promotion_id: str):
        self.user_id = user_id
        self.promotion_id = promotion_id
        super().__init__(
            f"One-time promotion {promotion_id} already used by user {user_id}"
        )


class InsufficientPointsError(DomainError):
    """Raised when a debit would drive a balance negative."""

    def __init__(self, user_id: str, balance: int, requested: int):
        self.user_id = user_id
        self.balance = balance
        self.requested = requested
        super().__init__(
            f"Insufficient points for user {user_id}: "
            f"balance {balance}, requested {requested}"
        )


class InsufficientEventPointsError(DomainError):
    """Raised when an event's remaining pool cannot cover an award."""

    def __init__(self, event_id: str, remaining: int, requested: int):
        self.event_id = event_id
        self.remaining = remaining
        self.requested = requested
        super().__init__(
            f"Event {event_id} has {remaining} points remaining, {requested} requested"
        )


class NotVerifiedError(DomainError):
    """Raised when an unverified user attempts a verified-only action."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} is not verified")


class RecipientNotVerifiedError(DomainError):
    """Raised when a transfer recipient is not verified."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"Recipient {user_id} is not verified")


class NotAGuestError(DomainError):
    """Raised when awarding event points to a user who is not a guest."""

    def __init__(self, event_id: str, utorid: str):
        self.event_id = event_id
        self.utorid = utorid
        super().__init__(f"User {utorid} is not a guest of event {event_id}")


class NoGuestsError(DomainError):
    """Raised when awarding all guests of an event that has none."""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"Event {event_id} has no guests to award")


class AlreadyProcessedError(DomainError):
    """Raised when a redemption has already been processed."""

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Redemption {transaction_id} already processed")


class AlreadyExistsError(DomainError):
    """Raised when a unique fact (user, guest, organizer) already exists."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} already exists: {identifier}")
