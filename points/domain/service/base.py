"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the ledger's business rules: the checks and
    mutations that span users, transactions, promotions and events.
    """

    pass
