"""Strongly typed identifiers for ledger entities.

Using NewType keeps a transaction id from being passed where an event id is
expected, which matters because transactions carry a polymorphic related id.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
TransactionId = NewType("TransactionId", UUID)
PromotionId = NewType("PromotionId", UUID)
EventId = NewType("EventId", UUID)
