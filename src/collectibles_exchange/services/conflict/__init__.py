"""Conflict resolution and transaction release."""

from collectibles_exchange.services.conflict.conflict_resolver import (
    CONFLICT_CANCEL_ALIAS,
    ConflictResolver,
    SweepResult,
)
from collectibles_exchange.services.conflict.transaction_releaser import (
    ReleasedBuyOffer,
    ReleasedTrade,
    TransactionReleaser,
)

__all__ = [
    "CONFLICT_CANCEL_ALIAS",
    "ConflictResolver",
    "ReleasedBuyOffer",
    "ReleasedTrade",
    "SweepResult",
    "TransactionReleaser",
]
