"""Persistence layer (repositories, etc.)."""

from collectibles_exchange.persistence.repositories import (
    IBuyOfferRepository,
    ICartRepository,
    ICreditLedgerRepository,
    IItemRepository,
    IOfferAttemptRepository,
    ISettlementRepository,
    IShipmentRepository,
    ITradeProposalRepository,
    IUserAccountRepository,
)
from collectibles_exchange.persistence.repositories import (
    InMemoryBuyOfferRepository,
    InMemoryCartRepository,
    InMemoryCreditLedgerRepository,
    InMemoryItemRepository,
    InMemoryOfferAttemptRepository,
    InMemorySettlementRepository,
    InMemoryShipmentRepository,
    InMemoryTradeProposalRepository,
    InMemoryUserAccountRepository,
)

__all__ = [
    "IBuyOfferRepository",
    "ICartRepository",
    "ICreditLedgerRepository",
    "IItemRepository",
    "IOfferAttemptRepository",
    "ISettlementRepository",
    "IShipmentRepository",
    "ITradeProposalRepository",
    "IUserAccountRepository",
    "InMemoryBuyOfferRepository",
    "InMemoryCartRepository",
    "InMemoryCreditLedgerRepository",
    "InMemoryItemRepository",
    "InMemoryOfferAttemptRepository",
    "InMemorySettlementRepository",
    "InMemoryShipmentRepository",
    "InMemoryTradeProposalRepository",
    "InMemoryUserAccountRepository",
]
