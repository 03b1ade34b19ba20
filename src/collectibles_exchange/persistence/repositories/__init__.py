# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, etc.)."""

from collectibles_exchange.persistence.repositories.interfaces import (
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
from collectibles_exchange.persistence.repositories.in_memory import (
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
