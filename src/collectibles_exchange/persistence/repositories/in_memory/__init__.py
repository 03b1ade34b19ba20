"""In-memory repository implementations."""

from collectibles_exchange.persistence.repositories.in_memory.buy_offer_repository import (
    InMemoryBuyOfferRepository,
)
from collectibles_exchange.persistence.repositories.in_memory.cart_repository import (
    InMemoryCartRepository,
)
from collectibles_exchange.persistence.repositories.in_memory.credit_ledger_repository import (
    InMemoryCreditLedgerRepository,
)
from collectibles_exchange.persistence.repositories.in_memory.item_repository import (
    InMemoryItemRepository,
)
from collectibles_exchange.persistence.repositories.in_memory.offer_attempt_repository import (
    InMemoryOfferAttemptRepository,
)
from collectibles_exchange.persistence.repositories.in_memory.settlement_repository import (
    InMemorySettlementRepository,
)
from collectibles_exchange.persistence.repositories.in_memory.shipment_repository import (
    InMemoryShipmentRepository,
)
from collectibles_exchange.persistence.repositories.in_memory.trade_proposal_repository import (
    InMemoryTradeProposalRepository,
)
from collectibles_exchange.persistence.repositories.in_memory.user_account_repository import (
    InMemoryUserAccountRepository,
)

__all__ = [
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
