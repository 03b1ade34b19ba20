# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/, sql/, etc."""

from collectibles_exchange.persistence.repositories.interfaces.buy_offer_repository import (
    IBuyOfferRepository,
)
from collectibles_exchange.persistence.repositories.interfaces.cart_repository import (
    ICartRepository,
)
from collectibles_exchange.persistence.repositories.interfaces.credit_ledger_repository import (
    ICreditLedgerRepository,
)
from collectibles_exchange.persistence.repositories.interfaces.item_repository import (
    IItemRepository,
)
from collectibles_exchange.persistence.repositories.interfaces.offer_attempt_repository import (
    IOfferAttemptRepository,
)
from collectibles_exchange.persistence.repositories.interfaces.settlement_repository import (
    ISettlementRepository,
)
from collectibles_exchange.persistence.repositories.interfaces.shipment_repository import (
    IShipmentRepository,
)
from collectibles_exchange.persistence.repositories.interfaces.trade_proposal_repository import (
    ITradeProposalRepository,
)
from collectibles_exchange.persistence.repositories.interfaces.user_account_repository import (
    IUserAccountRepository,
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
]
