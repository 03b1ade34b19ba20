# -*- coding: utf-8 -*-
"""Domain models."""

from collectibles_exchange.models.buy_offer import BuyOffer, BuyOfferStatus
from collectibles_exchange.models.cart import Cart, CartLine
from collectibles_exchange.models.credit_ledger import (
    CreditLedgerEntry,
    DeductionFrom,
    LedgerDirection,
    LedgerEntryStatus,
)
from collectibles_exchange.models.item import Item, ItemCapability
from collectibles_exchange.models.offer_attempt import OfferAttemptCounter
from collectibles_exchange.models.payment import PaymentInfo, PaymentResultStatus, PaymentState
from collectibles_exchange.models.settlement import OwnershipTransfer, SettlementRecord
from collectibles_exchange.models.shipment import Shipment
from collectibles_exchange.models.trade_proposal import (
    TradeParty,
    TradeProposal,
    TradeStatus,
    TradeStatusAlias,
)
from collectibles_exchange.models.transaction_ref import TransactionKind, TransactionRef
from collectibles_exchange.models.user_account import UserAccount

__all__ = [
    "BuyOffer",
    "BuyOfferStatus",
    "Cart",
    "CartLine",
    "CreditLedgerEntry",
    "DeductionFrom",
    "Item",
    "ItemCapability",
    "LedgerDirection",
    "LedgerEntryStatus",
    "OfferAttemptCounter",
    "OwnershipTransfer",
    "PaymentInfo",
    "PaymentResultStatus",
    "PaymentState",
    "SettlementRecord",
    "Shipment",
    "TradeParty",
    "TradeProposal",
    "TradeStatus",
    "TradeStatusAlias",
    "TransactionKind",
    "TransactionRef",
    "UserAccount",
]
