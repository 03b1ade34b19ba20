# -*- coding: utf-8 -*-
"""Application services."""

from collectibles_exchange.services.activity import ActivityPublisher
from collectibles_exchange.services.item_registry import ItemRegistry
from collectibles_exchange.services.credit_ledger import CreditLedgerService
from collectibles_exchange.services.payment import (
    HostedCheckoutGateway,
    IPaymentGateway,
    PaymentGate,
    PaymentHandoffService,
    PaymentResultRouter,
)
from collectibles_exchange.services.trade_proposal import (
    CancelResult,
    TradeProposalService,
    TradeStateMachine,
)
from collectibles_exchange.services.conflict import ConflictResolver, SweepResult, TransactionReleaser
from collectibles_exchange.services.negotiation import (
    OfferNegotiationPolicy,
    OfferNegotiationService,
    OfferResult,
)
from collectibles_exchange.services.cart import CartService
from collectibles_exchange.services.purchase import PurchaseService
from collectibles_exchange.services.shipping import ShipmentService
from collectibles_exchange.services.notifications import ExchangeActivityNotifier

__all__ = [
    "ActivityPublisher",
    "CancelResult",
    "CartService",
    "ConflictResolver",
    "CreditLedgerService",
    "ExchangeActivityNotifier",
    "HostedCheckoutGateway",
    "IPaymentGateway",
    "ItemRegistry",
    "OfferNegotiationPolicy",
    "OfferNegotiationService",
    "OfferResult",
    "PaymentGate",
    "PaymentHandoffService",
    "PaymentResultRouter",
    "PurchaseService",
    "ShipmentService",
    "SweepResult",
    "TradeProposalService",
    "TradeStateMachine",
    "TransactionReleaser",
]
