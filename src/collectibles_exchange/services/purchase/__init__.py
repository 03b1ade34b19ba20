"""Buy-offer payment and cancellation."""

from collectibles_exchange.services.purchase.purchase_service import (
    OFFER_CANCELLED_ALIAS,
    PAYMENT_DECLINED_ALIAS,
    PAYMENT_INITIATED_ALIAS,
    PAYMENT_MADE_ALIAS,
    PURCHASED_ALIAS,
    PurchaseService,
)

__all__ = [
    "OFFER_CANCELLED_ALIAS",
    "PAYMENT_DECLINED_ALIAS",
    "PAYMENT_INITIATED_ALIAS",
    "PAYMENT_MADE_ALIAS",
    "PURCHASED_ALIAS",
    "PurchaseService",
]
