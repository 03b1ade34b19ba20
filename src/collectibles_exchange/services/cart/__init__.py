"""Cart operations: line removal, checkout and hold expiry."""

from collectibles_exchange.services.cart.cart_service import (
    CART_HOLD_EXPIRED_ALIAS,
    CART_ITEM_REMOVED_ALIAS,
    OFFER_SENT_ALIAS,
    CartService,
)

__all__ = [
    "CART_HOLD_EXPIRED_ALIAS",
    "CART_ITEM_REMOVED_ALIAS",
    "OFFER_SENT_ALIAS",
    "CartService",
]
