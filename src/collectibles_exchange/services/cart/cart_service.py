# -*- coding: utf-8 -*-
"""CartService: removal of held lines, checkout into a buy offer, opt-in hold expiry.

Hold expiry is never swept automatically; release_expired_holds exists for an
operator or scheduler that chooses to enforce holds.
"""

from __future__ import annotations

import structlog
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Callable, Optional
from uuid import UUID

from collectibles_exchange.exceptions import NotFoundError, ValidationError
from collectibles_exchange.models.buy_offer import BuyOffer
from collectibles_exchange.models.cart import Cart
from collectibles_exchange.utils.codes import BUY_OFFER_CODE_PREFIX, transaction_code
from collectibles_exchange.utils.locks import KeyedLock, item_key, user_key

if TYPE_CHECKING:
    from collectibles_exchange.persistence.repositories.interfaces.buy_offer_repository import (
        IBuyOfferRepository,
    )
    from collectibles_exchange.persistence.repositories.interfaces.cart_repository import (
        ICartRepository,
    )
    from collectibles_exchange.services.activity import ActivityPublisher
    from collectibles_exchange.services.conflict.transaction_releaser import TransactionReleaser
    from collectibles_exchange.services.item_registry import ItemRegistry

CART_ITEM_REMOVED_ALIAS = "cart-item-removed"
CART_HOLD_EXPIRED_ALIAS = "cart-hold-expired"
OFFER_SENT_ALIAS = "offer-sent"


class CartService:
    """Buyer-side operations on carts built from accepted offers."""

    def __init__(
        self,
        cart_repository: "ICartRepository",
        buy_offer_repository: "IBuyOfferRepository",
        item_registry: "ItemRegistry",
        releaser: "TransactionReleaser",
        locks: KeyedLock,
        activity: Optional["ActivityPublisher"] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._carts = cart_repository
        self._buy_offers = buy_offer_repository
        self._items = item_registry
        self._releaser = releaser
        self._locks = locks
        self._activity = activity
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def get_cart(self, buyer_id: str) -> Optional[Cart]:
        return await self._carts.get_by_buyer(buyer_id)

    async def remove_line(self, buyer_id: str, line_id: UUID) -> Optional[Cart]:
        """Drop a line: the item is freed and the seller's fee refunded.

        Returns the remaining cart, or None once it is empty (and deleted).
        """
        cart = await self._require_cart(buyer_id)
        line = next((ln for ln in cart.lines if ln.id == line_id), None)
        if line is None:
            raise NotFoundError("CartLine", line_id)
        keys = [user_key(buyer_id), user_key(cart.seller_id), item_key(line.item_id)]
        async with self._locks.hold(keys):
            cart = await self._require_cart(buyer_id)
            if all(ln.id != line_id for ln in cart.lines):
                return cart
            remaining = await self._drop_line(cart, line_id)
        if self._activity is not None:
            self._activity.notify(CART_ITEM_REMOVED_ALIAS, buyer_id, cart.seller_id, line_id, "offer")
        return remaining

    async def checkout(self, buyer_id: str) -> BuyOffer:
        """Turn the cart into an OFFER_SENT buy offer and delete the cart.

        Item reservations move from the cart lines to the buy offer.
        """
        cart = await self._require_cart(buyer_id)
        keys = [user_key(buyer_id), *(item_key(i) for i in cart.item_ids)]
        async with self._locks.hold(keys):
            cart = await self._require_cart(buyer_id)
            if cart.is_empty:
                raise ValidationError("Cart is empty")
            offer = BuyOffer.create(
                transaction_code(BUY_OFFER_CODE_PREFIX),
                buyer_id,
                cart.seller_id,
                cart.lines,
            )
            moved: list[UUID] = []
            try:
                for line in cart.lines:
                    await self._items.handover(line.item_id, line.ref, offer.ref)
                    moved.append(line.item_id)
            except Exception:
                by_item = {ln.item_id: ln for ln in cart.lines}
                for item_id in moved:
                    await self._items.handover(item_id, offer.ref, by_item[item_id].ref)
                raise
            await self._buy_offers.save(offer)
            await self._carts.delete(buyer_id)
        self._logger.info(
            "cart_checked_out",
            buyer_id=buyer_id,
            seller_id=offer.seller_id,
            offer_id=offer.id,
            code=offer.code,
            total_amount=offer.total_amount,
            lines=len(offer.lines),
        )
        if self._activity is not None:
            self._activity.notify(
                OFFER_SENT_ALIAS, buyer_id, offer.seller_id, offer.id, "offer", code=offer.code
            )
        return offer

    async def release_expired_holds(self, now: Optional[datetime] = None) -> int:
        """Remove every line whose hold has expired. Returns how many were released."""
        at = now or datetime.now(UTC)
        released = 0
        for cart in await self._carts.list_all():
            for line in cart.lines:
                if not line.is_expired(at):
                    continue
                keys = [user_key(cart.buyer_id), user_key(cart.seller_id), item_key(line.item_id)]
                async with self._locks.hold(keys):
                    current = await self._carts.get_by_buyer(cart.buyer_id)
                    if current is None or all(ln.id != line.id for ln in current.lines):
                        continue
                    await self._drop_line(current, line.id)
                released += 1
                if self._activity is not None:
                    self._activity.notify(
                        CART_HOLD_EXPIRED_ALIAS, None, cart.buyer_id, line.id, "offer"
                    )
        if released:
            self._logger.info("cart_expired_holds_released", released=released)
        return released

    async def _drop_line(self, cart: Cart, line_id: UUID) -> Optional[Cart]:
        line = next(ln for ln in cart.lines if ln.id == line_id)
        await self._releaser.release_cart_line(line)
        remaining = cart.without_line(line_id)
        if remaining.is_empty:
            await self._carts.delete(cart.buyer_id)
            return None
        await self._carts.save(remaining)
        return remaining

    async def _require_cart(self, buyer_id: str) -> Cart:
        cart = await self._carts.get_by_buyer(buyer_id)
        if cart is None:
            raise NotFoundError("Cart", buyer_id)
        return cart
