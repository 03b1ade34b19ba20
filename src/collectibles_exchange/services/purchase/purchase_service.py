# -*- coding: utf-8 -*-
"""PurchaseService: pays for or cancels a checked-out buy offer.

The approved payment is the commit point of a purchase: ownership moves to the
buyer and every other transaction on the bought items is cancelled.
"""

from __future__ import annotations

import structlog
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional
from uuid import UUID

from collectibles_exchange.exceptions import ConflictError, NotFoundError, ValidationError
from collectibles_exchange.models.buy_offer import BuyOffer
from collectibles_exchange.models.payment import PaymentResultStatus
from collectibles_exchange.services.payment.payment_gate import PaymentOutcome
from collectibles_exchange.utils.locks import KeyedLock, buy_offer_key, item_key, user_key

if TYPE_CHECKING:
    from collectibles_exchange.persistence.repositories.interfaces.buy_offer_repository import (
        IBuyOfferRepository,
    )
    from collectibles_exchange.services.activity import ActivityPublisher
    from collectibles_exchange.services.conflict import ConflictResolver, TransactionReleaser
    from collectibles_exchange.services.item_registry import ItemRegistry
    from collectibles_exchange.services.payment.payment_handoff import PaymentHandoffService

PAYMENT_INITIATED_ALIAS = "payment-initiated"
PAYMENT_MADE_ALIAS = "payment-made"
PAYMENT_DECLINED_ALIAS = "payment-declined"
OFFER_CANCELLED_ALIAS = "offer-cancelled"
PURCHASED_ALIAS = "purchased"


class PurchaseService:
    """Payment and cancellation of buy offers."""

    def __init__(
        self,
        buy_offer_repository: "IBuyOfferRepository",
        item_registry: "ItemRegistry",
        releaser: "TransactionReleaser",
        conflict_resolver: "ConflictResolver",
        payment_handoff: "PaymentHandoffService",
        locks: KeyedLock,
        activity: Optional["ActivityPublisher"] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._buy_offers = buy_offer_repository
        self._items = item_registry
        self._releaser = releaser
        self._conflicts = conflict_resolver
        self._handoff = payment_handoff
        self._locks = locks
        self._activity = activity
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def get(self, offer_id: UUID) -> BuyOffer:
        offer = await self._buy_offers.get(offer_id)
        if offer is None:
            raise NotFoundError("BuyOffer", offer_id)
        return offer

    async def initiate_payment(self, offer_id: UUID, buyer_id: str) -> BuyOffer:
        """Start (or resume) the buyer's payment and return the offer with its redirect target.

        Raises:
            ValidationError: Not the buyer, or the seller has no payout details.
            ConflictError: Offer no longer open or already paid.
        """
        async with self._locks.hold([buy_offer_key(offer_id)]):
            offer = await self.get(offer_id)
            if not offer.is_open:
                raise ConflictError(f"Buy offer {offer.code} is {offer.status.value}")
            if offer.buyer_id != buyer_id:
                raise ValidationError("Only the buyer can pay for this offer")
            handoff = await self._handoff.prepare(
                offer.payment, buyer_id, transaction_id=offer.id, kind="payment"
            )
            offer = offer.with_payment(handoff.payment, status_alias=PAYMENT_INITIATED_ALIAS)
            await self._buy_offers.save(offer)

        payment = await self._handoff.redirect(offer.payment, transaction_id=offer.id, kind="payment")
        if payment is not offer.payment:
            async with self._locks.hold([buy_offer_key(offer_id)]):
                current = await self.get(offer_id)
                if current.payment.payment_ref != payment.payment_ref or current.payment.state != payment.state:
                    return current
                offer = current.with_payment(payment)
                await self._buy_offers.save(offer)
        if handoff.started and self._activity is not None:
            self._activity.notify(
                PAYMENT_INITIATED_ALIAS, buyer_id, offer.seller_id, offer.id, "payment", code=offer.code
            )
        return offer

    async def confirm_payment(
        self,
        payment_ref: str,
        status: PaymentResultStatus,
        payer_id: Optional[str],
        amount: Decimal,
    ) -> BuyOffer:
        """Apply the gateway result. Approval completes the purchase exactly once."""
        snapshot = await self._buy_offers.get_by_payment_ref(payment_ref)
        if snapshot is None:
            raise NotFoundError("BuyOffer payment", payment_ref)
        keys = [
            buy_offer_key(snapshot.id),
            user_key(snapshot.buyer_id),
            user_key(snapshot.seller_id),
            *(item_key(i) for i in snapshot.item_ids),
        ]
        cancelled_conflicts = 0
        async with self._locks.hold(keys):
            offer = await self.get(snapshot.id)
            result = self._handoff.gate.apply_result(
                offer.payment, status, gateway_payer_id=payer_id, amount=amount
            )
            if result.outcome == PaymentOutcome.ALREADY_PAID:
                return offer
            if result.outcome == PaymentOutcome.DECLINED:
                offer = offer.with_payment(result.payment, status_alias=PAYMENT_DECLINED_ALIAS)
                await self._buy_offers.save(offer)
            else:
                if not offer.is_open:
                    raise ConflictError(f"Buy offer {offer.code} is {offer.status.value}")
                for item_id in sorted(offer.item_ids):
                    await self._items.transfer_ownership(
                        item_id, offer.seller_id, offer.buyer_id, offer.ref
                    )
                offer = offer.with_payment(result.payment, status_alias=PURCHASED_ALIAS).with_purchased()
                await self._buy_offers.save(offer)
                sweep = await self._conflicts.sweep(offer.item_ids, offer.ref)
                cancelled_conflicts = sweep.total

        self._logger.info(
            "buy_offer_payment_result",
            offer_id=offer.id,
            code=offer.code,
            outcome=result.outcome,
            amount=amount,
            cancelled_conflicts=cancelled_conflicts,
        )
        if self._activity is not None:
            if result.outcome == PaymentOutcome.PAID:
                self._activity.notify(
                    PAYMENT_MADE_ALIAS, offer.buyer_id, offer.seller_id, offer.id, "payment", code=offer.code
                )
                self._activity.settlement_completed(
                    offer.id, "offer", list(offer.item_ids), cancelled_conflicts
                )
            else:
                self._activity.notify(
                    PAYMENT_DECLINED_ALIAS, None, offer.buyer_id, offer.id, "payment", code=offer.code
                )
        return offer

    async def cancel(self, offer_id: UUID, actor_id: str) -> BuyOffer:
        """Cancel an open offer: items are freed and the seller's fees refunded.

        Raises:
            ValidationError: actor is neither buyer nor seller.
            ConflictError: A payment is in progress or done.
        """
        snapshot = await self.get(offer_id)
        keys = [
            buy_offer_key(offer_id),
            user_key(snapshot.buyer_id),
            user_key(snapshot.seller_id),
            *(item_key(i) for i in snapshot.item_ids),
        ]
        async with self._locks.hold(keys):
            offer = await self.get(offer_id)
            if actor_id not in (offer.buyer_id, offer.seller_id):
                raise ValidationError("Only the buyer or the seller can cancel this offer")
            if not offer.is_open:
                return offer
            if self._handoff.gate.blocks_cancellation(offer.payment):
                raise ConflictError("A payment for this offer is already in progress")
            released = await self._releaser.release_buy_offer(offer, OFFER_CANCELLED_ALIAS)
        if self._activity is not None:
            self._activity.notify(
                OFFER_CANCELLED_ALIAS,
                actor_id,
                offer.seller_id if actor_id == offer.buyer_id else offer.buyer_id,
                offer.id,
                "offer",
                code=offer.code,
            )
        return released.offer
