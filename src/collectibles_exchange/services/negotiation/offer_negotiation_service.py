# -*- coding: utf-8 -*-
"""OfferNegotiationService: bounded-attempt buy offers (standard and deal-zone).

An accepted offer reserves the item for a new cart line with a hold, and
charges the seller the listing fee. Every pre-check runs before an attempt
is consumed; rejected offers are returned, not raised.
"""

from __future__ import annotations

import structlog
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional
from uuid import UUID

from collectibles_exchange.exceptions import (
    ConflictError,
    NegotiationExhausted,
    ValidationError,
)
from collectibles_exchange.models.cart import Cart, CartLine
from collectibles_exchange.models.credit_ledger import DeductionFrom
from collectibles_exchange.models.item import ItemCapability
from collectibles_exchange.services.negotiation.offer_policy import (
    OfferDecision,
    OfferNegotiationPolicy,
    OfferOutcome,
    OfferPolicyInput,
)
from collectibles_exchange.utils.locks import KeyedLock, item_key, user_key

if TYPE_CHECKING:
    from collectibles_exchange.config import Settings
    from collectibles_exchange.models.item import Item
    from collectibles_exchange.persistence.repositories.interfaces.cart_repository import (
        ICartRepository,
    )
    from collectibles_exchange.persistence.repositories.interfaces.offer_attempt_repository import (
        IOfferAttemptRepository,
    )
    from collectibles_exchange.services.activity import ActivityPublisher
    from collectibles_exchange.services.credit_ledger import CreditLedgerService
    from collectibles_exchange.services.item_registry import ItemRegistry

OFFER_ACCEPTED_ALIAS = "offer-accepted"


@dataclass(frozen=True)
class OfferResult:
    decision: OfferDecision
    cart: Optional[Cart] = None
    line: Optional[CartLine] = None

    @property
    def accepted(self) -> bool:
        return self.decision.accepted

    @property
    def outcome(self) -> OfferOutcome:
        return self.decision.outcome

    @property
    def message(self) -> str:
        return self.decision.message

    @property
    def remaining_attempts(self) -> int:
        return self.decision.remaining_attempts


class OfferNegotiationService:
    """Entry point for buy offers against a single item."""

    def __init__(
        self,
        item_registry: "ItemRegistry",
        credit_ledger: "CreditLedgerService",
        offer_attempt_repository: "IOfferAttemptRepository",
        cart_repository: "ICartRepository",
        settings: "Settings",
        locks: KeyedLock,
        activity: Optional["ActivityPublisher"] = None,
        policy: Optional[OfferNegotiationPolicy] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the negotiation service.

        Args:
            item_registry: Reservation owner for items.
            credit_ledger: Charges the seller's listing fee.
            offer_attempt_repository: Per (buyer, item) counters.
            cart_repository: Buyer carts receiving accepted offers.
            settings: Application settings (negotiation section).
            locks: Shared keyed lock serializing units of work.
            activity: Optional; notifies the seller when an offer lands in a cart.
            policy: Optional; defaults to OfferNegotiationPolicy().
            get_logger: Logger factory.
            logger_name: Optional logger name.
        """
        self._items = item_registry
        self._ledger = credit_ledger
        self._attempts = offer_attempt_repository
        self._carts = cart_repository
        self._settings = settings
        self._locks = locks
        self._activity = activity
        self._policy = policy or OfferNegotiationPolicy()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def submit_offer(self, buyer_id: str, item_id: UUID, amount: Decimal) -> OfferResult:
        """Evaluate an offer of amount on item_id by buyer_id.

        Raises:
            ValidationError: Non-positive amount, self-purchase, item not purchasable,
                or a cart already holding another seller's items.
            ConflictError: Item reserved by another transaction.
            InsufficientBalance: Seller cannot pay the listing fee (action contact_seller).
            NegotiationExhausted: No attempts left.
        """
        if amount <= 0:
            raise ValidationError("Offer amount must be > 0")
        snapshot = await self._items.get(item_id)
        keys = [item_key(item_id), user_key(buyer_id), user_key(snapshot.owner_id)]
        async with self._locks.hold(keys):
            item = await self._items.get(item_id)
            cart = await self._carts.get_by_buyer(buyer_id)
            await self._precheck(buyer_id, item, cart)

            counter = await self._attempts.get(buyer_id, item_id)
            price = item.deal_zone_price if item.deal_zone_price is not None else item.asking_price
            threshold = item.deal_zone_price if item.deal_zone_price is not None else item.accept_above
            decision = self._policy.decide(
                OfferPolicyInput(
                    buyer_id=buyer_id,
                    item_id=item_id,
                    amount=amount,
                    asking_price=price,
                    threshold=threshold,
                    deal_zone=item.is_deal_zone,
                    counter=counter,
                    max_attempts=self._settings.negotiation.max_offer_attempts,
                )
            )

            if decision.outcome == OfferOutcome.EXHAUSTED:
                self._logger.info(
                    "offer_negotiation_exhausted",
                    buyer_id=buyer_id,
                    item_id=item_id,
                    amount=amount,
                    deal_zone=item.is_deal_zone,
                )
                raise NegotiationExhausted(decision.message, fallback_price=decision.fallback_price)

            if not decision.accepted:
                if decision.counter is not None:
                    await self._attempts.save(decision.counter)
                self._logger.info(
                    "offer_rejected",
                    buyer_id=buyer_id,
                    item_id=item_id,
                    amount=amount,
                    outcome=decision.outcome,
                    attempts=decision.attempts,
                    remaining_attempts=decision.remaining_attempts,
                )
                return OfferResult(decision=decision)

            result = await self._accept(buyer_id, item, amount, cart, decision)

        if self._activity is not None and result.line is not None:
            self._activity.notify(
                OFFER_ACCEPTED_ALIAS, buyer_id, item.owner_id, result.line.id, "offer"
            )
        return result

    async def _precheck(self, buyer_id: str, item: "Item", cart: Optional[Cart]) -> None:
        if buyer_id == item.owner_id:
            raise ValidationError("You cannot make an offer on your own item")
        if not item.has_capability(ItemCapability.PURCHASE):
            raise ValidationError(f"Item {item.id} is not available for purchase")
        if item.is_reserved:
            raise ConflictError(f"Item {item.id} is already in another transaction")
        if cart is not None and cart.seller_id != item.owner_id:
            raise ValidationError("Your cart already holds items from a different seller")
        fee = self._settings.negotiation.offer_listing_fee_coins
        if fee > 0:
            await self._ledger.ensure_balance(
                item.owner_id,
                fee,
                action="contact_seller",
                message="The seller cannot take offers right now, contact the seller",
            )

    async def _accept(
        self,
        buyer_id: str,
        item: "Item",
        amount: Decimal,
        cart: Optional[Cart],
        decision: OfferDecision,
    ) -> OfferResult:
        """Reserve, charge the seller and add the cart line as one unit."""
        line = CartLine.create(item.id, amount, self._settings.negotiation.cart_hold_minutes)
        await self._items.try_reserve(item.id, line.ref, ItemCapability.PURCHASE)
        fee = self._settings.negotiation.offer_listing_fee_coins
        debit_id: Optional[UUID] = None
        if fee > 0:
            try:
                entry = await self._ledger.debit(
                    item.owner_id,
                    fee,
                    line.ref,
                    DeductionFrom.SELLER,
                    counterparty_id=buyer_id,
                    insufficient_action="contact_seller",
                )
            except Exception:
                await self._items.release(item.id, line.ref)
                raise
            debit_id = entry.id
        line = CartLine(
            id=line.id,
            item_id=line.item_id,
            amount=line.amount,
            hold_expires_at=line.hold_expires_at,
            created_at=line.created_at,
            debit_entry_id=debit_id,
        )
        updated_cart = (cart or Cart.open(buyer_id, item.owner_id)).with_line(line)
        await self._carts.save(updated_cart)
        if decision.counter is not None:
            await self._attempts.save(decision.counter)
        self._logger.info(
            "offer_accepted",
            buyer_id=buyer_id,
            seller_id=item.owner_id,
            item_id=item.id,
            amount=amount,
            line_id=line.id,
            hold_expires_at=line.hold_expires_at.isoformat(),
        )
        return OfferResult(decision=decision, cart=updated_cart, line=line)
