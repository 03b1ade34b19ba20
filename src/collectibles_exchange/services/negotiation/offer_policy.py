# -*- coding: utf-8 -*-
"""OfferNegotiationPolicy: pure logic deciding one buy offer against a listing.

No I/O. Receives the listing prices and the buyer's counter for the item and
returns the decision plus the counter value to store (if any).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID

from collectibles_exchange.models.offer_attempt import OfferAttemptCounter


class OfferOutcome(str, Enum):
    ACCEPTED = "accepted"
    ABOVE_ASKING = "above_asking"
    """Offer exceeds the asking price; no attempt consumed."""
    BELOW_PREVIOUS = "below_previous"
    """Offer lower than the buyer's previous one; no attempt consumed."""
    LOW_OFFER = "low_offer"
    """Below the acceptance threshold; one attempt consumed."""
    BELOW_ASKING = "below_asking"
    """Between threshold and asking price; one attempt consumed."""
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class OfferPolicyInput:
    """Input context for OfferNegotiationPolicy.decide."""

    buyer_id: str
    item_id: UUID
    amount: Decimal
    asking_price: Decimal
    """P: the buy-now price (deal-zone price for deal-zone listings)."""
    threshold: Decimal
    """T: offers below it are low offers (equals P for deal-zone listings)."""
    deal_zone: bool
    counter: Optional[OfferAttemptCounter]
    """None when the buyer never made an offer on the item."""
    max_attempts: int = 3


@dataclass(frozen=True)
class OfferDecision:
    """Result of OfferNegotiationPolicy evaluation (decision + message for the buyer)."""

    outcome: OfferOutcome
    message: str
    attempts: int
    remaining_attempts: int
    counter: Optional[OfferAttemptCounter] = None
    """Counter to persist; None when nothing changes."""
    fallback_price: Optional[Decimal] = None

    @property
    def accepted(self) -> bool:
        return self.outcome == OfferOutcome.ACCEPTED


def _money(value: Decimal) -> str:
    return f"${value:,.2f}"


class OfferNegotiationPolicy:
    """Pure policy: evaluates an offer in a fixed order.

    1. amount > P: reject, no attempt consumed
    2. attempts exhausted: standard listings still take an offer of exactly P,
       deal-zone listings refuse
    3. amount < T: low offer (must not go below the previous offer)
    4. T <= amount < P: below asking, same bookkeeping as a low offer
    5. amount >= P: accept, attempts unchanged (a first offer counts as one)
    """

    def decide(self, inp: OfferPolicyInput) -> OfferDecision:
        counter = inp.counter or OfferAttemptCounter.empty(inp.buyer_id, inp.item_id)
        attempts = counter.attempts
        remaining = max(inp.max_attempts - attempts, 0)

        # 1. Above asking
        if inp.amount > inp.asking_price:
            return OfferDecision(
                outcome=OfferOutcome.ABOVE_ASKING,
                message=f"Invalid offer! The asking price is {_money(inp.asking_price)}",
                attempts=attempts,
                remaining_attempts=remaining,
            )

        # 2. Exhausted
        if attempts >= inp.max_attempts:
            if not inp.deal_zone and inp.amount == inp.asking_price:
                return self._accept(inp, counter)
            return OfferDecision(
                outcome=OfferOutcome.EXHAUSTED,
                message=(
                    "Offer limit exceeded for this deal."
                    if inp.deal_zone
                    else "Offer limit exceeded, buy at asking price."
                ),
                attempts=attempts,
                remaining_attempts=0,
                fallback_price=None if inp.deal_zone else inp.asking_price,
            )

        # 5. At asking
        if inp.amount >= inp.asking_price:
            return self._accept(inp, counter)

        # 3 + 4. Rejected offers must not go down
        if inp.counter is not None and inp.amount < counter.last_offer_amount:
            return OfferDecision(
                outcome=OfferOutcome.BELOW_PREVIOUS,
                message=(
                    "You cannot submit an offer lower than your previous amount of "
                    f"{_money(counter.last_offer_amount)}"
                ),
                attempts=attempts,
                remaining_attempts=remaining,
            )

        updated = counter.with_rejected_offer(inp.amount)
        used = f"Offer Limit: {updated.attempts}/{inp.max_attempts}"
        if inp.amount < inp.threshold:
            return OfferDecision(
                outcome=OfferOutcome.LOW_OFFER,
                message=f"Insufficient amount. {used}",
                attempts=updated.attempts,
                remaining_attempts=inp.max_attempts - updated.attempts,
                counter=updated,
            )
        return OfferDecision(
            outcome=OfferOutcome.BELOW_ASKING,
            message=(
                "Offer below asking price, try at the asking price of "
                f"{_money(inp.asking_price)}. {used}"
            ),
            attempts=updated.attempts,
            remaining_attempts=inp.max_attempts - updated.attempts,
            counter=updated,
        )

    @staticmethod
    def _accept(inp: OfferPolicyInput, counter: OfferAttemptCounter) -> OfferDecision:
        updated = counter.with_accepted_offer(inp.amount)
        return OfferDecision(
            outcome=OfferOutcome.ACCEPTED,
            message="Offer accepted",
            attempts=updated.attempts,
            remaining_attempts=max(inp.max_attempts - updated.attempts, 0),
            counter=updated,
        )
