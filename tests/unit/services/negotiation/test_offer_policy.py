# -*- coding: utf-8 -*-
"""Unit tests for OfferNegotiationPolicy."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import pytest

from collectibles_exchange.models.offer_attempt import OfferAttemptCounter
from collectibles_exchange.services.negotiation.offer_policy import (
    OfferNegotiationPolicy,
    OfferOutcome,
    OfferPolicyInput,
)

ITEM_ID: UUID = uuid4()


def _input(
    amount: str,
    *,
    counter: Optional[OfferAttemptCounter] = None,
    asking_price: str = "100",
    threshold: str = "60",
    deal_zone: bool = False,
    max_attempts: int = 3,
) -> OfferPolicyInput:
    """Build OfferPolicyInput for buyer 'buyer' on ITEM_ID."""
    return OfferPolicyInput(
        buyer_id="buyer",
        item_id=ITEM_ID,
        amount=Decimal(amount),
        asking_price=Decimal(asking_price),
        threshold=Decimal(threshold),
        deal_zone=deal_zone,
        counter=counter,
        max_attempts=max_attempts,
    )


def _counter(attempts: int, last: str) -> OfferAttemptCounter:
    return OfferAttemptCounter(
        buyer_id="buyer",
        item_id=ITEM_ID,
        attempts=attempts,
        last_offer_amount=Decimal(last),
        updated_at=datetime.now(UTC),
    )


def test_low_offer_consumes_attempt_and_records_amount() -> None:
    policy = OfferNegotiationPolicy()

    decision = policy.decide(_input("50"))

    assert decision.outcome == OfferOutcome.LOW_OFFER
    assert decision.accepted is False
    assert decision.attempts == 1
    assert decision.remaining_attempts == 2
    assert decision.counter is not None
    assert decision.counter.last_offer_amount == Decimal("50")
    assert "Offer Limit: 1/3" in decision.message


def test_lower_than_previous_offer_is_rejected_without_consuming_attempt() -> None:
    policy = OfferNegotiationPolicy()
    first = policy.decide(_input("50"))

    decision = policy.decide(_input("40", counter=first.counter))

    assert decision.outcome == OfferOutcome.BELOW_PREVIOUS
    assert decision.attempts == 1
    assert decision.remaining_attempts == 2
    assert decision.counter is None
    assert "lower than your previous amount of $50.00" in decision.message


def test_offer_between_threshold_and_asking_is_below_asking() -> None:
    decision = OfferNegotiationPolicy().decide(_input("80", counter=_counter(1, "50")))

    assert decision.outcome == OfferOutcome.BELOW_ASKING
    assert decision.attempts == 2
    assert decision.remaining_attempts == 1
    assert decision.counter is not None
    assert decision.counter.last_offer_amount == Decimal("80")
    assert "$100.00" in decision.message


def test_first_offer_at_asking_price_is_recorded_as_one_attempt() -> None:
    decision = OfferNegotiationPolicy().decide(_input("100"))

    assert decision.accepted is True
    assert decision.attempts == 1
    assert decision.remaining_attempts == 2
    assert decision.counter is not None
    assert decision.counter.attempts == 1
    assert decision.counter.last_offer_amount == Decimal("100")


def test_accepted_offer_does_not_advance_existing_attempts() -> None:
    decision = OfferNegotiationPolicy().decide(_input("100", counter=_counter(2, "70")))

    assert decision.accepted is True
    assert decision.attempts == 2
    assert decision.counter is not None
    assert decision.counter.attempts == 2
    assert decision.counter.last_offer_amount == Decimal("100")


def test_offer_above_asking_price_is_invalid_and_free() -> None:
    decision = OfferNegotiationPolicy().decide(_input("120", counter=_counter(2, "70")))

    assert decision.outcome == OfferOutcome.ABOVE_ASKING
    assert decision.attempts == 2
    assert decision.counter is None
    assert "$100.00" in decision.message


def test_exhausted_standard_listing_still_accepts_asking_price() -> None:
    policy = OfferNegotiationPolicy()
    exhausted = _counter(3, "90")

    refused = policy.decide(_input("95", counter=exhausted))
    accepted = policy.decide(_input("100", counter=exhausted))

    assert refused.outcome == OfferOutcome.EXHAUSTED
    assert refused.fallback_price == Decimal("100")
    assert refused.remaining_attempts == 0
    assert accepted.accepted is True
    assert accepted.attempts == 3


def test_exhausted_deal_zone_listing_refuses_everything() -> None:
    decision = OfferNegotiationPolicy().decide(
        _input("75", counter=_counter(3, "70"), asking_price="75", threshold="75", deal_zone=True)
    )

    assert decision.outcome == OfferOutcome.EXHAUSTED
    assert decision.fallback_price is None
    assert "deal" in decision.message


def test_deal_zone_below_target_is_a_low_offer() -> None:
    decision = OfferNegotiationPolicy().decide(
        _input("70", asking_price="75", threshold="75", deal_zone=True)
    )

    assert decision.outcome == OfferOutcome.LOW_OFFER
    assert decision.attempts == 1


@pytest.mark.parametrize("amounts", [["50", "55", "90"], ["61", "61", "99"]])
def test_rejected_offers_never_lower_stored_amount_or_exceed_limit(amounts: list[str]) -> None:
    policy = OfferNegotiationPolicy()
    counter: Optional[OfferAttemptCounter] = None
    seen: list[Decimal] = []

    for amount in amounts:
        decision = policy.decide(_input(amount, counter=counter))
        if decision.counter is not None:
            counter = decision.counter
            seen.append(counter.last_offer_amount)

    assert seen == sorted(seen)
    assert counter is not None
    assert counter.attempts <= 3
