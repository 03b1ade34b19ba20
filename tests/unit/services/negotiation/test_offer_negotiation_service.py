# -*- coding: utf-8 -*-
"""Unit tests for OfferNegotiationService (offers landing in carts)."""

from __future__ import annotations

import asyncio
from decimal import Decimal
from types import SimpleNamespace

import pytest

from collectibles_exchange.exceptions import (
    ConflictError,
    InsufficientBalance,
    NegotiationExhausted,
    ValidationError,
)
from collectibles_exchange.models.credit_ledger import DeductionFrom
from collectibles_exchange.models.transaction_ref import TransactionKind
from collectibles_exchange.services.negotiation import OfferOutcome


async def test_low_offer_then_lower_offer_is_refused(exchange: SimpleNamespace) -> None:
    await exchange.account("seller")
    item = await exchange.listing(accept_above="60")

    first = await exchange.offers.submit_offer("buyer", item.id, Decimal("50"))
    second = await exchange.offers.submit_offer("buyer", item.id, Decimal("40"))

    assert first.outcome == OfferOutcome.LOW_OFFER
    assert first.remaining_attempts == 2
    assert second.outcome == OfferOutcome.BELOW_PREVIOUS
    assert "$50.00" in second.message
    counter = await exchange.attempt_repo.get("buyer", item.id)
    assert counter is not None
    assert counter.attempts == 1
    assert counter.last_offer_amount == Decimal("50")
    assert await exchange.cart_repo.get_by_buyer("buyer") is None


async def test_offer_at_asking_price_reserves_item_and_charges_seller(
    exchange: SimpleNamespace,
) -> None:
    await exchange.account("seller", coins=5)
    item = await exchange.listing()

    result = await exchange.offers.submit_offer("buyer", item.id, Decimal("100"))

    assert result.accepted is True
    assert result.line is not None
    assert result.cart is not None
    assert result.cart.seller_id == "seller"
    assert result.line.hold_expires_at > result.line.created_at

    stored = await exchange.items.get(item.id)
    assert stored.reserved_by == result.line.ref
    assert stored.reserved_by.kind == TransactionKind.CART_LINE
    assert await exchange.ledger.balance("seller") == 4

    entries = await exchange.ledger.entries_for(result.line.ref)
    assert len(entries) == 1
    assert entries[0].deduction_from == DeductionFrom.SELLER
    assert entries[0].id == result.line.debit_entry_id
    assert "offer-accepted" in exchange.bus.aliases()

    counter = await exchange.attempt_repo.get("buyer", item.id)
    assert counter is not None
    assert counter.attempts == 1
    assert counter.last_offer_amount == Decimal("100")


async def test_concurrent_offers_at_asking_price_have_one_winner(exchange: SimpleNamespace) -> None:
    await exchange.account("seller", coins=5)
    item = await exchange.listing()

    results = await asyncio.gather(
        exchange.offers.submit_offer("buyer-1", item.id, Decimal("100")),
        exchange.offers.submit_offer("buyer-2", item.id, Decimal("100")),
        return_exceptions=True,
    )

    winners = [r for r in results if not isinstance(r, Exception)]
    assert len(winners) == 1
    assert winners[0].accepted is True
    assert all(isinstance(r, ConflictError) for r in results if isinstance(r, Exception))
    carts = [await exchange.cart_repo.get_by_buyer(b) for b in ("buyer-1", "buyer-2")]
    lines = [line for cart in carts if cart is not None for line in cart.lines]
    assert len(lines) == 1
    assert (await exchange.items.get(item.id)).reserved_by == lines[0].ref
    assert await exchange.ledger.balance("seller") == 4
    seller_debits = [e for e in await exchange.ledger.history("seller") if e.is_debit]
    assert len(seller_debits) == 1


async def test_seller_without_coins_blocks_offer_before_attempt_is_used(
    exchange: SimpleNamespace,
) -> None:
    await exchange.account("seller", coins=0)
    item = await exchange.listing()

    with pytest.raises(InsufficientBalance) as exc_info:
        await exchange.offers.submit_offer("buyer", item.id, Decimal("50"))

    assert exc_info.value.action == "contact_seller"
    assert await exchange.attempt_repo.get("buyer", item.id) is None


async def test_fourth_offer_raises_exhausted_with_fallback_price(exchange: SimpleNamespace) -> None:
    await exchange.account("seller")
    item = await exchange.listing(accept_above="60")
    for amount in ("50", "55", "70"):
        await exchange.offers.submit_offer("buyer", item.id, Decimal(amount))

    with pytest.raises(NegotiationExhausted) as exc_info:
        await exchange.offers.submit_offer("buyer", item.id, Decimal("90"))

    assert exc_info.value.fallback_price == Decimal("100")
    paid_in_full = await exchange.offers.submit_offer("buyer", item.id, Decimal("100"))
    assert paid_in_full.accepted is True


async def test_deal_zone_listing_accepts_only_the_deal_price(exchange: SimpleNamespace) -> None:
    await exchange.account("seller")
    item = await exchange.listing(deal_zone_price=Decimal("75"))

    low = await exchange.offers.submit_offer("buyer", item.id, Decimal("70"))
    deal = await exchange.offers.submit_offer("buyer", item.id, Decimal("75"))

    assert low.outcome == OfferOutcome.LOW_OFFER
    assert deal.accepted is True


async def test_offer_on_own_item_is_rejected(exchange: SimpleNamespace) -> None:
    await exchange.account("seller")
    item = await exchange.listing()

    with pytest.raises(ValidationError):
        await exchange.offers.submit_offer("seller", item.id, Decimal("100"))


async def test_offer_on_reserved_item_is_a_conflict(exchange: SimpleNamespace) -> None:
    await exchange.account("seller")
    item = await exchange.listing()
    await exchange.offers.submit_offer("buyer", item.id, Decimal("100"))

    with pytest.raises(ConflictError):
        await exchange.offers.submit_offer("other-buyer", item.id, Decimal("100"))

    assert await exchange.attempt_repo.get("other-buyer", item.id) is None


async def test_cart_cannot_mix_sellers(exchange: SimpleNamespace) -> None:
    await exchange.account("seller")
    await exchange.account("seller-2")
    first = await exchange.listing("seller")
    second = await exchange.listing("seller-2")
    await exchange.offers.submit_offer("buyer", first.id, Decimal("100"))

    with pytest.raises(ValidationError, match="different seller"):
        await exchange.offers.submit_offer("buyer", second.id, Decimal("100"))


async def test_non_positive_offer_is_rejected(exchange: SimpleNamespace) -> None:
    item = await exchange.listing()

    with pytest.raises(ValidationError):
        await exchange.offers.submit_offer("buyer", item.id, Decimal("0"))


async def test_item_not_for_sale_is_rejected(exchange: SimpleNamespace) -> None:
    await exchange.account("seller")
    item = await exchange.listing(purchasable=False)

    with pytest.raises(ValidationError):
        await exchange.offers.submit_offer("buyer", item.id, Decimal("100"))
