# -*- coding: utf-8 -*-
"""Unit tests for CartService."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest

from collectibles_exchange.exceptions import NotFoundError
from collectibles_exchange.models.buy_offer import BuyOfferStatus
from collectibles_exchange.models.payment import PaymentState
from collectibles_exchange.utils.locks import user_key


async def _cart_with_two_lines(exchange: SimpleNamespace) -> SimpleNamespace:
    await exchange.account("seller", coins=5)
    first = await exchange.listing(title="Card A")
    second = await exchange.listing(title="Card B", asking_price="40", accept_above="20")
    a = await exchange.offers.submit_offer("buyer", first.id, Decimal("100"))
    b = await exchange.offers.submit_offer("buyer", second.id, Decimal("40"))
    return SimpleNamespace(first=first, second=second, line_a=a.line, line_b=b.line)


async def test_remove_line_frees_item_and_refunds_seller(exchange: SimpleNamespace) -> None:
    setup = await _cart_with_two_lines(exchange)
    assert await exchange.ledger.balance("seller") == 3

    cart = await exchange.carts.remove_line("buyer", setup.line_a.id)

    assert cart is not None
    assert [line.id for line in cart.lines] == [setup.line_b.id]
    assert (await exchange.items.get(setup.first.id)).reserved_by is None
    assert await exchange.ledger.balance("seller") == 4
    assert "cart-item-removed" in exchange.bus.aliases()


async def test_remove_line_waits_for_the_sellers_balance_lock(exchange: SimpleNamespace) -> None:
    setup = await _cart_with_two_lines(exchange)

    async with exchange.locks.hold([user_key("seller")]):
        task = asyncio.create_task(exchange.carts.remove_line("buyer", setup.line_a.id))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert not task.done()
        assert await exchange.ledger.balance("seller") == 3

    await task
    assert await exchange.ledger.balance("seller") == 4


async def test_removing_last_line_deletes_cart(exchange: SimpleNamespace) -> None:
    setup = await _cart_with_two_lines(exchange)
    await exchange.carts.remove_line("buyer", setup.line_a.id)

    remaining = await exchange.carts.remove_line("buyer", setup.line_b.id)

    assert remaining is None
    assert await exchange.carts.get_cart("buyer") is None
    assert await exchange.ledger.balance("seller") == 5


async def test_remove_unknown_line_raises_not_found(exchange: SimpleNamespace) -> None:
    await _cart_with_two_lines(exchange)

    with pytest.raises(NotFoundError):
        await exchange.carts.remove_line("buyer", uuid4())


async def test_checkout_creates_buy_offer_and_moves_reservations(exchange: SimpleNamespace) -> None:
    setup = await _cart_with_two_lines(exchange)

    offer = await exchange.carts.checkout("buyer")

    assert offer.code.startswith("ESW-")
    assert offer.status == BuyOfferStatus.OFFER_SENT
    assert offer.total_amount == Decimal("140")
    assert offer.payment.state == PaymentState.UNPAID
    assert offer.payment.payer_id == "buyer"
    assert offer.payment.payee_id == "seller"
    for item in (setup.first, setup.second):
        assert (await exchange.items.get(item.id)).reserved_by == offer.ref
    assert await exchange.carts.get_cart("buyer") is None
    assert await exchange.buy_offer_repo.get(offer.id) == offer
    assert "offer-sent" in exchange.bus.aliases()


async def test_checkout_without_cart_raises_not_found(exchange: SimpleNamespace) -> None:
    with pytest.raises(NotFoundError):
        await exchange.carts.checkout("buyer")


async def test_release_expired_holds_drops_only_expired_lines(exchange: SimpleNamespace) -> None:
    setup = await _cart_with_two_lines(exchange)
    later = datetime.now(UTC) + timedelta(minutes=exchange.settings.negotiation.cart_hold_minutes + 1)

    assert await exchange.carts.release_expired_holds(now=datetime.now(UTC)) == 0
    released = await exchange.carts.release_expired_holds(now=later)

    assert released == 2
    assert await exchange.carts.get_cart("buyer") is None
    assert (await exchange.items.get(setup.first.id)).reserved_by is None
    assert (await exchange.items.get(setup.second.id)).reserved_by is None
    assert await exchange.ledger.balance("seller") == 5
    assert exchange.bus.aliases().count("cart-hold-expired") == 2
