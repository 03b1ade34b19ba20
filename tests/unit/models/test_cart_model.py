# -*- coding: utf-8 -*-
"""Unit tests for Cart and CartLine."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from uuid import uuid4

from collectibles_exchange.models.cart import Cart, CartLine
from collectibles_exchange.models.transaction_ref import TransactionKind


def test_line_hold_expires_after_hold_minutes(now_utc: datetime) -> None:
    line = CartLine.create(uuid4(), Decimal("80"), 30, created_at=now_utc)

    assert line.hold_expires_at == now_utc + timedelta(minutes=30)
    assert line.is_expired(now_utc + timedelta(minutes=29)) is False
    assert line.is_expired(now_utc + timedelta(minutes=30)) is True
    assert line.ref.kind == TransactionKind.CART_LINE


def test_cart_totals_and_line_lookup() -> None:
    first = CartLine.create(uuid4(), Decimal("80"), 30)
    second = CartLine.create(uuid4(), Decimal("19.50"), 30)
    cart = Cart.open("buyer", "seller").with_line(first).with_line(second)

    assert cart.total == Decimal("99.50")
    assert cart.item_ids == [first.item_id, second.item_id]
    assert cart.line_for_item(second.item_id) == second
    assert cart.line_for_item(uuid4()) is None


def test_removing_the_last_line_empties_the_cart() -> None:
    line = CartLine.create(uuid4(), Decimal("80"), 30)
    cart = Cart.open("buyer", "seller").with_line(line)

    emptied = cart.without_line(line.id)

    assert emptied.is_empty is True
    assert emptied.total == Decimal("0")
    assert emptied.id == cart.id
