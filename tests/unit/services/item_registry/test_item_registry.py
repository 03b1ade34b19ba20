# -*- coding: utf-8 -*-
"""Unit tests for ItemRegistry (reservation tokens and ownership transfer)."""

from __future__ import annotations

import asyncio
from decimal import Decimal
from uuid import uuid4

import pytest

from collectibles_exchange.exceptions import ConflictError, NotFoundError, ValidationError
from collectibles_exchange.models.item import ItemCapability
from collectibles_exchange.models.transaction_ref import TransactionRef
from collectibles_exchange.persistence.repositories.in_memory import InMemoryItemRepository
from collectibles_exchange.services.item_registry import ItemRegistry


async def _registry_with_item(item_repo: InMemoryItemRepository, **kwargs: object) -> tuple:
    registry = ItemRegistry(item_repo)
    item = await registry.list_item("seller", "Card", Decimal("100"), Decimal("50"), **kwargs)
    return registry, item


async def test_reserve_is_exclusive(item_repo: InMemoryItemRepository) -> None:
    registry, item = await _registry_with_item(item_repo)
    first = TransactionRef.trade(uuid4())
    second = TransactionRef.trade(uuid4())

    reserved = await registry.try_reserve(item.id, first, ItemCapability.TRADE)
    again = await registry.try_reserve(item.id, first, ItemCapability.TRADE)

    assert reserved.reserved_by == first
    assert again.reserved_by == first
    with pytest.raises(ConflictError):
        await registry.try_reserve(item.id, second, ItemCapability.TRADE)


async def test_concurrent_reservations_have_one_winner(item_repo: InMemoryItemRepository) -> None:
    registry, item = await _registry_with_item(item_repo)
    holders = [TransactionRef.cart_line(uuid4()) for _ in range(5)]

    results = await asyncio.gather(
        *(registry.try_reserve(item.id, h, ItemCapability.PURCHASE) for h in holders),
        return_exceptions=True,
    )

    winners = [r for r in results if not isinstance(r, Exception)]
    assert len(winners) == 1
    assert all(isinstance(r, ConflictError) for r in results if isinstance(r, Exception))


async def test_reserve_checks_capability(item_repo: InMemoryItemRepository) -> None:
    registry, item = await _registry_with_item(item_repo, tradable=False)

    with pytest.raises(ValidationError):
        await registry.try_reserve(item.id, TransactionRef.trade(uuid4()), ItemCapability.TRADE)


async def test_reserve_all_is_all_or_nothing(item_repo: InMemoryItemRepository) -> None:
    registry, free = await _registry_with_item(item_repo)
    taken = await registry.list_item("seller", "Other", Decimal("10"))
    await registry.try_reserve(taken.id, TransactionRef.buy_offer(uuid4()), ItemCapability.PURCHASE)
    holder = TransactionRef.trade(uuid4())

    with pytest.raises(ConflictError):
        await registry.reserve_all([free.id, taken.id], holder, ItemCapability.TRADE)

    assert (await registry.get(free.id)).reserved_by is None


async def test_release_only_clears_matching_holder(item_repo: InMemoryItemRepository) -> None:
    registry, item = await _registry_with_item(item_repo)
    holder = TransactionRef.trade(uuid4())
    await registry.try_reserve(item.id, holder, ItemCapability.TRADE)

    kept = await registry.release(item.id, TransactionRef.trade(uuid4()))
    freed = await registry.release(item.id, holder)
    repeated = await registry.release(item.id, holder)

    assert kept is not None and kept.reserved_by == holder
    assert freed is not None and freed.reserved_by is None
    assert repeated is not None and repeated.reserved_by is None


async def test_transfer_requires_holder_and_is_idempotent(item_repo: InMemoryItemRepository) -> None:
    registry, item = await _registry_with_item(item_repo)
    holder = TransactionRef.buy_offer(uuid4())
    proposal_id = uuid4()
    await registry.lock_for_proposal(item.id, proposal_id)

    with pytest.raises(ConflictError):
        await registry.transfer_ownership(item.id, "seller", "buyer", holder)
    await registry.try_reserve(item.id, holder, ItemCapability.PURCHASE)
    moved = await registry.transfer_ownership(item.id, "seller", "buyer", holder)
    repeat = await registry.transfer_ownership(item.id, "seller", "buyer", holder)

    assert moved.owner_id == "buyer"
    assert moved.reserved_by is None
    assert moved.proposal_locks == frozenset()
    assert repeat == moved


async def test_handover_moves_reservation(item_repo: InMemoryItemRepository) -> None:
    registry, item = await _registry_with_item(item_repo)
    line = TransactionRef.cart_line(uuid4())
    offer = TransactionRef.buy_offer(uuid4())
    await registry.try_reserve(item.id, line, ItemCapability.PURCHASE)

    moved = await registry.handover(item.id, line, offer)

    assert moved.reserved_by == offer
    with pytest.raises(ConflictError):
        await registry.handover(item.id, line, offer)


async def test_delist_refused_while_reserved(item_repo: InMemoryItemRepository) -> None:
    registry, item = await _registry_with_item(item_repo)
    holder = TransactionRef.trade(uuid4())
    await registry.try_reserve(item.id, holder, ItemCapability.TRADE)

    with pytest.raises(ConflictError):
        await registry.delist(item.id, "seller")
    await registry.release(item.id, holder)
    delisted = await registry.delist(item.id, "seller")

    assert delisted.is_deleted
    assert not delisted.has_capability(ItemCapability.PURCHASE)


async def test_delist_refused_while_proposals_reference_item(item_repo: InMemoryItemRepository) -> None:
    registry, item = await _registry_with_item(item_repo)
    proposal_id = uuid4()
    await registry.lock_for_proposal(item.id, proposal_id)

    with pytest.raises(ConflictError, match="open trade proposal"):
        await registry.delist(item.id, "seller")
    assert not (await registry.get(item.id)).is_deleted

    await registry.unlock_for_proposal(item.id, proposal_id)
    delisted = await registry.delist(item.id, "seller")

    assert delisted.is_deleted


async def test_invalid_prices_and_unknown_items(item_repo: InMemoryItemRepository) -> None:
    registry = ItemRegistry(item_repo)

    with pytest.raises(ValidationError):
        await registry.list_item("seller", "Card", Decimal("10"), Decimal("20"))
    with pytest.raises(NotFoundError):
        await registry.get(uuid4())
