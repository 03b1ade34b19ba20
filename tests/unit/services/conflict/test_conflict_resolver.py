# -*- coding: utf-8 -*-
"""Unit tests for ConflictResolver and TransactionReleaser."""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

from collectibles_exchange.models.buy_offer import BuyOfferStatus
from collectibles_exchange.models.trade_proposal import TradeStatus, TradeStatusAlias
from collectibles_exchange.models.transaction_ref import TransactionRef
from collectibles_exchange.services.conflict import CONFLICT_CANCEL_ALIAS


async def test_sweep_cancels_proposals_offers_and_cart_lines(exchange: SimpleNamespace) -> None:
    await exchange.account("seller", coins=5)
    await exchange.account("alice", coins=5)
    await exchange.account("carol", coins=5)
    sold = await exchange.listing(title="Sold card")
    held = await exchange.listing(title="Held card")
    mine = await exchange.listing("alice", title="Alice card")
    proposal = await exchange.trades.propose_trade("alice", "seller", [mine.id], [sold.id, held.id])
    await exchange.offers.submit_offer("buyer", sold.id, Decimal("100"))
    offer = await exchange.carts.checkout("buyer")
    line = (await exchange.offers.submit_offer("carol", held.id, Decimal("100"))).line
    assert await exchange.ledger.balance("seller") == 3

    result = await exchange.conflicts.sweep([sold.id, held.id], TransactionRef.trade(uuid4()))

    assert result.cancelled_proposals == [proposal.id]
    assert result.cancelled_buy_offers == [offer.id]
    assert result.removed_cart_lines == [line.id]
    assert result.total == 3
    assert (await exchange.trades.get(proposal.id)).status == TradeStatus.CANCEL
    assert (await exchange.purchases.get(offer.id)).status == BuyOfferStatus.CANCELLED
    assert await exchange.carts.get_cart("carol") is None
    assert await exchange.ledger.balance("seller") == 5
    for item_id in (sold.id, held.id, mine.id):
        item = await exchange.items.get(item_id)
        assert item.reserved_by is None
        assert item.proposal_locks == frozenset()
    assert CONFLICT_CANCEL_ALIAS in exchange.bus.aliases()


async def test_sweep_skips_the_committing_transaction(exchange: SimpleNamespace) -> None:
    await exchange.account("alice", coins=5)
    await exchange.account("bob", coins=5)
    card_a = await exchange.listing("alice")
    card_b = await exchange.listing("bob")
    proposal = await exchange.trades.propose_trade("alice", "bob", [card_a.id], [card_b.id])

    result = await exchange.conflicts.sweep(proposal.item_ids, proposal.ref)

    assert result.total == 0
    assert (await exchange.trades.get(proposal.id)).status == TradeStatus.NEW


async def test_sweep_leaves_terminal_proposals_alone(exchange: SimpleNamespace) -> None:
    await exchange.account("alice", coins=5)
    await exchange.account("bob", coins=5)
    card_a = await exchange.listing("alice")
    card_b = await exchange.listing("bob")
    declined = await exchange.trades.propose_trade("alice", "bob", [card_a.id], [card_b.id])
    await exchange.trades.decline_trade(declined.id, "bob")

    result = await exchange.conflicts.sweep([card_b.id], TransactionRef.buy_offer(card_b.id))

    assert result.total == 0
    stored = await exchange.trades.get(declined.id)
    assert stored.status == TradeStatus.DECLINED
    assert stored.status_alias == TradeStatusAlias.TRADE_DECLINED


async def test_release_trade_refunds_once_when_repeated(exchange: SimpleNamespace) -> None:
    await exchange.account("alice", coins=5)
    await exchange.account("bob", coins=5)
    card_a = await exchange.listing("alice")
    card_b = await exchange.listing("bob")
    proposal = await exchange.trades.propose_trade("alice", "bob", [card_a.id], [card_b.id])
    accepted = await exchange.trades.accept_trade(proposal.id, "bob")

    first = await exchange.releaser.release_trade(
        accepted, TradeStatus.CANCEL, TradeStatusAlias.TRADE_CANCELLED
    )
    second = await exchange.releaser.release_trade(
        accepted, TradeStatus.CANCEL, TradeStatusAlias.TRADE_CANCELLED
    )

    assert len(first.refunds) == 2
    assert second.refunds == []
    assert await exchange.ledger.balance("alice") == 5
    assert await exchange.ledger.balance("bob") == 5
