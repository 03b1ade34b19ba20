# -*- coding: utf-8 -*-
"""Unit tests for ShipmentService."""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace

import pytest

from collectibles_exchange.exceptions import (
    ConflictError,
    NotFoundError,
    PaymentRequiredError,
    ValidationError,
)
from collectibles_exchange.models.trade_proposal import TradeProposal, TradeStatusAlias


async def _accepted(exchange: SimpleNamespace, **cash: Decimal) -> TradeProposal:
    await exchange.account("alice", coins=5)
    await exchange.account("bob", coins=5)
    card_a = await exchange.listing("alice")
    card_b = await exchange.listing("bob")
    proposal = await exchange.trades.propose_trade("alice", "bob", [card_a.id], [card_b.id], **cash)
    return await exchange.trades.accept_trade(proposal.id, "bob")


async def test_each_side_shipping_updates_alias(exchange: SimpleNamespace) -> None:
    proposal = await _accepted(exchange)

    await exchange.shipments.record_shipment(proposal.id, "bob", "TRK-B", carrier="UPS")
    assert (await exchange.trades.get(proposal.id)).status_alias == TradeStatusAlias.SHIPPED_BY_RECEIVER
    shipment = await exchange.shipments.record_shipment(proposal.id, "alice", " TRK-A ")

    assert shipment.tracking_id == "TRK-A"
    assert shipment.shipment_status == "shipped"
    assert (await exchange.trades.get(proposal.id)).status_alias == TradeStatusAlias.BOTH_TRADERS_SHIPPED
    assert "shipped-by-receiver" in exchange.bus.aliases()
    assert "both-traders-shipped" in exchange.bus.aliases()


async def test_recording_again_corrects_tracking_id(exchange: SimpleNamespace) -> None:
    proposal = await _accepted(exchange)
    first = await exchange.shipments.record_shipment(proposal.id, "alice", "TRK-1", carrier="DHL")

    second = await exchange.shipments.record_shipment(proposal.id, "alice", "TRK-2")

    assert second.id == first.id
    assert second.tracking_id == "TRK-2"
    assert second.carrier == "DHL"
    assert len(await exchange.shipment_repo.list_by_proposal(proposal.id)) == 1


async def test_shipping_requires_accepted_proposal(exchange: SimpleNamespace) -> None:
    await exchange.account("alice", coins=5)
    await exchange.account("bob", coins=5)
    card_a = await exchange.listing("alice")
    card_b = await exchange.listing("bob")
    proposal = await exchange.trades.propose_trade("alice", "bob", [card_a.id], [card_b.id])

    with pytest.raises(ConflictError):
        await exchange.shipments.record_shipment(proposal.id, "alice", "TRK-1")


async def test_shipping_waits_for_cash_payment(exchange: SimpleNamespace) -> None:
    proposal = await _accepted(exchange, add_cash=Decimal("40"))

    with pytest.raises(PaymentRequiredError):
        await exchange.shipments.record_shipment(proposal.id, "bob", "TRK-1")


async def test_shipping_rejects_outsiders_and_blank_tracking(exchange: SimpleNamespace) -> None:
    proposal = await _accepted(exchange)

    with pytest.raises(ValidationError):
        await exchange.shipments.record_shipment(proposal.id, "mallory", "TRK-1")
    with pytest.raises(ValidationError):
        await exchange.shipments.record_shipment(proposal.id, "alice", "   ")


async def test_update_status_notifies_counterparty(exchange: SimpleNamespace) -> None:
    proposal = await _accepted(exchange)
    await exchange.shipments.record_shipment(proposal.id, "alice", "TRK-1")

    updated = await exchange.shipments.update_status(proposal.id, "alice", "delivered")
    unchanged = await exchange.shipments.update_status(proposal.id, "alice", "delivered")

    assert updated.shipment_status == "delivered"
    assert unchanged == updated
    events = [e for e in exchange.bus.dispatched if getattr(e, "alias", None) == "shipment-status-updated"]
    assert len(events) == 1
    assert events[0].to_user_id == "bob"
    assert events[0].detail == "delivered"


async def test_update_status_without_shipment_raises(exchange: SimpleNamespace) -> None:
    proposal = await _accepted(exchange)

    with pytest.raises(NotFoundError):
        await exchange.shipments.update_status(proposal.id, "bob", "in_transit")
