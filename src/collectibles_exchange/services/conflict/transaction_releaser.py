# -*- coding: utf-8 -*-
"""TransactionReleaser: the one path that unwinds an abandoned transaction.

Releases reservations held by the transaction, drops its proposal locks,
refunds every unrefunded coin debit tied to it and stores the closed record.
Explicit cancellation, declines and forced conflict cancellation all use it.
"""

from __future__ import annotations

import structlog
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from collectibles_exchange.models.buy_offer import BuyOffer
from collectibles_exchange.models.credit_ledger import CreditLedgerEntry
from collectibles_exchange.models.trade_proposal import TradeProposal, TradeStatus, TradeStatusAlias

if TYPE_CHECKING:
    from collectibles_exchange.models.cart import CartLine
    from collectibles_exchange.persistence.repositories.interfaces.buy_offer_repository import (
        IBuyOfferRepository,
    )
    from collectibles_exchange.persistence.repositories.interfaces.trade_proposal_repository import (
        ITradeProposalRepository,
    )
    from collectibles_exchange.services.credit_ledger import CreditLedgerService
    from collectibles_exchange.services.item_registry import ItemRegistry


@dataclass(frozen=True)
class ReleasedTrade:
    proposal: TradeProposal
    refunds: list[CreditLedgerEntry]


@dataclass(frozen=True)
class ReleasedBuyOffer:
    offer: BuyOffer
    refunds: list[CreditLedgerEntry]


class TransactionReleaser:
    """Unwinds trade proposals, buy offers and cart lines."""

    def __init__(
        self,
        item_registry: "ItemRegistry",
        credit_ledger: "CreditLedgerService",
        trade_proposal_repository: "ITradeProposalRepository",
        buy_offer_repository: "IBuyOfferRepository",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._items = item_registry
        self._ledger = credit_ledger
        self._proposals = trade_proposal_repository
        self._buy_offers = buy_offer_repository
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def release_trade(
        self,
        proposal: TradeProposal,
        status: TradeStatus,
        alias: TradeStatusAlias,
    ) -> ReleasedTrade:
        """Close the proposal with a negative terminal status; owners stay unchanged."""
        ref = proposal.ref
        for item_id in sorted(proposal.item_ids):
            await self._items.release(item_id, ref)
            await self._items.unlock_for_proposal(item_id, proposal.id)
        refunds = await self._ledger.refund_all(ref)
        closed = proposal.with_closed(status, alias)
        await self._proposals.save(closed)
        self._logger.info(
            "trade_released",
            proposal_id=proposal.id,
            status=status,
            refunds=len(refunds),
        )
        return ReleasedTrade(proposal=closed, refunds=refunds)

    async def release_buy_offer(self, offer: BuyOffer, alias: str) -> ReleasedBuyOffer:
        """Cancel an open buy offer and refund the seller's listing fees."""
        for item_id in offer.item_ids:
            await self._items.release(item_id, offer.ref)
        refunds: list[CreditLedgerEntry] = []
        for line in offer.lines:
            refunds.extend(await self._ledger.refund_all(line.ref))
        cancelled = offer.with_cancelled(alias)
        await self._buy_offers.save(cancelled)
        self._logger.info(
            "buy_offer_released",
            offer_id=offer.id,
            alias=alias,
            refunds=len(refunds),
        )
        return ReleasedBuyOffer(offer=cancelled, refunds=refunds)

    async def release_cart_line(self, line: "CartLine") -> list[CreditLedgerEntry]:
        """Free the held item and refund the seller. The caller updates the cart."""
        await self._items.release(line.item_id, line.ref)
        refunds = await self._ledger.refund_all(line.ref)
        self._logger.debug(
            "cart_line_released",
            line_id=line.id,
            item_id=line.item_id,
            refunds=len(refunds),
        )
        return refunds
