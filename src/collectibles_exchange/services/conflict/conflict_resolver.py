# -*- coding: utf-8 -*-
"""ConflictResolver: cancels every other pending transaction on committed items.

Runs synchronously inside the committing operation (ownership transfer, or the
exclusive reservation that a paid or cash-free acceptance makes final).
"""

from __future__ import annotations

import structlog
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional
from uuid import UUID

from collectibles_exchange.models.trade_proposal import TradeStatus, TradeStatusAlias
from collectibles_exchange.models.transaction_ref import TransactionKind, TransactionRef
from collectibles_exchange.services.trade_proposal.state_machine import is_terminal

if TYPE_CHECKING:
    from collectibles_exchange.persistence.repositories.interfaces.buy_offer_repository import (
        IBuyOfferRepository,
    )
    from collectibles_exchange.persistence.repositories.interfaces.cart_repository import (
        ICartRepository,
    )
    from collectibles_exchange.persistence.repositories.interfaces.trade_proposal_repository import (
        ITradeProposalRepository,
    )
    from collectibles_exchange.services.activity import ActivityPublisher
    from collectibles_exchange.services.conflict.transaction_releaser import TransactionReleaser

CONFLICT_CANCEL_ALIAS = "cancelled-item-committed-elsewhere"


@dataclass
class SweepResult:
    cancelled_proposals: list[UUID] = field(default_factory=list)
    cancelled_buy_offers: list[UUID] = field(default_factory=list)
    removed_cart_lines: list[UUID] = field(default_factory=list)

    @property
    def total(self) -> int:
        return (
            len(self.cancelled_proposals)
            + len(self.cancelled_buy_offers)
            + len(self.removed_cart_lines)
        )


class ConflictResolver:
    """Force-cancels overlapping proposals, buy offers and cart holds."""

    def __init__(
        self,
        releaser: "TransactionReleaser",
        trade_proposal_repository: "ITradeProposalRepository",
        buy_offer_repository: "IBuyOfferRepository",
        cart_repository: "ICartRepository",
        activity: Optional["ActivityPublisher"] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._releaser = releaser
        self._proposals = trade_proposal_repository
        self._buy_offers = buy_offer_repository
        self._carts = cart_repository
        self._activity = activity
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def sweep(self, item_ids: Iterable[UUID], committed_by: TransactionRef) -> SweepResult:
        """Cancel every transaction other than committed_by that references the items.

        Runs inside the committing unit's locks, which cover the items but not
        the swept parties; refunds rely on the ledger's atomic balance updates.
        """
        result = SweepResult()
        for item_id in sorted(set(item_ids)):
            await self._sweep_proposals(item_id, committed_by, result)
            await self._sweep_buy_offers(item_id, committed_by, result)
            await self._sweep_cart(item_id, committed_by, result)
        if result.total:
            self._logger.info(
                "conflict_sweep_cancelled",
                committed_by=str(committed_by),
                proposals=len(result.cancelled_proposals),
                buy_offers=len(result.cancelled_buy_offers),
                cart_lines=len(result.removed_cart_lines),
            )
        return result

    async def _sweep_proposals(
        self, item_id: UUID, committed_by: TransactionRef, result: SweepResult
    ) -> None:
        for proposal in await self._proposals.list_by_item(item_id):
            if proposal.ref == committed_by or is_terminal(proposal.status):
                continue
            if proposal.id in result.cancelled_proposals:
                continue
            released = await self._releaser.release_trade(
                proposal, TradeStatus.CANCEL, TradeStatusAlias.TRADE_CANCELLED
            )
            result.cancelled_proposals.append(proposal.id)
            if self._activity is not None:
                for user_id in (proposal.sender_id, proposal.receiver_id):
                    self._activity.notify(
                        TradeStatusAlias.TRADE_CANCELLED.value,
                        None,
                        user_id,
                        proposal.id,
                        "trade",
                        code=released.proposal.code,
                        detail=CONFLICT_CANCEL_ALIAS,
                    )

    async def _sweep_buy_offers(
        self, item_id: UUID, committed_by: TransactionRef, result: SweepResult
    ) -> None:
        for offer in await self._buy_offers.list_open_by_item(item_id):
            if offer.ref == committed_by or offer.id in result.cancelled_buy_offers:
                continue
            await self._releaser.release_buy_offer(offer, CONFLICT_CANCEL_ALIAS)
            result.cancelled_buy_offers.append(offer.id)
            if self._activity is not None:
                self._activity.notify(
                    CONFLICT_CANCEL_ALIAS, offer.seller_id, offer.buyer_id, offer.id, "offer",
                    code=offer.code,
                )

    async def _sweep_cart(
        self, item_id: UUID, committed_by: TransactionRef, result: SweepResult
    ) -> None:
        cart = await self._carts.find_by_item(item_id)
        if cart is None:
            return
        line = cart.line_for_item(item_id)
        if line is None:
            return
        if committed_by.kind == TransactionKind.CART_LINE and committed_by.id == line.id:
            return
        await self._releaser.release_cart_line(line)
        remaining = cart.without_line(line.id)
        if remaining.is_empty:
            await self._carts.delete(cart.buyer_id)
        else:
            await self._carts.save(remaining)
        result.removed_cart_lines.append(line.id)
        if self._activity is not None:
            self._activity.notify(
                CONFLICT_CANCEL_ALIAS, cart.seller_id, cart.buyer_id, line.id, "offer"
            )
