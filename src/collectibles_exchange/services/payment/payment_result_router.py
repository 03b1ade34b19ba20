# -*- coding: utf-8 -*-
"""PaymentResultRouter: entry point for gateway callbacks.

A payment_ref belongs to exactly one trade proposal or buy offer; the result is
handed to the service that owns that transaction.
"""

from __future__ import annotations

import structlog
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from collectibles_exchange.exceptions import NotFoundError
from collectibles_exchange.models.payment import PaymentResultStatus

if TYPE_CHECKING:
    from collectibles_exchange.models.buy_offer import BuyOffer
    from collectibles_exchange.models.trade_proposal import TradeProposal
    from collectibles_exchange.persistence.repositories.interfaces.buy_offer_repository import (
        IBuyOfferRepository,
    )
    from collectibles_exchange.persistence.repositories.interfaces.trade_proposal_repository import (
        ITradeProposalRepository,
    )
    from collectibles_exchange.services.purchase import PurchaseService
    from collectibles_exchange.services.trade_proposal import TradeProposalService


class PaymentResultRouter:
    def __init__(
        self,
        trade_proposal_repository: "ITradeProposalRepository",
        buy_offer_repository: "IBuyOfferRepository",
        trade_proposal_service: "TradeProposalService",
        purchase_service: "PurchaseService",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._proposals = trade_proposal_repository
        self._buy_offers = buy_offer_repository
        self._trades = trade_proposal_service
        self._purchases = purchase_service
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def on_payment_result(
        self,
        payment_ref: str,
        status: Union[PaymentResultStatus, str],
        payer_id: Optional[str],
        amount: Decimal,
    ) -> Union["TradeProposal", "BuyOffer"]:
        """Route confirm_payment(ref, status, payer_id, amount) to the owning transaction.

        Raises:
            NotFoundError: No transaction carries payment_ref.
        """
        result_status = PaymentResultStatus(status)
        if await self._proposals.get_by_payment_ref(payment_ref) is not None:
            return await self._trades.confirm_payment(payment_ref, result_status, payer_id, amount)
        if await self._buy_offers.get_by_payment_ref(payment_ref) is not None:
            return await self._purchases.confirm_payment(payment_ref, result_status, payer_id, amount)
        self._logger.warning(
            "payment_result_unmatched",
            payment_ref=payment_ref,
            status=result_status,
            amount=amount,
        )
        raise NotFoundError("Payment", payment_ref)
