# -*- coding: utf-8 -*-
"""Payment collaborator interface and the hosted-checkout implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional
from urllib.parse import urlencode

import structlog

if TYPE_CHECKING:
    from collectibles_exchange.config.config import Settings


class IPaymentGateway(ABC):
    """Starts a payment and returns where to send the payer.

    The result arrives later through PaymentResultRouter.on_payment_result.
    """

    @abstractmethod
    async def initiate_payment(
        self,
        payer_contact: Optional[str],
        amount: Decimal,
        callback_refs: dict[str, str],
    ) -> str:
        """Return the redirect target for the payer."""
        ...


class HostedCheckoutGateway(IPaymentGateway):
    """Builds a hosted checkout link; the provider calls back with payment_ref."""

    def __init__(
        self,
        settings: "Settings",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def initiate_payment(
        self,
        payer_contact: Optional[str],
        amount: Decimal,
        callback_refs: dict[str, str],
    ) -> str:
        cfg = self._settings.payment
        params = {
            "amount": f"{amount:.2f}",
            "currency": cfg.currency,
            **callback_refs,
        }
        if payer_contact:
            params["payer"] = payer_contact
        target = f"{cfg.checkout_url}?{urlencode(params)}"
        self._logger.debug(
            "payment_checkout_link_built",
            payment_ref=callback_refs.get("payment_ref"),
            amount=amount,
            currency=cfg.currency,
        )
        return target
