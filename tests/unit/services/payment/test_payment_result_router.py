# -*- coding: utf-8 -*-
"""Unit tests for PaymentResultRouter and HostedCheckoutGateway."""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock
from urllib.parse import parse_qs, urlparse

import pytest

from collectibles_exchange.config import Settings
from collectibles_exchange.exceptions import NotFoundError
from collectibles_exchange.models.payment import PaymentResultStatus
from collectibles_exchange.services.payment import HostedCheckoutGateway, PaymentResultRouter


def _router(*, proposal: object = None, offer: object = None) -> tuple[PaymentResultRouter, SimpleNamespace]:
    """Router over repository/service doubles; returns the doubles for assertions."""
    doubles = SimpleNamespace(
        proposals=SimpleNamespace(get_by_payment_ref=AsyncMock(return_value=proposal)),
        buy_offers=SimpleNamespace(get_by_payment_ref=AsyncMock(return_value=offer)),
        trades=SimpleNamespace(confirm_payment=AsyncMock(return_value="trade-result")),
        purchases=SimpleNamespace(confirm_payment=AsyncMock(return_value="offer-result")),
        logger=Mock(),
    )
    router = PaymentResultRouter(
        doubles.proposals,
        doubles.buy_offers,
        doubles.trades,
        doubles.purchases,
        get_logger=lambda _name: doubles.logger,
    )
    return router, doubles


async def test_routes_trade_payment_refs_to_trade_service() -> None:
    router, doubles = _router(proposal=object())

    result = await router.on_payment_result("ref-1", "approved", "gw", Decimal("10"))

    assert result == "trade-result"
    doubles.trades.confirm_payment.assert_awaited_once_with(
        "ref-1", PaymentResultStatus.APPROVED, "gw", Decimal("10")
    )
    doubles.purchases.confirm_payment.assert_not_awaited()


async def test_routes_buy_offer_payment_refs_to_purchase_service() -> None:
    router, doubles = _router(offer=object())

    result = await router.on_payment_result(
        "ref-2", PaymentResultStatus.DECLINED, None, Decimal("99")
    )

    assert result == "offer-result"
    doubles.purchases.confirm_payment.assert_awaited_once_with(
        "ref-2", PaymentResultStatus.DECLINED, None, Decimal("99")
    )


async def test_unknown_payment_ref_is_logged_and_raised() -> None:
    router, doubles = _router()

    with pytest.raises(NotFoundError):
        await router.on_payment_result("nope", "approved", None, Decimal("1"))

    doubles.logger.warning.assert_called_once()
    assert doubles.logger.warning.call_args.args[0] == "payment_result_unmatched"


async def test_unknown_status_is_rejected() -> None:
    router, _ = _router(proposal=object())

    with pytest.raises(ValueError):
        await router.on_payment_result("ref-1", "pending", None, Decimal("1"))


async def test_hosted_checkout_link_carries_callback_refs() -> None:
    settings = Settings(
        console={"enabled": False},
        payment={"checkout_url": "https://checkout.test/pay", "currency": "EUR"},
    )
    gateway = HostedCheckoutGateway(settings)

    target = await gateway.initiate_payment(
        "alice@example.com", Decimal("12.5"), {"payment_ref": "abc", "kind": "payment"}
    )

    parsed = urlparse(target)
    query = parse_qs(parsed.query)
    assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://checkout.test/pay"
    assert query["amount"] == ["12.50"]
    assert query["currency"] == ["EUR"]
    assert query["payment_ref"] == ["abc"]
    assert query["payer"] == ["alice@example.com"]
