# -*- coding: utf-8 -*-
"""Wiring tests for the DI container and ExchangeApp lifecycle."""

from __future__ import annotations

from decimal import Decimal

from dependency_injector import providers

from collectibles_exchange.config import Settings
from collectibles_exchange.DI import Container
from collectibles_exchange.main import ExchangeApp


def _container(settings: Settings, fake_bus) -> Container:
    container = Container()
    container.config.override(providers.Object(settings))
    container.event_bus.override(providers.Object(fake_bus))
    return container


async def test_container_services_share_repositories(settings: Settings, fake_bus) -> None:
    container = _container(settings, fake_bus)

    registry = container.item_registry()
    item = await registry.list_item("seller", "Card", Decimal("100"), Decimal("50"))

    assert await container.item_repository().get(item.id) == item
    assert container.offer_negotiation_service() is container.offer_negotiation_service()
    assert container.trade_proposal_service() is not None
    assert container.payment_result_router() is not None
    assert container.notification_service().notifiers == []


async def test_app_start_subscribes_activity_notifier(settings: Settings, fake_bus) -> None:
    app = ExchangeApp(_container(settings, fake_bus), configure_logs=False)

    async with app:
        assert len(fake_bus.handlers["ExchangeActivityEvent"]) == 1

    assert fake_bus.handlers["ExchangeActivityEvent"] == []
