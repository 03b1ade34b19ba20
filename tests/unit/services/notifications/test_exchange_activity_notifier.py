# -*- coding: utf-8 -*-
"""Unit tests for ExchangeActivityNotifier."""

from __future__ import annotations

from unittest.mock import Mock
from uuid import uuid4

from collectibles_exchange.events.exchange.activity_events import ExchangeActivityEvent
from collectibles_exchange.services.notifications import ExchangeActivityNotifier


def _event(**overrides: object) -> ExchangeActivityEvent:
    fields: dict[str, object] = {
        "alias": "counter-trade-offer",
        "from_user_id": "bob",
        "to_user_id": "alice",
        "transaction_id": uuid4(),
        "kind": "trade",
        "code": "TRD-42",
    }
    fields.update(overrides)
    return ExchangeActivityEvent(**fields)


def test_activity_is_forwarded_to_the_counterparty(fake_bus) -> None:
    service = Mock()
    notifier = ExchangeActivityNotifier(service, fake_bus)
    notifier.start()
    event = _event()

    (handler,) = fake_bus.handlers["ExchangeActivityEvent"]
    handler(event)

    service.notify.assert_called_once()
    message = service.notify.call_args.args[0]
    assert message.event_type == "exchange_activity"
    assert message.recipient_id == "alice"
    assert message.title == "Counter Offer Received"
    assert message.message == "Counter Offer Received: TRD-42"
    assert message.payload["transaction_id"] == str(event.transaction_id)
    assert message.payload["from_user_id"] == "bob"


def test_activity_without_recipient_is_skipped(fake_bus) -> None:
    service = Mock()
    notifier = ExchangeActivityNotifier(service, fake_bus)
    notifier.start()

    fake_bus.handlers["ExchangeActivityEvent"][0](_event(to_user_id=None))

    service.notify.assert_not_called()


def test_stop_unsubscribes(fake_bus) -> None:
    notifier = ExchangeActivityNotifier(Mock(), fake_bus)
    notifier.start()

    notifier.stop()

    assert fake_bus.handlers["ExchangeActivityEvent"] == []
