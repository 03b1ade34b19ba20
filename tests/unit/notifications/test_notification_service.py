# -*- coding: utf-8 -*-
"""Unit tests for NotificationService fan-out and failure handling."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest

from collectibles_exchange.notifications.notification_manager import NotificationService
from collectibles_exchange.notifications.types import NotificationMessage


def _notifier(**send: object) -> SimpleNamespace:
    return SimpleNamespace(
        handles=Mock(return_value=True),
        initialize=AsyncMock(),
        shutdown=AsyncMock(),
        send_notification=AsyncMock(**send),
    )


async def test_failing_channel_does_not_block_the_others() -> None:
    broken = _notifier(side_effect=ConnectionError("telegram down"))
    healthy = _notifier()
    logger = Mock()
    service = NotificationService(
        notifiers=[broken, healthy],  # type: ignore[list-item]
        get_logger=lambda _name: logger,
    )
    message = NotificationMessage(event_type="exchange_activity", message="Trade Accepted")

    await service.initialize()
    service.notify(message)
    await service.shutdown()

    healthy.send_notification.assert_awaited_once_with(message)
    logger.warning.assert_called_once()
    assert logger.warning.call_args.args[0] == "notification_delivery_failed"
    assert logger.warning.call_args.kwargs["error_type"] == "ConnectionError"
    broken.shutdown.assert_awaited_once()
    assert service.is_running is False


async def test_full_queue_drops_the_message() -> None:
    logger = Mock()
    service = NotificationService(
        notifiers=[_notifier()],  # type: ignore[list-item]
        queue_size=1,
        get_logger=lambda _name: logger,
    )
    await service.initialize()

    service.notify(NotificationMessage(event_type="a", message="first"))
    service.notify(NotificationMessage(event_type="b", message="second"))
    await service.shutdown()

    logger.warning.assert_called_once()
    assert logger.warning.call_args.args[0] == "notification_queue_full_dropped"


async def test_without_channels_notify_is_a_no_op() -> None:
    service = NotificationService(notifiers=[])

    await service.initialize()
    service.notify(NotificationMessage(event_type="a", message="ignored"))

    assert service.is_running is False


def test_notify_before_initialize_raises() -> None:
    service = NotificationService(notifiers=[_notifier()])  # type: ignore[list-item]

    with pytest.raises(RuntimeError):
        service.notify(NotificationMessage(event_type="a", message="too early"))


async def test_channels_skip_messages_they_do_not_handle() -> None:
    skipping = _notifier()
    skipping.handles.return_value = False
    service = NotificationService(notifiers=[skipping])  # type: ignore[list-item]

    await service.initialize()
    service.notify(NotificationMessage(event_type="exchange_activity", message="x"))
    await service.shutdown()

    skipping.send_notification.assert_not_awaited()
