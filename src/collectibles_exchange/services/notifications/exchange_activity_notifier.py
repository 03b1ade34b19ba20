# -*- coding: utf-8 -*-
"""ExchangeActivityNotifier: listens to ExchangeActivityEvent and sends notifications."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from collectibles_exchange.events.exchange.activity_events import ExchangeActivityEvent
from collectibles_exchange.notifications.stylers.notification_styler import (
    ExchangeNotificationStyler,
)
from collectibles_exchange.notifications.types import NotificationMessage

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from collectibles_exchange.notifications.notification_manager import NotificationService


class ExchangeActivityNotifier:
    """Subscribes to ExchangeActivityEvent and forwards it to NotificationService."""

    def __init__(
        self,
        notification_service: "NotificationService",
        event_bus: Any,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._notification_service = notification_service
        self._event_bus: "EventBus" = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def start(self) -> None:
        """Subscribe to ExchangeActivityEvent."""
        self._event_bus.on(ExchangeActivityEvent, self._on_activity)
        self._logger.debug("exchange_activity_notifier_started")

    def stop(self) -> None:
        """Unsubscribe from ExchangeActivityEvent."""
        key = ExchangeActivityEvent.__name__
        handlers = getattr(self._event_bus, "handlers", {})
        if key in handlers:
            handlers[key] = [h for h in handlers[key] if h != self._on_activity]
        self._logger.debug("exchange_activity_notifier_stopped")

    def _on_activity(self, event: ExchangeActivityEvent) -> None:
        if event.to_user_id is None:
            self._logger.debug(
                "exchange_activity_no_recipient",
                alias=event.alias,
                transaction_id=str(event.transaction_id),
            )
            return
        title = ExchangeNotificationStyler.title_for(event.alias)
        message = f"{title}: {event.code}" if event.code else title
        payload: dict[str, Any] = {
            "alias": event.alias,
            "kind": event.kind,
            "transaction_id": str(event.transaction_id),
            "to_user_id": event.to_user_id,
        }
        if event.code:
            payload["code"] = event.code
        if event.from_user_id:
            payload["from_user_id"] = event.from_user_id
        if event.detail:
            payload["detail"] = event.detail

        self._notification_service.notify(
            NotificationMessage(
                event_type="exchange_activity",
                message=message,
                title=title,
                recipient_id=event.to_user_id,
                payload=payload,
            )
        )
        self._logger.debug(
            "exchange_activity_notified",
            alias=event.alias,
            kind=event.kind,
            transaction_id=str(event.transaction_id),
            to_user_id=event.to_user_id,
        )
