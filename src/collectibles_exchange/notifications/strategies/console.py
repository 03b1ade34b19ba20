# -*- coding: utf-8 -*-
"""Console notifier: prints each notification as a block addressed to its recipient."""

from __future__ import annotations

from typing import TYPE_CHECKING

from collectibles_exchange.notifications.types import NotificationMessage
from collectibles_exchange.notifications.strategies.base import BaseNotificationStrategy

if TYPE_CHECKING:  # pragma: no cover
    from collectibles_exchange.config.config import Settings
    from collectibles_exchange.notifications.types import NotificationStyler


class ConsoleNotifier(BaseNotificationStrategy):
    """Print notifications to stdout as plain text (local development inbox)."""

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler | None" = None,
    ) -> None:
        super().__init__(settings, settings.console.aliases)
        self._running = False
        self._styler = styler
        self.delivered: dict[str, int] = {}
        """Messages printed per recipient ("operator" for operator messages)."""

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    async def send_notification(self, message: NotificationMessage) -> None:
        if not self.is_running:
            return
        inbox = message.recipient_id or "operator"
        body = self._styler.render(message, parse_html=False) if self._styler else message.message
        print(f"── {inbox} · {message.alias} ──\n{body}")
        self.delivered[inbox] = self.delivered.get(inbox, 0) + 1
