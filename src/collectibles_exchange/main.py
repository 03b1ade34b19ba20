# -*- coding: utf-8 -*-
"""
Entry point for the collectibles exchange engine.

Orchestrates: logging, settings, container, notification stack, shutdown (SIGINT or CancelledError).
Activity flows: exchange services -> event bus -> ExchangeActivityNotifier -> NotificationService.

Run with: python -m collectibles_exchange.main

Library usage:
    async with ExchangeApp() as app:
        await app.container.offer_negotiation_service().submit_offer(...)
"""
from __future__ import annotations

import asyncio
import signal
import structlog
from typing import Any, Optional

from collectibles_exchange.DI import Container
from collectibles_exchange.logging.config import configure_logging
from collectibles_exchange.notifications.types import NotificationMessage


def _setup_sigint(shutdown_event: asyncio.Event) -> None:
    try:
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(
            signal.SIGINT,
            lambda: shutdown_event.set(),
        )
    except NotImplementedError:
        pass  # Windows has no add_signal_handler


class ExchangeApp:
    """Owns the container and the lifecycle of the notification stack."""

    def __init__(self, container: Optional[Container] = None, *, configure_logs: bool = True) -> None:
        self.container = container or Container()
        self._configure_logs = configure_logs
        self._logger: Any = structlog.get_logger("ExchangeApp")
        self._started = False

    async def start(self) -> None:
        if self._started:
            return
        if self._configure_logs:
            configure_logging(self.container.config())
        notification_service = self.container.notification_service()
        await notification_service.initialize()
        self.container.exchange_activity_notifier().start()
        self._started = True
        settings = self.container.config()
        self._logger.info(
            "exchange_app_started",
            environment=settings.app.environment,
            max_offer_attempts=settings.negotiation.max_offer_attempts,
        )
        notification_service.notify(
            NotificationMessage(
                event_type="system_started",
                message="Collectibles exchange started",
            )
        )

    async def stop(self) -> None:
        """Clean shutdown. Safe to call on normal shutdown or CancelledError."""
        if not self._started:
            return
        self.container.exchange_activity_notifier().stop()
        notification_service = self.container.notification_service()
        notification_service.notify(
            NotificationMessage(
                event_type="system_stopped",
                message="Collectibles exchange stopped",
            )
        )
        await notification_service.shutdown()
        self._started = False
        self._logger.info("exchange_app_stopped")

    async def __aenter__(self) -> ExchangeApp:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()


async def run() -> None:
    app = ExchangeApp()
    await app.start()
    shutdown_event = asyncio.Event()
    _setup_sigint(shutdown_event)
    try:
        await shutdown_event.wait()
    finally:
        await app.stop()


if __name__ == "__main__":
    asyncio.run(run())
