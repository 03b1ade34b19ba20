# -*- coding: utf-8 -*-
"""Telegram notification strategy (async).

Every exchange notification goes to one operator chat; the styled message
names the recipient user.
"""

from __future__ import annotations

import asyncio
import time
import structlog
from typing import Any, Callable, Optional, TYPE_CHECKING

from telegram import Bot
from telegram.error import (
    BadRequest,
    Forbidden,
    NetworkError,
    RetryAfter,
    TelegramError,
    TimedOut,
)
from telegram.request import HTTPXRequest

from collectibles_exchange.exceptions import MissingRequiredConfigError
from collectibles_exchange.notifications.types import NotificationMessage
from collectibles_exchange.notifications.strategies.base import BaseNotificationStrategy

if TYPE_CHECKING:
    from collectibles_exchange.config.config import Settings
    from collectibles_exchange.notifications.types import NotificationStyler


class TelegramNotifier(BaseNotificationStrategy):
    """Send notifications to a Telegram chat using python-telegram-bot."""

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__(settings, settings.telegram.aliases)
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._styler: "NotificationStyler" = styler

        cfg = self.settings.telegram
        if not cfg.api_key:
            raise MissingRequiredConfigError("TELEGRAM__API_KEY is required for Telegram notifications")
        if not cfg.chat_id:
            raise MissingRequiredConfigError("TELEGRAM__CHAT_ID is required for Telegram notifications")

        self.token: str = str(cfg.api_key)
        self.chat_id: str = str(cfg.chat_id)
        self.messages_per_minute = cfg.messages_per_minute
        self.max_retries = cfg.max_retries
        self.backoff_base_seconds = cfg.backoff_base_seconds

        self._bot: Optional[Bot] = None
        self._running = False
        self._sent_at: list[float] = []

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        if self._running:
            self._logger.warning("telegram_already_running")
            return
        cfg = self.settings.telegram
        request = HTTPXRequest(
            connect_timeout=cfg.connect_timeout,
            read_timeout=cfg.read_timeout,
            write_timeout=cfg.write_timeout,
            pool_timeout=cfg.pool_timeout,
        )
        self._bot = Bot(token=self.token, request=request)
        self._running = True
        self._logger.debug("telegram_notifier_initialized", chat_id=self.chat_id)

    async def shutdown(self) -> None:
        if not self._running:
            return
        self._bot = None
        self._running = False

    async def send_notification(self, message: NotificationMessage) -> None:
        if not self._running or self._bot is None:
            self._logger.warning(
                "telegram_not_running_cannot_send",
                notification_event_type=message.event_type,
            )
            return
        await self._send_message(self._styler.render(message, parse_html=True))

    async def _send_message(self, text: str) -> None:
        await self._apply_rate_limit()
        for attempt in range(1, self.max_retries + 1):
            try:
                await self._bot.send_message(  # type: ignore[union-attr]
                    chat_id=self.chat_id,
                    text=text,
                    parse_mode="HTML",
                )
                self._sent_at.append(time.time())
                return
            except RetryAfter as exc:
                retry_after = getattr(exc, "retry_after", 1.0)
                seconds = (
                    retry_after.total_seconds()
                    if hasattr(retry_after, "total_seconds")
                    else float(retry_after)
                )
                self._logger.warning("telegram_rate_limit_retry_after", retry_seconds=seconds)
                await asyncio.sleep(seconds)
            except (BadRequest, Forbidden) as exc:
                self._logger.error(
                    "telegram_fatal_error",
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )
                return
            except (NetworkError, TimedOut, TelegramError) as exc:
                backoff = self._backoff(attempt)
                self._logger.warning(
                    "telegram_error_retry",
                    error_type=type(exc).__name__,
                    attempt=attempt,
                    max_retries=self.max_retries,
                    backoff_seconds=backoff,
                )
                await asyncio.sleep(backoff)

        self._logger.error("telegram_max_retries_exceeded_message_dropped")

    def _backoff(self, attempt: int) -> float:
        return min(60.0, self.backoff_base_seconds * (2 ** (attempt - 1)))

    async def _apply_rate_limit(self) -> None:
        now = time.time()
        self._sent_at = [t for t in self._sent_at if t >= now - 60]
        if len(self._sent_at) >= self.messages_per_minute:
            wait = 60 - (now - self._sent_at[0])
            if wait > 0:
                await asyncio.sleep(wait)
