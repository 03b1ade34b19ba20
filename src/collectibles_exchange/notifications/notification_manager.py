"""NotificationService: bounded queue plus one worker fanning messages out to channels.

Delivery is best effort. A full queue drops the message; a failing channel is
logged and the remaining channels still receive the message. Each channel
receives only the messages its alias filter handles.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from collectibles_exchange.exceptions import ExternalCollaboratorFailure
from collectibles_exchange.notifications.strategies import BaseNotificationStrategy
from collectibles_exchange.notifications.types import NotificationMessage


@dataclass
class NotificationService:
    """Dispatch notifications to all configured channels."""

    notifiers: list[BaseNotificationStrategy]
    queue_size: int = 1000
    get_logger: Callable[[str], Any] = field(default=structlog.get_logger)
    _queue: asyncio.Queue[NotificationMessage] | None = field(init=False, default=None)
    _worker_task: asyncio.Task[None] | None = field(init=False, default=None)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        self._logger = self.get_logger("NotificationService")

    @property
    def is_running(self) -> bool:
        return self._worker_task is not None

    async def initialize(self) -> None:
        """Initialize every channel and start the worker (no worker without channels)."""
        for notifier in self.notifiers:
            await notifier.initialize()
        if not self.notifiers:
            self._logger.info("notification_init_no_notifiers")
            return
        self._queue = asyncio.Queue[NotificationMessage](maxsize=self.queue_size)
        self._worker_task = asyncio.create_task(self._worker_loop())
        self._logger.debug(
            "notification_init_complete",
            notification_queue_size=self.queue_size,
            notification_notifiers_count=len(self.notifiers),
        )

    async def shutdown(self) -> None:
        """Drain the queue, stop the worker, then shut every channel down."""
        if self._queue is not None:
            self._queue.shutdown()
            await self._queue.join()
            self._logger.debug("notification_shutdown_queue_drained")
        if self._worker_task is not None:
            await self._worker_task
            self._worker_task = None
        self._queue = None

        for notifier in self.notifiers:
            await notifier.shutdown()
        self._logger.debug("notification_shutdown_complete")

    def notify(self, message: NotificationMessage) -> None:
        """Enqueue a notification (non-blocking for callers)."""
        queue = self._queue
        if queue is None:
            if not self.notifiers:
                return
            raise RuntimeError("NotificationService not initialized")
        try:
            queue.put_nowait(message)
        except asyncio.QueueFull:
            self._logger.warning(
                "notification_queue_full_dropped",
                notification_event_type=message.event_type,
            )

    async def _worker_loop(self) -> None:
        queue = self._queue
        if queue is None:
            return
        while True:
            try:
                msg = await queue.get()
            except asyncio.QueueShutDown:
                self._logger.debug("notification_worker_shutting_down")
                break
            try:
                await self._dispatch(msg)
            finally:
                queue.task_done()

    async def _dispatch(self, message: NotificationMessage) -> None:
        for notifier in self.notifiers:
            if not notifier.handles(message):
                continue
            try:
                await notifier.send_notification(message)
            except Exception as exc:
                failure = ExternalCollaboratorFailure(
                    f"{type(notifier).__name__} could not deliver {message.event_type}",
                    collaborator="notifications",
                    cause=exc,
                )
                self._logger.warning(
                    "notification_delivery_failed",
                    notification_event_type=message.event_type,
                    notifier=type(notifier).__name__,
                    error_type=type(exc).__name__,
                    error_message=str(failure),
                )
