"""Notification subsystem."""

from collectibles_exchange.notifications.notification_manager import (
    NotificationService,
)
from collectibles_exchange.notifications.strategies import (
    BaseNotificationStrategy,
    ConsoleNotifier,
    TelegramNotifier,
)
from collectibles_exchange.notifications.stylers import ExchangeNotificationStyler
from collectibles_exchange.notifications.types import (
    NotificationMessage,
    NotificationStyler,
)

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "ExchangeNotificationStyler",
    "TelegramNotifier",
    "NotificationMessage",
    "NotificationService",
    "NotificationStyler",
]
