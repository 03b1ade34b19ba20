"""Notification strategies."""

from collectibles_exchange.notifications.strategies.base import (
    BaseNotificationStrategy,
)
from collectibles_exchange.notifications.strategies.console import ConsoleNotifier
from collectibles_exchange.notifications.strategies.telegram import TelegramNotifier

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "TelegramNotifier",
]
