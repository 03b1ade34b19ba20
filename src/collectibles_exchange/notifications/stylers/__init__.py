"""Notification stylers."""

from collectibles_exchange.notifications.stylers.notification_styler import (
    ExchangeNotificationStyler,
)

__all__ = ["ExchangeNotificationStyler"]
