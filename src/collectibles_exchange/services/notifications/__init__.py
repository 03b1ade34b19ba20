"""Notification-related services."""

from collectibles_exchange.services.notifications.exchange_activity_notifier import (
    ExchangeActivityNotifier,
)

__all__ = ["ExchangeActivityNotifier"]
