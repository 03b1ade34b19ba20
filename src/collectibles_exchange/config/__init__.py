"""Configuration subpackage."""

from collectibles_exchange.config.config import (
    AppSettings,
    ConsoleNotificationSettings,
    LoggingSettings,
    NegotiationSettings,
    NotificationSettings,
    PaymentSettings,
    Settings,
    TelegramNotificationSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "NegotiationSettings",
    "NotificationSettings",
    "PaymentSettings",
    "Settings",
    "TelegramNotificationSettings",
    "ConsoleNotificationSettings",
    "get_settings",
]
