# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, NEGOTIATION__MAX_OFFER_ATTEMPTS.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "collectibles-exchange"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    # Per-target levels (only the 5 standard levels)
    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Local outputs
    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/exchange.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    # Logfire integration via structlog
    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class NegotiationSettings(BaseSettings):
    """Buy-offer negotiation and coin fee rules (from env NEGOTIATION__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    max_offer_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Rejected offers a buyer may make on one item before paying the asking price.",
    )
    cart_hold_minutes: int = Field(
        default=10,
        ge=1,
        le=1440,
        description="Minutes an accepted offer keeps its cart line on hold.",
    )
    offer_listing_fee_coins: int = Field(
        default=1,
        ge=0,
        description="Coins debited from the seller when a buy offer is accepted into a cart.",
    )
    trade_fee_coins: int = Field(
        default=1,
        ge=0,
        description="Coins debited from each party when a trade proposal is accepted.",
    )


class PaymentSettings(BaseSettings):
    """Payment handoff configuration (from env PAYMENT__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    checkout_url: str = Field(
        default="https://payments.example.com/checkout",
        description="Base URL of the hosted checkout page the payer is redirected to.",
    )
    currency: str = Field(default="USD", min_length=3, max_length=3)
    min_cash_amount: Decimal = Field(
        default=Decimal("0.01"),
        ge=Decimal("0"),
        description="Smallest cash adjustment accepted on a trade proposal.",
    )


class NotificationSettings(BaseSettings):
    """Outbound notification queue (from env NOTIFICATIONS__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    queue_size: int = Field(default=1000, ge=1, le=100_000)


class TelegramNotificationSettings(BaseSettings):
    """Telegram notifications (from env TELEGRAM__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False
    api_key: Optional[str] = Field(default=None, description="Telegram bot API key.")
    chat_id: Optional[str] = Field(default=None, description="Telegram chat ID.")
    messages_per_minute: int = Field(default=30, ge=1, le=120)
    max_retries: int = Field(default=5, ge=0, le=20)
    backoff_base_seconds: float = Field(default=1.0, ge=0.1, le=60.0)
    connect_timeout: float = Field(default=10.0, ge=0.1, le=60.0)
    read_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    write_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    pool_timeout: float = Field(default=10.0, ge=0.1, le=60.0)
    aliases: list[str] = Field(
        default_factory=list,
        description="Activity aliases forwarded to the chat, e.g. [\"payment-made\"]; empty forwards all.",
    )


class ConsoleNotificationSettings(BaseSettings):
    """Console notification settings."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True
    aliases: list[str] = Field(
        default_factory=list,
        description="Activity aliases printed to the console; empty prints all.",
    )


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, PAYMENT__CURRENCY.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    negotiation: NegotiationSettings = Field(default_factory=NegotiationSettings)
    payment: PaymentSettings = Field(default_factory=PaymentSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    telegram: TelegramNotificationSettings = Field(default_factory=TelegramNotificationSettings)
    console: ConsoleNotificationSettings = Field(default_factory=ConsoleNotificationSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides are passed as nested dicts, e.g.:
        - from_env(negotiation={"max_offer_attempts": 5})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from collectibles_exchange.config import get_settings

        settings = get_settings()
        hold_minutes = settings.negotiation.cart_hold_minutes
        console_level = settings.logging.console_level
    """
    return Settings()
