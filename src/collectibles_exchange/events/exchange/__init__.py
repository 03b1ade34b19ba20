# -*- coding: utf-8 -*-
"""Exchange activity events."""

from collectibles_exchange.events.exchange.activity_events import (
    ActivityKind,
    ExchangeActivityEvent,
    SettlementCompletedEvent,
)

__all__ = ["ActivityKind", "ExchangeActivityEvent", "SettlementCompletedEvent"]
