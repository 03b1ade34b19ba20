# -*- coding: utf-8 -*-
"""Event bus and event types."""

from collectibles_exchange.events.bus import build_event_bus, get_event_bus, set_event_bus
from collectibles_exchange.events.exchange import (
    ExchangeActivityEvent,
    SettlementCompletedEvent,
)

__all__ = [
    "build_event_bus",
    "get_event_bus",
    "set_event_bus",
    "ExchangeActivityEvent",
    "SettlementCompletedEvent",
]
