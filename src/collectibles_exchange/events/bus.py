"""Exchange event bus (bubus): process-wide instance plus a factory for isolated buses."""

from __future__ import annotations

from bubus import EventBus  # type: ignore[import-untyped]

_event_bus: EventBus | None = None

EXCHANGE_BUS_NAME = "CollectiblesExchange"


def build_event_bus(name: str = EXCHANGE_BUS_NAME, *, history_size: int = 100) -> EventBus:
    """Create a bus without write-ahead log; activity events are best effort."""
    return EventBus(name=name, max_history_size=history_size, wal_path=None)


def get_event_bus() -> EventBus:
    """Return the shared exchange bus, creating it on first use."""
    global _event_bus
    if _event_bus is None:
        _event_bus = build_event_bus()
    return _event_bus


def set_event_bus(bus: EventBus | None) -> None:
    """Replace the shared bus (tests, DI). None resets to the lazy default."""
    global _event_bus
    _event_bus = bus
