"""Collectibles exchange: negotiation, reservation and settlement engine for a P2P marketplace."""

from collectibles_exchange.config import get_settings
from collectibles_exchange.DI import Container
from collectibles_exchange.main import ExchangeApp

__version__ = "0.0.1"
__all__ = [
    "Container",
    "ExchangeApp",
    "get_settings",
]
