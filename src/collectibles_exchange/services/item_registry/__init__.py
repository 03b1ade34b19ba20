"""Item registry service."""

from collectibles_exchange.services.item_registry.item_registry import ItemRegistry

__all__ = ["ItemRegistry"]
