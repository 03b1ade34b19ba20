"""Dependency injection."""

from collectibles_exchange.DI.container import Container

__all__ = ["Container"]
