# -*- coding: utf-8 -*-
"""Abstract interface for buyer carts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from collectibles_exchange.models.cart import Cart


class ICartRepository(ABC):
    """Interface for persisting one Cart per buyer."""

    @abstractmethod
    async def get_by_buyer(self, buyer_id: str) -> Optional[Cart]:
        ...

    @abstractmethod
    async def save(self, cart: Cart) -> None:
        """Insert or update the buyer's cart."""
        ...

    @abstractmethod
    async def delete(self, buyer_id: str) -> None:
        """Remove the buyer's cart; no-op when absent."""
        ...

    @abstractmethod
    async def list_all(self) -> list[Cart]:
        ...

    @abstractmethod
    async def find_by_item(self, item_id: UUID) -> Optional[Cart]:
        """Return the cart holding a line for the item, if any."""
        ...
