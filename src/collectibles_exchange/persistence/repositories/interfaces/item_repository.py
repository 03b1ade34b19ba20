# -*- coding: utf-8 -*-
"""Abstract interface for item storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from collectibles_exchange.models.item import Item
from collectibles_exchange.models.transaction_ref import TransactionRef


class IItemRepository(ABC):
    """Interface for persisting Item listings."""

    @abstractmethod
    async def get(self, item_id: UUID) -> Optional[Item]:
        """Return the item by id, or None if missing."""
        ...

    @abstractmethod
    async def save(self, item: Item) -> None:
        """Insert or update an item (by id)."""
        ...

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> list[Item]:
        """Return the owner's items that are not soft-deleted."""
        ...

    @abstractmethod
    async def compare_and_set_reservation(
        self,
        item_id: UUID,
        expected: Optional[TransactionRef],
        new: Optional[TransactionRef],
    ) -> Optional[Item]:
        """Atomically set reserved_by to new iff it currently equals expected.

        Returns the updated item, or None when the item is missing or the
        current holder differs from expected. Implementations must make the
        check and the write one step (row lock, conditional UPDATE, ...).
        """
        ...
