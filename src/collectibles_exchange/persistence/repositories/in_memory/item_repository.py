"""In-memory item repository (keyed by item id)."""

from __future__ import annotations

from uuid import UUID

from collectibles_exchange.models.item import Item
from collectibles_exchange.models.transaction_ref import TransactionRef
from collectibles_exchange.persistence.repositories.interfaces.item_repository import (
    IItemRepository,
)


class InMemoryItemRepository(IItemRepository):
    """In-memory implementation of IItemRepository.

    compare_and_set_reservation never awaits between the read and the write, so
    it is atomic with respect to other coroutines on the same event loop.
    """

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[UUID, Item] = {}

    async def get(self, item_id: UUID) -> Item | None:
        return self._store.get(item_id)

    async def save(self, item: Item) -> None:
        self._store[item.id] = item

    async def list_by_owner(self, owner_id: str) -> list[Item]:
        return sorted(
            (i for i in self._store.values() if i.owner_id == owner_id and not i.is_deleted),
            key=lambda i: i.created_at,
        )

    async def compare_and_set_reservation(
        self,
        item_id: UUID,
        expected: TransactionRef | None,
        new: TransactionRef | None,
    ) -> Item | None:
        item = self._store.get(item_id)
        if item is None or item.reserved_by != expected:
            return None
        updated = item.with_reservation(new)
        self._store[item_id] = updated
        return updated
