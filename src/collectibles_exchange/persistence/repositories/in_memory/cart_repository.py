"""In-memory cart repository (keyed by buyer id)."""

from __future__ import annotations

from uuid import UUID

from collectibles_exchange.models.cart import Cart
from collectibles_exchange.persistence.repositories.interfaces.cart_repository import (
    ICartRepository,
)


class InMemoryCartRepository(ICartRepository):
    """In-memory implementation of ICartRepository."""

    def __init__(self) -> None:
        self._store: dict[str, Cart] = {}

    async def get_by_buyer(self, buyer_id: str) -> Cart | None:
        return self._store.get(buyer_id)

    async def save(self, cart: Cart) -> None:
        self._store[cart.buyer_id] = cart

    async def delete(self, buyer_id: str) -> None:
        self._store.pop(buyer_id, None)

    async def list_all(self) -> list[Cart]:
        return list(self._store.values())

    async def find_by_item(self, item_id: UUID) -> Cart | None:
        return next(
            (c for c in self._store.values() if c.line_for_item(item_id) is not None),
            None,
        )
