"""In-memory offer attempt repository (keyed by buyer id and item id)."""

from __future__ import annotations

from uuid import UUID

from collectibles_exchange.models.offer_attempt import OfferAttemptCounter
from collectibles_exchange.persistence.repositories.interfaces.offer_attempt_repository import (
    IOfferAttemptRepository,
)


class InMemoryOfferAttemptRepository(IOfferAttemptRepository):
    """In-memory implementation of IOfferAttemptRepository."""

    def __init__(self) -> None:
        self._store: dict[tuple[str, UUID], OfferAttemptCounter] = {}

    async def get(self, buyer_id: str, item_id: UUID) -> OfferAttemptCounter | None:
        return self._store.get((buyer_id, item_id))

    async def save(self, counter: OfferAttemptCounter) -> None:
        self._store[counter.key] = counter
