"""In-memory buy offer repository (keyed by offer id)."""

from __future__ import annotations

from uuid import UUID

from collectibles_exchange.models.buy_offer import BuyOffer
from collectibles_exchange.persistence.repositories.interfaces.buy_offer_repository import (
    IBuyOfferRepository,
)


class InMemoryBuyOfferRepository(IBuyOfferRepository):
    """In-memory implementation of IBuyOfferRepository."""

    def __init__(self) -> None:
        self._store: dict[UUID, BuyOffer] = {}

    async def get(self, offer_id: UUID) -> BuyOffer | None:
        return self._store.get(offer_id)

    async def save(self, offer: BuyOffer) -> None:
        self._store[offer.id] = offer

    async def get_by_payment_ref(self, payment_ref: str) -> BuyOffer | None:
        return next(
            (o for o in self._store.values() if o.payment.payment_ref == payment_ref),
            None,
        )

    async def list_open_by_item(self, item_id: UUID) -> list[BuyOffer]:
        return sorted(
            (o for o in self._store.values() if o.is_open and item_id in o.item_ids),
            key=lambda o: o.created_at,
        )
