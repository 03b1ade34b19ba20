# -*- coding: utf-8 -*-
"""Abstract interface for checked-out buy offers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from collectibles_exchange.models.buy_offer import BuyOffer


class IBuyOfferRepository(ABC):
    """Interface for persisting BuyOffer rows."""

    @abstractmethod
    async def get(self, offer_id: UUID) -> Optional[BuyOffer]:
        ...

    @abstractmethod
    async def save(self, offer: BuyOffer) -> None:
        ...

    @abstractmethod
    async def get_by_payment_ref(self, payment_ref: str) -> Optional[BuyOffer]:
        ...

    @abstractmethod
    async def list_open_by_item(self, item_id: UUID) -> list[BuyOffer]:
        """Return OFFER_SENT offers that include the item."""
        ...
