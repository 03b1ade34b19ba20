# -*- coding: utf-8 -*-
"""Abstract interface for offer attempt counters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from collectibles_exchange.models.offer_attempt import OfferAttemptCounter


class IOfferAttemptRepository(ABC):
    """Interface for per (buyer, item) negotiation counters. Rows are never deleted."""

    @abstractmethod
    async def get(self, buyer_id: str, item_id: UUID) -> Optional[OfferAttemptCounter]:
        """Return the counter for the pair, or None if the buyer never made an offer."""
        ...

    @abstractmethod
    async def save(self, counter: OfferAttemptCounter) -> None:
        """Insert or update the counter (by buyer_id, item_id)."""
        ...
