# -*- coding: utf-8 -*-
"""OfferAttemptCounter: per (buyer, item) negotiation history.

attempts only grows and last_offer_amount never decreases. Rows are never
deleted; they double as rate-limit history for the pair.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID


@dataclass(frozen=True, slots=True)
class OfferAttemptCounter:
    buyer_id: str
    item_id: UUID
    attempts: int
    last_offer_amount: Decimal
    updated_at: datetime

    @property
    def key(self) -> tuple[str, UUID]:
        return (self.buyer_id, self.item_id)

    def with_rejected_offer(self, amount: Decimal, *, at: Optional[datetime] = None) -> OfferAttemptCounter:
        """Return a copy with one more attempt and the highest amount seen so far."""
        return OfferAttemptCounter(
            buyer_id=self.buyer_id,
            item_id=self.item_id,
            attempts=self.attempts + 1,
            last_offer_amount=max(amount, self.last_offer_amount),
            updated_at=at or datetime.now(UTC),
        )

    def with_accepted_offer(self, amount: Decimal, *, at: Optional[datetime] = None) -> OfferAttemptCounter:
        """Return a copy recording the accepted amount.

        Attempts stay unchanged, except that a pair accepted on its first offer
        is recorded with one attempt.
        """
        return OfferAttemptCounter(
            buyer_id=self.buyer_id,
            item_id=self.item_id,
            attempts=max(self.attempts, 1),
            last_offer_amount=max(amount, self.last_offer_amount),
            updated_at=at or datetime.now(UTC),
        )

    @classmethod
    def empty(cls, buyer_id: str, item_id: UUID) -> OfferAttemptCounter:
        """Counter for a pair with no recorded offers (not persisted until used)."""
        return cls(
            buyer_id=buyer_id,
            item_id=item_id,
            attempts=0,
            last_offer_amount=Decimal("0"),
            updated_at=datetime.now(UTC),
        )
