# -*- coding: utf-8 -*-
"""Item: one physical collectible listed on the exchange.

Holds the current owner, capability flags and the two lock fields:
reserved_by (exclusive, at most one pending transaction) and proposal_locks
(non-exclusive marks left by pending trade proposals that reference the item).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from collectibles_exchange.models.transaction_ref import TransactionRef


class ItemCapability(str, Enum):
    """What a reservation is taken for."""

    TRADE = "trade"
    PURCHASE = "purchase"


@dataclass(frozen=True, slots=True)
class Item:
    """A listed collectible.

    Pricing: asking_price (P) is the buy-now price; accept_above (T) is the
    threshold under which an offer counts as a low offer. deal_zone_price,
    when set, replaces both for deal-zone listings.
    """

    id: UUID
    owner_id: str
    title: str
    asking_price: Decimal
    accept_above: Decimal
    tradable: bool
    purchasable: bool
    active: bool
    created_at: datetime
    updated_at: datetime
    deal_zone_price: Optional[Decimal] = None
    reserved_by: Optional[TransactionRef] = None
    """Exclusive reservation token; None when the item is free."""
    proposal_locks: frozenset[UUID] = frozenset()
    """Ids of pending trade proposals that reference this item."""
    deleted_at: Optional[datetime] = None

    @property
    def is_reserved(self) -> bool:
        return self.reserved_by is not None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_deal_zone(self) -> bool:
        return self.deal_zone_price is not None

    def has_capability(self, capability: ItemCapability) -> bool:
        """True when the item is live and allows the given kind of transaction."""
        if not self.active or self.is_deleted:
            return False
        if capability == ItemCapability.TRADE:
            return self.tradable
        return self.purchasable

    def with_reservation(self, holder: Optional[TransactionRef], *, at: Optional[datetime] = None) -> Item:
        """Return a copy reserved by holder (or released when holder is None)."""
        return replace(self, reserved_by=holder, updated_at=at or datetime.now(UTC))

    def with_proposal_lock(self, proposal_id: UUID) -> Item:
        return replace(
            self,
            proposal_locks=self.proposal_locks | {proposal_id},
            updated_at=datetime.now(UTC),
        )

    def without_proposal_lock(self, proposal_id: UUID) -> Item:
        return replace(
            self,
            proposal_locks=self.proposal_locks - {proposal_id},
            updated_at=datetime.now(UTC),
        )

    def with_owner(self, owner_id: str, *, at: Optional[datetime] = None) -> Item:
        """Return a copy owned by owner_id with every lock cleared."""
        return replace(
            self,
            owner_id=owner_id,
            reserved_by=None,
            proposal_locks=frozenset(),
            updated_at=at or datetime.now(UTC),
        )

    def with_deleted(self, deleted_at: Optional[datetime] = None) -> Item:
        now = deleted_at or datetime.now(UTC)
        return replace(self, active=False, deleted_at=now, updated_at=now)

    @classmethod
    def create(
        cls,
        owner_id: str,
        title: str,
        asking_price: Decimal,
        accept_above: Optional[Decimal] = None,
        *,
        tradable: bool = True,
        purchasable: bool = True,
        deal_zone_price: Optional[Decimal] = None,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
    ) -> Item:
        """Create a new active, unreserved listing.

        accept_above defaults to the asking price (no low-offer band).

        Raises:
            ValueError: If prices are negative or accept_above exceeds asking_price.
        """
        if asking_price < 0:
            raise ValueError("asking_price must be >= 0")
        threshold = asking_price if accept_above is None else accept_above
        if threshold < 0 or threshold > asking_price:
            raise ValueError("accept_above must be between 0 and asking_price")
        if deal_zone_price is not None and deal_zone_price <= 0:
            raise ValueError("deal_zone_price must be > 0")
        now = created_at or datetime.now(UTC)
        return cls(
            id=id or uuid4(),
            owner_id=owner_id,
            title=title.strip(),
            asking_price=asking_price,
            accept_above=threshold,
            tradable=tradable,
            purchasable=purchasable,
            active=True,
            created_at=now,
            updated_at=now,
            deal_zone_price=deal_zone_price,
        )
