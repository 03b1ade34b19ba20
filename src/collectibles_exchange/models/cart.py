# -*- coding: utf-8 -*-
"""Cart: one buyer's accepted offers toward a single seller, awaiting checkout."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from collectibles_exchange.models.transaction_ref import TransactionRef


@dataclass(frozen=True, slots=True)
class CartLine:
    """An accepted offer holding one item for the buyer until hold_expires_at."""

    id: UUID
    item_id: UUID
    amount: Decimal
    hold_expires_at: datetime
    created_at: datetime
    debit_entry_id: Optional[UUID] = None
    """Ledger entry that charged the seller for this line."""

    @property
    def ref(self) -> TransactionRef:
        return TransactionRef.cart_line(self.id)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.hold_expires_at

    @classmethod
    def create(
        cls,
        item_id: UUID,
        amount: Decimal,
        hold_minutes: int,
        *,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
    ) -> CartLine:
        now = created_at or datetime.now(UTC)
        return cls(
            id=id or uuid4(),
            item_id=item_id,
            amount=amount,
            hold_expires_at=now + timedelta(minutes=hold_minutes),
            created_at=now,
        )


@dataclass(frozen=True, slots=True)
class Cart:
    """Identity: buyer_id (one cart per buyer). All lines share seller_id."""

    id: UUID
    buyer_id: str
    seller_id: str
    lines: tuple[CartLine, ...]
    created_at: datetime
    updated_at: datetime

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total(self) -> Decimal:
        return sum((line.amount for line in self.lines), Decimal("0"))

    @property
    def item_ids(self) -> list[UUID]:
        return [line.item_id for line in self.lines]

    def line_for_item(self, item_id: UUID) -> Optional[CartLine]:
        return next((line for line in self.lines if line.item_id == item_id), None)

    def with_line(self, line: CartLine) -> Cart:
        return Cart(
            id=self.id,
            buyer_id=self.buyer_id,
            seller_id=self.seller_id,
            lines=(*self.lines, line),
            created_at=self.created_at,
            updated_at=datetime.now(UTC),
        )

    def without_line(self, line_id: UUID) -> Cart:
        return Cart(
            id=self.id,
            buyer_id=self.buyer_id,
            seller_id=self.seller_id,
            lines=tuple(line for line in self.lines if line.id != line_id),
            created_at=self.created_at,
            updated_at=datetime.now(UTC),
        )

    @classmethod
    def open(cls, buyer_id: str, seller_id: str, *, id: Optional[UUID] = None) -> Cart:
        now = datetime.now(UTC)
        return cls(
            id=id or uuid4(),
            buyer_id=buyer_id,
            seller_id=seller_id,
            lines=(),
            created_at=now,
            updated_at=now,
        )
