# -*- coding: utf-8 -*-
"""BuyOffer: a checked-out cart awaiting the buyer's payment.

Created by cart checkout with a transaction code. The cart lines it came from are
kept so their seller debits can be refunded if the purchase is abandoned.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from collectibles_exchange.models.cart import CartLine
from collectibles_exchange.models.payment import PaymentInfo
from collectibles_exchange.models.transaction_ref import TransactionRef


class BuyOfferStatus(str, Enum):
    OFFER_SENT = "offer_sent"
    PURCHASED = "purchased"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class BuyOffer:
    id: UUID
    code: str
    buyer_id: str
    seller_id: str
    lines: tuple[CartLine, ...]
    total_amount: Decimal
    status: BuyOfferStatus
    payment: PaymentInfo
    created_at: datetime
    updated_at: datetime
    status_alias: Optional[str] = None
    purchased_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    @property
    def ref(self) -> TransactionRef:
        return TransactionRef.buy_offer(self.id)

    @property
    def item_ids(self) -> list[UUID]:
        return [line.item_id for line in self.lines]

    @property
    def is_open(self) -> bool:
        return self.status == BuyOfferStatus.OFFER_SENT

    def with_payment(self, payment: PaymentInfo, *, status_alias: Optional[str] = None) -> BuyOffer:
        return replace(
            self,
            payment=payment,
            status_alias=status_alias or self.status_alias,
            updated_at=datetime.now(UTC),
        )

    def with_purchased(self, at: Optional[datetime] = None) -> BuyOffer:
        now = at or datetime.now(UTC)
        return replace(self, status=BuyOfferStatus.PURCHASED, purchased_at=now, updated_at=now)

    def with_cancelled(self, status_alias: str, at: Optional[datetime] = None) -> BuyOffer:
        now = at or datetime.now(UTC)
        return replace(
            self,
            status=BuyOfferStatus.CANCELLED,
            status_alias=status_alias,
            cancelled_at=now,
            updated_at=now,
        )

    @classmethod
    def create(
        cls,
        code: str,
        buyer_id: str,
        seller_id: str,
        lines: tuple[CartLine, ...],
        *,
        id: Optional[UUID] = None,
    ) -> BuyOffer:
        """Create an OFFER_SENT purchase whose cash is owed by the buyer to the seller."""
        if not lines:
            raise ValueError("a buy offer needs at least one line")
        total = sum((line.amount for line in lines), Decimal("0"))
        if total <= 0:
            raise ValueError("a buy offer total must be > 0")
        now = datetime.now(UTC)
        return cls(
            id=id or uuid4(),
            code=code,
            buyer_id=buyer_id,
            seller_id=seller_id,
            lines=lines,
            total_amount=total,
            status=BuyOfferStatus.OFFER_SENT,
            payment=PaymentInfo.unpaid(total, payer_id=buyer_id, payee_id=seller_id),
            created_at=now,
            updated_at=now,
            status_alias="offer-sent",
        )
