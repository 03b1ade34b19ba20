# -*- coding: utf-8 -*-
"""TransactionRef: typed pointer to the transaction that caused a state change.

Used as the reservation token on items and as the reference on ledger entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class TransactionKind(str, Enum):
    """Kind of transaction a reservation or ledger row belongs to."""

    TRADE = "trade"
    CART_LINE = "cart_line"
    BUY_OFFER = "buy_offer"


@dataclass(frozen=True, slots=True)
class TransactionRef:
    kind: TransactionKind
    id: UUID

    @classmethod
    def trade(cls, proposal_id: UUID) -> TransactionRef:
        return cls(TransactionKind.TRADE, proposal_id)

    @classmethod
    def cart_line(cls, line_id: UUID) -> TransactionRef:
        return cls(TransactionKind.CART_LINE, line_id)

    @classmethod
    def buy_offer(cls, offer_id: UUID) -> TransactionRef:
        return cls(TransactionKind.BUY_OFFER, offer_id)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"
