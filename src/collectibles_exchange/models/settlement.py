# -*- coding: utf-8 -*-
"""SettlementRecord: written exactly once when a proposal completes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class OwnershipTransfer:
    item_id: UUID
    from_id: str
    to_id: str


@dataclass(frozen=True, slots=True)
class SettlementRecord:
    id: UUID
    proposal_id: UUID
    transfers: tuple[OwnershipTransfer, ...]
    settled_at: datetime
    cash_amount: Optional[Decimal] = None
    cash_payer_id: Optional[str] = None

    @classmethod
    def create(
        cls,
        proposal_id: UUID,
        transfers: tuple[OwnershipTransfer, ...],
        *,
        cash_amount: Optional[Decimal] = None,
        cash_payer_id: Optional[str] = None,
    ) -> SettlementRecord:
        return cls(
            id=uuid4(),
            proposal_id=proposal_id,
            transfers=transfers,
            settled_at=datetime.now(UTC),
            cash_amount=cash_amount,
            cash_payer_id=cash_payer_id,
        )
