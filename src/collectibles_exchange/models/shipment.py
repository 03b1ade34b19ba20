# -*- coding: utf-8 -*-
"""Shipment: tracking details one party recorded for their side of a trade."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class Shipment:
    id: UUID
    proposal_id: UUID
    user_id: str
    """Party who shipped."""
    tracking_id: str
    shipment_status: str
    created_at: datetime
    updated_at: datetime
    carrier: Optional[str] = None

    def with_status(self, shipment_status: str) -> Shipment:
        return Shipment(
            id=self.id,
            proposal_id=self.proposal_id,
            user_id=self.user_id,
            tracking_id=self.tracking_id,
            shipment_status=shipment_status,
            created_at=self.created_at,
            updated_at=datetime.now(UTC),
            carrier=self.carrier,
        )

    @classmethod
    def create(
        cls,
        proposal_id: UUID,
        user_id: str,
        tracking_id: str,
        *,
        shipment_status: str = "shipped",
        carrier: Optional[str] = None,
    ) -> Shipment:
        if not tracking_id.strip():
            raise ValueError("tracking_id must not be empty")
        now = datetime.now(UTC)
        return cls(
            id=uuid4(),
            proposal_id=proposal_id,
            user_id=user_id,
            tracking_id=tracking_id.strip(),
            shipment_status=shipment_status,
            created_at=now,
            updated_at=now,
            carrier=carrier,
        )
