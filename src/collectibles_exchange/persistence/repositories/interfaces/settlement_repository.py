# -*- coding: utf-8 -*-
"""Abstract interface for settlement records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from collectibles_exchange.models.settlement import SettlementRecord


class ISettlementRepository(ABC):
    """Interface for SettlementRecord rows; at most one per proposal."""

    @abstractmethod
    async def get_by_proposal(self, proposal_id: UUID) -> Optional[SettlementRecord]:
        ...

    @abstractmethod
    async def add_if_absent(self, record: SettlementRecord) -> bool:
        """Store the record unless the proposal already has one. Returns True if stored."""
        ...
