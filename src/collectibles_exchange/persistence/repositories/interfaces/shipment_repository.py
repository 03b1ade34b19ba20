# -*- coding: utf-8 -*-
"""Abstract interface for shipment tracking rows."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from collectibles_exchange.models.shipment import Shipment


class IShipmentRepository(ABC):
    """Interface for persisting Shipment rows (one per party per proposal)."""

    @abstractmethod
    async def save(self, shipment: Shipment) -> None:
        ...

    @abstractmethod
    async def get_for_party(self, proposal_id: UUID, user_id: str) -> Optional[Shipment]:
        ...

    @abstractmethod
    async def list_by_proposal(self, proposal_id: UUID) -> list[Shipment]:
        ...
