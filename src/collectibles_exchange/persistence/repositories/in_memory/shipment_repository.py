"""In-memory shipment repository (keyed by proposal id and shipping party)."""

from __future__ import annotations

from uuid import UUID

from collectibles_exchange.models.shipment import Shipment
from collectibles_exchange.persistence.repositories.interfaces.shipment_repository import (
    IShipmentRepository,
)


class InMemoryShipmentRepository(IShipmentRepository):
    """In-memory implementation of IShipmentRepository."""

    def __init__(self) -> None:
        self._store: dict[tuple[UUID, str], Shipment] = {}

    async def save(self, shipment: Shipment) -> None:
        self._store[(shipment.proposal_id, shipment.user_id)] = shipment

    async def get_for_party(self, proposal_id: UUID, user_id: str) -> Shipment | None:
        return self._store.get((proposal_id, user_id))

    async def list_by_proposal(self, proposal_id: UUID) -> list[Shipment]:
        return [s for (pid, _), s in self._store.items() if pid == proposal_id]
