"""In-memory settlement repository (keyed by proposal id)."""

from __future__ import annotations

from uuid import UUID

from collectibles_exchange.models.settlement import SettlementRecord
from collectibles_exchange.persistence.repositories.interfaces.settlement_repository import (
    ISettlementRepository,
)


class InMemorySettlementRepository(ISettlementRepository):
    """In-memory implementation of ISettlementRepository."""

    def __init__(self) -> None:
        self._store: dict[UUID, SettlementRecord] = {}

    async def get_by_proposal(self, proposal_id: UUID) -> SettlementRecord | None:
        return self._store.get(proposal_id)

    async def add_if_absent(self, record: SettlementRecord) -> bool:
        if record.proposal_id in self._store:
            return False
        self._store[record.proposal_id] = record
        return True
