"""In-memory trade proposal repository (keyed by proposal id)."""

from __future__ import annotations

from uuid import UUID

from collectibles_exchange.models.trade_proposal import TradeProposal
from collectibles_exchange.persistence.repositories.interfaces.trade_proposal_repository import (
    ITradeProposalRepository,
)


def _by_created_at(proposal: TradeProposal) -> str:
    """Sort key: created_at (oldest first)."""
    return proposal.created_at.isoformat()


class InMemoryTradeProposalRepository(ITradeProposalRepository):
    """In-memory implementation of ITradeProposalRepository."""

    def __init__(self) -> None:
        self._store: dict[UUID, TradeProposal] = {}

    async def get(self, proposal_id: UUID) -> TradeProposal | None:
        return self._store.get(proposal_id)

    async def save(self, proposal: TradeProposal) -> None:
        self._store[proposal.id] = proposal

    async def get_by_payment_ref(self, payment_ref: str) -> TradeProposal | None:
        return next(
            (p for p in self._store.values() if p.payment.payment_ref == payment_ref),
            None,
        )

    async def list_by_item(self, item_id: UUID) -> list[TradeProposal]:
        return sorted(
            (p for p in self._store.values() if item_id in p.item_ids),
            key=_by_created_at,
        )

    async def list_by_user(self, user_id: str) -> list[TradeProposal]:
        return sorted(
            (p for p in self._store.values() if p.is_party(user_id)),
            key=_by_created_at,
        )
