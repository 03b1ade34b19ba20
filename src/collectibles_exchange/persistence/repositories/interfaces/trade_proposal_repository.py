# -*- coding: utf-8 -*-
"""Abstract interface for trade proposal storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from collectibles_exchange.models.trade_proposal import TradeProposal


class ITradeProposalRepository(ABC):
    """Interface for persisting TradeProposal rows (never deleted)."""

    @abstractmethod
    async def get(self, proposal_id: UUID) -> Optional[TradeProposal]:
        ...

    @abstractmethod
    async def save(self, proposal: TradeProposal) -> None:
        ...

    @abstractmethod
    async def get_by_payment_ref(self, payment_ref: str) -> Optional[TradeProposal]:
        ...

    @abstractmethod
    async def list_by_item(self, item_id: UUID) -> list[TradeProposal]:
        """Return every proposal (any status) whose send or receive set contains the item."""
        ...

    @abstractmethod
    async def list_by_user(self, user_id: str) -> list[TradeProposal]:
        """Return proposals where the user is sender or receiver, oldest first."""
        ...
