"""Exchange activity events (emitted after a trade, offer, shipping or payment state commit)."""

from __future__ import annotations

from typing import Literal
from uuid import UUID

from bubus import BaseEvent  # type: ignore[import-untyped]

ActivityKind = Literal["trade", "offer", "shipping", "payment"]


class ExchangeActivityEvent(BaseEvent[None]):
    """Emitted once a transition has been committed.

    Handled by ExchangeActivityNotifier to notify the counterparty. Delivery is
    best effort; a failed delivery never affects the committed state.
    """

    alias: str
    """Status alias describing what happened, e.g. trade-sent, payment-made."""

    from_user_id: str | None = None
    to_user_id: str | None = None
    transaction_id: UUID
    kind: ActivityKind
    code: str | None = None
    detail: str | None = None


class SettlementCompletedEvent(BaseEvent[None]):
    """Emitted when a proposal or purchase transfers ownership of its items."""

    transaction_id: UUID
    kind: Literal["trade", "offer"]
    item_ids: list[UUID]
    cancelled_conflicts: int = 0
