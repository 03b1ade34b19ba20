# -*- coding: utf-8 -*-
"""ActivityPublisher: fire-and-forget dispatch of exchange activity events.

Called only after a state change is committed. Dispatch failures are logged
and swallowed so they can never roll back or fail the committed transition.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Literal, Optional
from uuid import UUID

import structlog

from collectibles_exchange.events.exchange.activity_events import (
    ActivityKind,
    ExchangeActivityEvent,
    SettlementCompletedEvent,
)

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]


class ActivityPublisher:
    """Wraps the event bus with the best-effort notify(alias, from, to, transaction, kind) contract."""

    _event_bus: Optional["EventBus"] = None

    def __init__(
        self,
        event_bus: Optional[Any] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._event_bus = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def notify(
        self,
        alias: str,
        from_user_id: Optional[str],
        to_user_id: Optional[str],
        transaction_id: UUID,
        kind: ActivityKind,
        *,
        code: Optional[str] = None,
        detail: Optional[str] = None,
    ) -> None:
        """Emit ExchangeActivityEvent for ExchangeActivityNotifier."""
        if self._event_bus is None:
            return
        try:
            event = ExchangeActivityEvent(
                alias=alias,
                from_user_id=from_user_id,
                to_user_id=to_user_id,
                transaction_id=transaction_id,
                kind=kind,
                code=code,
                detail=detail,
            )
            self._event_bus.dispatch(event)
        except Exception as exc:
            self._logger.warning(
                "exchange_activity_dispatch_failed",
                alias=alias,
                transaction_id=str(transaction_id),
                kind=kind,
                error_type=type(exc).__name__,
                error_message=str(exc),
            )

    def settlement_completed(
        self,
        transaction_id: UUID,
        kind: Literal["trade", "offer"],
        item_ids: list[UUID],
        cancelled_conflicts: int,
    ) -> None:
        """Emit SettlementCompletedEvent once ownership moved."""
        if self._event_bus is None:
            return
        try:
            self._event_bus.dispatch(
                SettlementCompletedEvent(
                    transaction_id=transaction_id,
                    kind=kind,
                    item_ids=item_ids,
                    cancelled_conflicts=cancelled_conflicts,
                )
            )
        except Exception as exc:
            self._logger.warning(
                "settlement_event_dispatch_failed",
                transaction_id=str(transaction_id),
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
