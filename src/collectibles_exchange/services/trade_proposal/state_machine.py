# -*- coding: utf-8 -*-
"""TradeStateMachine: the central transition table for trade proposals.

Any status change not listed in TRANSITIONS is rejected with
InvalidTransitionError. Payment-pending is an alias on accepted proposals,
not a separate status.
"""

from __future__ import annotations

from typing import Optional

from collectibles_exchange.exceptions import InvalidTransitionError
from collectibles_exchange.models.trade_proposal import TradeParty, TradeStatus, TradeStatusAlias

_NEGATIVE_EXITS = frozenset(
    {TradeStatus.DECLINED, TradeStatus.CANCEL, TradeStatus.COUNTER_DECLINED}
)

TRANSITIONS: dict[TradeStatus, frozenset[TradeStatus]] = {
    TradeStatus.NEW: frozenset(
        {TradeStatus.COUNTER_OFFER, TradeStatus.ACCEPTED} | _NEGATIVE_EXITS
    ),
    TradeStatus.COUNTER_OFFER: frozenset(
        {TradeStatus.COUNTER_OFFER, TradeStatus.COUNTER_ACCEPTED} | _NEGATIVE_EXITS
    ),
    TradeStatus.ACCEPTED: frozenset({TradeStatus.COMPLETE} | _NEGATIVE_EXITS),
    TradeStatus.COUNTER_ACCEPTED: frozenset({TradeStatus.COMPLETE} | _NEGATIVE_EXITS),
    TradeStatus.COMPLETE: frozenset(),
    TradeStatus.DECLINED: frozenset(),
    TradeStatus.CANCEL: frozenset(),
    TradeStatus.COUNTER_DECLINED: frozenset(),
}

TERMINAL_STATUSES = frozenset(s for s, targets in TRANSITIONS.items() if not targets)
NEGATIVE_TERMINAL_STATUSES = _NEGATIVE_EXITS
NEGOTIATING_STATUSES = frozenset({TradeStatus.NEW, TradeStatus.COUNTER_OFFER})
ACCEPTED_STATUSES = frozenset({TradeStatus.ACCEPTED, TradeStatus.COUNTER_ACCEPTED})


def is_terminal(status: TradeStatus) -> bool:
    return status in TERMINAL_STATUSES


class TradeStateMachine:
    """Validates transitions and picks the target status/alias for each action."""

    def can_transition(self, current: TradeStatus, target: TradeStatus) -> bool:
        return target in TRANSITIONS[current]

    def ensure(self, current: TradeStatus, target: TradeStatus) -> None:
        if not self.can_transition(current, target):
            raise InvalidTransitionError(current.value, target.value)

    def accept_target(self, current: TradeStatus) -> TradeStatus:
        """new -> accepted, counter_offer -> counter_accepted."""
        target = (
            TradeStatus.COUNTER_ACCEPTED
            if current == TradeStatus.COUNTER_OFFER
            else TradeStatus.ACCEPTED
        )
        self.ensure(current, target)
        return target

    def decline_target(self, current: TradeStatus) -> TradeStatus:
        """Declining a counter position (or its acceptance) ends as counter_declined."""
        target = (
            TradeStatus.COUNTER_DECLINED
            if current in (TradeStatus.COUNTER_OFFER, TradeStatus.COUNTER_ACCEPTED)
            else TradeStatus.DECLINED
        )
        self.ensure(current, target)
        return target

    def acceptance_alias(
        self,
        target: TradeStatus,
        payer: Optional[TradeParty],
    ) -> TradeStatusAlias:
        """Alias for an acceptance; names the paying side while cash is owed."""
        countered = target == TradeStatus.COUNTER_ACCEPTED
        if payer is None:
            return (
                TradeStatusAlias.COUNTER_OFFER_ACCEPTED
                if countered
                else TradeStatusAlias.TRADE_ACCEPTED
            )
        if payer == TradeParty.SENDER:
            return (
                TradeStatusAlias.COUNTER_ACCEPTED_SENDER_PAY
                if countered
                else TradeStatusAlias.TRADE_ACCEPTED_SENDER_PAY
            )
        return (
            TradeStatusAlias.COUNTER_ACCEPTED_RECEIVER_PAY
            if countered
            else TradeStatusAlias.TRADE_ACCEPTED_RECEIVER_PAY
        )

    @staticmethod
    def decline_alias(target: TradeStatus) -> TradeStatusAlias:
        if target == TradeStatus.COUNTER_DECLINED:
            return TradeStatusAlias.COUNTER_OFFER_DECLINED
        return TradeStatusAlias.TRADE_DECLINED
