"""Trade proposals: transition table and the orchestrating service."""

from collectibles_exchange.services.trade_proposal.state_machine import (
    ACCEPTED_STATUSES,
    NEGATIVE_TERMINAL_STATUSES,
    NEGOTIATING_STATUSES,
    TERMINAL_STATUSES,
    TRANSITIONS,
    TradeStateMachine,
    is_terminal,
)
from collectibles_exchange.services.trade_proposal.trade_proposal_service import (
    CancelResult,
    TradeProposalService,
)

__all__ = [
    "ACCEPTED_STATUSES",
    "CancelResult",
    "NEGATIVE_TERMINAL_STATUSES",
    "NEGOTIATING_STATUSES",
    "TERMINAL_STATUSES",
    "TRANSITIONS",
    "TradeProposalService",
    "TradeStateMachine",
    "is_terminal",
]
