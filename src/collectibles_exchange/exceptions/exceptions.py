"""Exceptions raised by the exchange engine.

Every rejected action raises before any state is written, so callers may retry
with fresh state. Rejected offers that consume an attempt are results, not errors.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Literal, Optional


class ExchangeError(Exception):
    """Base exception for exchange-engine errors."""

    pass


class MissingRequiredConfigError(ExchangeError):
    """Raised when a required configuration value is missing."""

    pass


class ValidationError(ExchangeError):
    """Raised for malformed input, self-dealing or an item lacking a capability."""

    pass


class NotFoundError(ValidationError):
    """Raised when a referenced item, proposal, cart or account does not exist."""

    def __init__(self, kind: str, key: object) -> None:
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class ConflictError(ExchangeError):
    """Raised when current state forbids the action (item reserved, proposal final, ...)."""

    pass


class InvalidTransitionError(ConflictError):
    """Raised when a requested status change is not in the transition table."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"Transition {current} -> {target} is not allowed")
        self.current = current
        self.target = target


class PaymentRequiredError(ConflictError):
    """Raised when settlement is attempted before the cash payment is confirmed."""

    pass


class NegotiationExhausted(ExchangeError):
    """Raised when a buyer has used every counter-offer attempt on an item.

    ``fallback_price`` is the asking price the buyer may still pay, or None when
    the listing refuses outright (deal-zone).
    """

    def __init__(self, message: str, *, fallback_price: Optional[Decimal] = None) -> None:
        super().__init__(message)
        self.fallback_price = fallback_price


InsufficientBalanceAction = Literal["contact_seller", "buy_coins", "contact_trader"]


class InsufficientBalance(ExchangeError):
    """Raised when a party lacks the coins a transaction costs.

    ``action`` names the next step offered to the caller.
    """

    def __init__(
        self,
        message: str,
        *,
        user_id: str,
        action: InsufficientBalanceAction,
        required: int = 1,
        available: int = 0,
    ) -> None:
        super().__init__(message)
        self.user_id = user_id
        self.action = action
        self.required = required
        self.available = available


class ExternalCollaboratorFailure(ExchangeError):
    """Wraps a failure from the payment gateway, shipping or notification side.

    Logged by the caller; never propagated out of a committed transition.
    """

    def __init__(
        self,
        message: str,
        *,
        collaborator: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.collaborator = collaborator
        self.cause = cause
