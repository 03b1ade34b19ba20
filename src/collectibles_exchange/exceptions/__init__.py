"""Exceptions subpackage."""

from collectibles_exchange.exceptions.exceptions import (
    ConflictError,
    ExchangeError,
    ExternalCollaboratorFailure,
    InsufficientBalance,
    InvalidTransitionError,
    MissingRequiredConfigError,
    NegotiationExhausted,
    NotFoundError,
    PaymentRequiredError,
    ValidationError,
)

__all__ = [
    "ConflictError",
    "ExchangeError",
    "ExternalCollaboratorFailure",
    "InsufficientBalance",
    "InvalidTransitionError",
    "MissingRequiredConfigError",
    "NegotiationExhausted",
    "NotFoundError",
    "PaymentRequiredError",
    "ValidationError",
]
