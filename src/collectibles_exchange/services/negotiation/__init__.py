"""Buy-offer negotiation: pure policy and orchestrating service."""

from collectibles_exchange.services.negotiation.offer_negotiation_service import (
    OfferNegotiationService,
    OfferResult,
)
from collectibles_exchange.services.negotiation.offer_policy import (
    OfferDecision,
    OfferNegotiationPolicy,
    OfferOutcome,
    OfferPolicyInput,
)

__all__ = [
    "OfferDecision",
    "OfferNegotiationPolicy",
    "OfferNegotiationService",
    "OfferOutcome",
    "OfferPolicyInput",
    "OfferResult",
]
