"""Payment gate, gateway collaborator and result routing."""

from collectibles_exchange.services.payment.gateway import HostedCheckoutGateway, IPaymentGateway
from collectibles_exchange.services.payment.payment_gate import (
    PaymentGate,
    PaymentHandoff,
    PaymentOutcome,
    PaymentResult,
)
from collectibles_exchange.services.payment.payment_handoff import (
    PAYOUT_DETAILS_MISSING_ALIAS,
    PaymentHandoffService,
)
from collectibles_exchange.services.payment.payment_result_router import PaymentResultRouter

__all__ = [
    "PAYOUT_DETAILS_MISSING_ALIAS",
    "PaymentHandoffService",
    "HostedCheckoutGateway",
    "IPaymentGateway",
    "PaymentGate",
    "PaymentHandoff",
    "PaymentOutcome",
    "PaymentResult",
    "PaymentResultRouter",
]
