# -*- coding: utf-8 -*-
"""PaymentGate: pure rules gating settlement of cash-bearing transactions.

No I/O. States move unpaid -> payment_initiated -> paid; a declined result
returns to unpaid. Nothing here cancels a transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from collectibles_exchange.exceptions import ConflictError, ValidationError
from collectibles_exchange.models.payment import PaymentInfo, PaymentResultStatus, PaymentState


class PaymentOutcome(str, Enum):
    """What a payment result did to the gate."""

    PAID = "paid"
    """First approval: the only outcome that triggers the commit sweep."""
    ALREADY_PAID = "already_paid"
    DECLINED = "declined"


@dataclass(frozen=True)
class PaymentHandoff:
    """Result of starting a payment: whether the gateway must be called now."""

    payment: PaymentInfo
    started: bool
    """False when a handoff was already in progress and is reused."""


@dataclass(frozen=True)
class PaymentResult:
    payment: PaymentInfo
    outcome: PaymentOutcome


class PaymentGate:
    """State rules for PaymentInfo. Callers persist the returned values."""

    def allows_settlement(self, payment: PaymentInfo) -> bool:
        """True when no cash is owed or the payment has been confirmed."""
        return payment.state in (PaymentState.NOT_REQUIRED, PaymentState.PAID)

    def blocks_cancellation(self, payment: PaymentInfo) -> bool:
        """A handoff under way or a landed payment cannot be walked back by cancelling."""
        return payment.is_in_settlement

    def initiate(self, payment: PaymentInfo, payer_id: str, *, now: Optional[datetime] = None) -> PaymentHandoff:
        """Move to payment_initiated, or reuse the handoff already started.

        Raises:
            ValidationError: payer_id is not the party who owes the cash.
            ConflictError: Nothing to pay, or already paid.
        """
        if payment.state == PaymentState.NOT_REQUIRED:
            raise ConflictError("No cash payment is required for this transaction")
        if payment.state == PaymentState.PAID:
            raise ConflictError("Payment already completed")
        if payment.payer_id != payer_id:
            raise ValidationError("Only the paying party can initiate the payment")
        if payment.state == PaymentState.PAYMENT_INITIATED:
            return PaymentHandoff(payment=payment, started=False)
        started = payment.with_state(
            PaymentState.PAYMENT_INITIATED,
            payment_ref=uuid4().hex,
            initiated_at=now or datetime.now(UTC),
            redirect_target=None,
        )
        return PaymentHandoff(payment=started, started=True)

    def attach_redirect(self, payment: PaymentInfo, redirect_target: str) -> PaymentInfo:
        return payment.with_state(payment.state, redirect_target=redirect_target)

    def apply_result(
        self,
        payment: PaymentInfo,
        status: PaymentResultStatus,
        *,
        gateway_payer_id: Optional[str],
        amount: Decimal,
        now: Optional[datetime] = None,
    ) -> PaymentResult:
        """Apply a gateway result. paid is set at most once.

        Raises:
            ConflictError: No handoff in progress.
            ValidationError: Approved amount differs from the amount owed.
        """
        if payment.state == PaymentState.PAID:
            return PaymentResult(payment=payment, outcome=PaymentOutcome.ALREADY_PAID)
        if payment.state != PaymentState.PAYMENT_INITIATED:
            raise ConflictError(f"Payment is {payment.state.value}; no handoff in progress")
        if status == PaymentResultStatus.DECLINED:
            declined = payment.with_state(PaymentState.UNPAID, redirect_target=None)
            return PaymentResult(payment=declined, outcome=PaymentOutcome.DECLINED)
        if amount != payment.amount:
            raise ValidationError(
                f"Paid amount {amount} does not match amount owed {payment.amount}"
            )
        paid = payment.with_state(
            PaymentState.PAID,
            paid_at=now or datetime.now(UTC),
            gateway_payer_id=gateway_payer_id,
        )
        return PaymentResult(payment=paid, outcome=PaymentOutcome.PAID)
