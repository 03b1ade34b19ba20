# -*- coding: utf-8 -*-
"""PaymentHandoffService: starts cash payments for trades and buy offers.

prepare() runs inside the caller's unit of work and only changes gate state.
redirect() calls the gateway after the commit; a gateway failure is logged and
leaves the handoff in payment_initiated without a redirect, so the payer can
retry without a second charge.
"""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Optional
from uuid import UUID

from collectibles_exchange.events.exchange.activity_events import ActivityKind
from collectibles_exchange.exceptions import ExternalCollaboratorFailure, ValidationError
from collectibles_exchange.models.payment import PaymentInfo, PaymentState
from collectibles_exchange.services.payment.payment_gate import PaymentGate, PaymentHandoff

if TYPE_CHECKING:
    from collectibles_exchange.persistence.repositories.interfaces.user_account_repository import (
        IUserAccountRepository,
    )
    from collectibles_exchange.services.activity import ActivityPublisher
    from collectibles_exchange.services.payment.gateway import IPaymentGateway

PAYOUT_DETAILS_MISSING_ALIAS = "payout-details-not-available"


class PaymentHandoffService:
    """Payee checks, gate transitions and the gateway call for one payment."""

    def __init__(
        self,
        gateway: "IPaymentGateway",
        account_repository: "IUserAccountRepository",
        gate: Optional[PaymentGate] = None,
        activity: Optional["ActivityPublisher"] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._gateway = gateway
        self._accounts = account_repository
        self._gate = gate or PaymentGate()
        self._activity = activity
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def gate(self) -> PaymentGate:
        return self._gate

    async def prepare(
        self,
        payment: PaymentInfo,
        payer_id: str,
        *,
        transaction_id: UUID,
        kind: ActivityKind,
    ) -> PaymentHandoff:
        """Validate the payee can be paid and move the gate to payment_initiated.

        Raises:
            ValidationError: Payee has no payout contact (payee is notified) or wrong payer.
            ConflictError: Nothing to pay or already paid.
        """
        payee_id = payment.payee_id
        payee = await self._accounts.get(payee_id) if payee_id else None
        if payee is None or not payee.payout_contact:
            self._logger.warning(
                "payment_payee_details_missing",
                transaction_id=transaction_id,
                payee_id=payee_id,
            )
            if self._activity is not None:
                self._activity.notify(
                    PAYOUT_DETAILS_MISSING_ALIAS, payer_id, payee_id, transaction_id, kind
                )
            raise ValidationError("The receiving party has not set up payout details yet")
        return self._gate.initiate(payment, payer_id)

    async def redirect(
        self,
        payment: PaymentInfo,
        *,
        transaction_id: UUID,
        kind: ActivityKind,
    ) -> PaymentInfo:
        """Ask the gateway for the payer's redirect target; reuse one already obtained."""
        if payment.state != PaymentState.PAYMENT_INITIATED or payment.redirect_target:
            return payment
        payer = await self._accounts.get(payment.payer_id) if payment.payer_id else None
        payee = await self._accounts.get(payment.payee_id) if payment.payee_id else None
        callback_refs = {
            "payment_ref": payment.payment_ref or "",
            "transaction_id": str(transaction_id),
            "kind": kind,
        }
        if payee is not None and payee.payout_contact:
            callback_refs["payee"] = payee.payout_contact
        try:
            target = await self._gateway.initiate_payment(
                payer.contact if payer else None,
                payment.amount,
                callback_refs,
            )
        except Exception as exc:
            failure = ExternalCollaboratorFailure(
                "Payment gateway could not start the payment",
                collaborator="payment_gateway",
                cause=exc,
            )
            self._logger.warning(
                "payment_gateway_failed",
                transaction_id=transaction_id,
                payment_ref=payment.payment_ref,
                error_type=type(exc).__name__,
                error_message=str(failure),
            )
            return payment
        self._logger.info(
            "payment_handoff_started",
            transaction_id=transaction_id,
            payment_ref=payment.payment_ref,
            amount=payment.amount,
            payer_contact=payer.contact if payer else None,
        )
        return self._gate.attach_redirect(payment, target)
