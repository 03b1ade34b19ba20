# -*- coding: utf-8 -*-
"""Unit tests for PaymentGate."""

from __future__ import annotations

from decimal import Decimal

import pytest

from collectibles_exchange.exceptions import ConflictError, ValidationError
from collectibles_exchange.models.payment import PaymentInfo, PaymentResultStatus, PaymentState
from collectibles_exchange.services.payment import PaymentGate, PaymentOutcome


def _unpaid(amount: str = "50") -> PaymentInfo:
    return PaymentInfo.unpaid(Decimal(amount), payer_id="alice", payee_id="bob")


def test_settlement_allowed_without_cash_or_once_paid() -> None:
    gate = PaymentGate()

    assert gate.allows_settlement(PaymentInfo.not_required()) is True
    assert gate.allows_settlement(_unpaid()) is False
    assert gate.allows_settlement(_unpaid().with_state(PaymentState.PAYMENT_INITIATED)) is False
    assert gate.allows_settlement(_unpaid().with_state(PaymentState.PAID)) is True


def test_initiate_assigns_reference_and_reuses_handoff() -> None:
    gate = PaymentGate()

    first = gate.initiate(_unpaid(), "alice")
    second = gate.initiate(first.payment, "alice")

    assert first.started is True
    assert first.payment.state == PaymentState.PAYMENT_INITIATED
    assert first.payment.payment_ref
    assert second.started is False
    assert second.payment == first.payment
    assert gate.blocks_cancellation(first.payment) is True


def test_initiate_rejects_wrong_payer_and_nothing_owed() -> None:
    gate = PaymentGate()

    with pytest.raises(ValidationError):
        gate.initiate(_unpaid(), "bob")
    with pytest.raises(ConflictError):
        gate.initiate(PaymentInfo.not_required(), "alice")


def test_apply_result_pays_once() -> None:
    gate = PaymentGate()
    pending = gate.initiate(_unpaid(), "alice").payment

    paid = gate.apply_result(
        pending, PaymentResultStatus.APPROVED, gateway_payer_id="gw-1", amount=Decimal("50")
    )
    repeat = gate.apply_result(
        paid.payment, PaymentResultStatus.APPROVED, gateway_payer_id="gw-1", amount=Decimal("50")
    )

    assert paid.outcome == PaymentOutcome.PAID
    assert paid.payment.paid_at is not None
    assert repeat.outcome == PaymentOutcome.ALREADY_PAID
    assert repeat.payment == paid.payment
    with pytest.raises(ConflictError):
        gate.initiate(paid.payment, "alice")


def test_declined_result_returns_to_unpaid() -> None:
    gate = PaymentGate()
    pending = gate.attach_redirect(gate.initiate(_unpaid(), "alice").payment, "https://pay/x")

    result = gate.apply_result(
        pending, PaymentResultStatus.DECLINED, gateway_payer_id=None, amount=Decimal("50")
    )

    assert result.outcome == PaymentOutcome.DECLINED
    assert result.payment.state == PaymentState.UNPAID
    assert result.payment.redirect_target is None
    assert gate.blocks_cancellation(result.payment) is False


def test_result_without_handoff_is_a_conflict() -> None:
    with pytest.raises(ConflictError):
        PaymentGate().apply_result(
            _unpaid(), PaymentResultStatus.APPROVED, gateway_payer_id=None, amount=Decimal("50")
        )
