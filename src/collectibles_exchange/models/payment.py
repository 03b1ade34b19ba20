# -*- coding: utf-8 -*-
"""PaymentInfo: cash-settlement fields embedded in trade proposals and buy offers."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class PaymentState(str, Enum):
    """Payment gate state. NOT_REQUIRED for transactions without cash."""

    NOT_REQUIRED = "not_required"
    UNPAID = "unpaid"
    PAYMENT_INITIATED = "payment_initiated"
    PAID = "paid"


class PaymentResultStatus(str, Enum):
    """Outcome reported by the payment collaborator."""

    APPROVED = "approved"
    DECLINED = "declined"


@dataclass(frozen=True, slots=True)
class PaymentInfo:
    state: PaymentState = PaymentState.NOT_REQUIRED
    amount: Decimal = Decimal("0")
    payer_id: Optional[str] = None
    payee_id: Optional[str] = None
    payment_ref: Optional[str] = None
    """Reference handed to the gateway; the result callback carries it back."""
    redirect_target: Optional[str] = None
    initiated_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    gateway_payer_id: Optional[str] = None
    """Payer id as reported by the gateway on approval."""

    @property
    def is_required(self) -> bool:
        return self.state != PaymentState.NOT_REQUIRED

    @property
    def is_paid(self) -> bool:
        return self.state == PaymentState.PAID

    @property
    def is_in_settlement(self) -> bool:
        """True once a handoff started or payment landed."""
        return self.state in (PaymentState.PAYMENT_INITIATED, PaymentState.PAID)

    def with_state(self, state: PaymentState, **changes: object) -> PaymentInfo:
        return replace(self, state=state, **changes)  # type: ignore[arg-type]

    @classmethod
    def not_required(cls) -> PaymentInfo:
        return cls()

    @classmethod
    def unpaid(cls, amount: Decimal, payer_id: str, payee_id: str) -> PaymentInfo:
        return cls(
            state=PaymentState.UNPAID,
            amount=amount,
            payer_id=payer_id,
            payee_id=payee_id,
        )
