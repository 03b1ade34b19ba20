# -*- coding: utf-8 -*-
"""CreditLedgerEntry: one coin movement, append-only.

A refund is a new CREDIT row pointing at the debit it reverses (refund_of);
a debit is refunded at most once.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from collectibles_exchange.models.transaction_ref import TransactionRef


class LedgerDirection(str, Enum):
    DEBIT = "debit"
    CREDIT = "credit"


class LedgerEntryStatus(str, Enum):
    SUCCESS = "Success"
    REFUND = "Refund"


class DeductionFrom(str, Enum):
    """Which side of the transaction paid the fee."""

    FREE = "Free"
    SENDER = "Sender"
    RECEIVER = "Receiver"
    BOTH = "Both"
    SELLER = "Seller"
    BUYER = "Buyer"


@dataclass(frozen=True, slots=True)
class CreditLedgerEntry:
    id: UUID
    user_id: str
    """Party whose balance moved."""
    counterparty_id: Optional[str]
    reference: TransactionRef
    amount: int
    direction: LedgerDirection
    status: LedgerEntryStatus
    deduction_from: DeductionFrom
    created_at: datetime
    refund_of: Optional[UUID] = None
    balance_after: Optional[int] = None

    @property
    def is_debit(self) -> bool:
        return self.direction == LedgerDirection.DEBIT

    @classmethod
    def debit(
        cls,
        user_id: str,
        amount: int,
        reference: TransactionRef,
        deduction_from: DeductionFrom,
        *,
        counterparty_id: Optional[str] = None,
        balance_after: Optional[int] = None,
    ) -> CreditLedgerEntry:
        if amount <= 0:
            raise ValueError("ledger amounts must be > 0")
        return cls(
            id=uuid4(),
            user_id=user_id,
            counterparty_id=counterparty_id,
            reference=reference,
            amount=amount,
            direction=LedgerDirection.DEBIT,
            status=LedgerEntryStatus.SUCCESS,
            deduction_from=deduction_from,
            created_at=datetime.now(UTC),
            balance_after=balance_after,
        )

    def refund(self, *, balance_after: Optional[int] = None) -> CreditLedgerEntry:
        """Build the CREDIT row that reverses this debit."""
        if not self.is_debit:
            raise ValueError("only debits can be refunded")
        return CreditLedgerEntry(
            id=uuid4(),
            user_id=self.user_id,
            counterparty_id=self.counterparty_id,
            reference=self.reference,
            amount=self.amount,
            direction=LedgerDirection.CREDIT,
            status=LedgerEntryStatus.REFUND,
            deduction_from=self.deduction_from,
            created_at=datetime.now(UTC),
            refund_of=self.id,
            balance_after=balance_after,
        )
