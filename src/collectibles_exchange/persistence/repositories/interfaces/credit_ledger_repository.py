# -*- coding: utf-8 -*-
"""Abstract interface for the append-only credit ledger."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from collectibles_exchange.models.credit_ledger import CreditLedgerEntry
from collectibles_exchange.models.transaction_ref import TransactionRef


class ICreditLedgerRepository(ABC):
    """Append-only store of CreditLedgerEntry rows. There is no update or delete."""

    @abstractmethod
    async def append(self, entry: CreditLedgerEntry) -> None:
        """Append a row.

        Raises:
            ValueError: If the entry id exists or it refunds an already-refunded debit.
        """
        ...

    @abstractmethod
    async def get(self, entry_id: UUID) -> Optional[CreditLedgerEntry]:
        ...

    @abstractmethod
    async def list_by_reference(self, reference: TransactionRef) -> list[CreditLedgerEntry]:
        """Return rows tied to the transaction, in append order."""
        ...

    @abstractmethod
    async def list_by_user(self, user_id: str) -> list[CreditLedgerEntry]:
        ...

    @abstractmethod
    async def find_refund_of(self, debit_id: UUID) -> Optional[CreditLedgerEntry]:
        """Return the refund row reversing the debit, if one exists."""
        ...
