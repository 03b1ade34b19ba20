"""In-memory append-only credit ledger."""

from __future__ import annotations

from uuid import UUID

from collectibles_exchange.models.credit_ledger import CreditLedgerEntry
from collectibles_exchange.models.transaction_ref import TransactionRef
from collectibles_exchange.persistence.repositories.interfaces.credit_ledger_repository import (
    ICreditLedgerRepository,
)


class InMemoryCreditLedgerRepository(ICreditLedgerRepository):
    """In-memory implementation of ICreditLedgerRepository.

    Keeps rows in append order plus an index of refunds by the debit they reverse,
    which plays the role of a unique constraint on refund_of.
    """

    def __init__(self) -> None:
        self._entries: list[CreditLedgerEntry] = []
        self._by_id: dict[UUID, CreditLedgerEntry] = {}
        self._refunds: dict[UUID, CreditLedgerEntry] = {}

    async def append(self, entry: CreditLedgerEntry) -> None:
        if entry.id in self._by_id:
            raise ValueError(f"ledger entry {entry.id} already exists")
        if entry.refund_of is not None:
            if entry.refund_of in self._refunds:
                raise ValueError(f"debit {entry.refund_of} is already refunded")
            self._refunds[entry.refund_of] = entry
        self._entries.append(entry)
        self._by_id[entry.id] = entry

    async def get(self, entry_id: UUID) -> CreditLedgerEntry | None:
        return self._by_id.get(entry_id)

    async def list_by_reference(self, reference: TransactionRef) -> list[CreditLedgerEntry]:
        return [e for e in self._entries if e.reference == reference]

    async def list_by_user(self, user_id: str) -> list[CreditLedgerEntry]:
        return [e for e in self._entries if e.user_id == user_id]

    async def find_refund_of(self, debit_id: UUID) -> CreditLedgerEntry | None:
        return self._refunds.get(debit_id)
