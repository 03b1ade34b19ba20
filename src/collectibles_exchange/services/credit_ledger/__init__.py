"""Credit ledger service."""

from collectibles_exchange.services.credit_ledger.credit_ledger_service import (
    CreditLedgerService,
)

__all__ = ["CreditLedgerService"]
