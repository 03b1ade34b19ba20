# -*- coding: utf-8 -*-
"""CreditLedgerService: coin debits and refunds paired with balance updates.

Each movement changes the balance atomically in the account repository and
appends exactly one ledger row; if the append fails the balance change is
reverted. Refunds are new rows and each debit is refunded at most once.
"""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Optional
from uuid import UUID

from collectibles_exchange.exceptions import (
    InsufficientBalance,
    NotFoundError,
    ValidationError,
)
from collectibles_exchange.exceptions.exceptions import InsufficientBalanceAction
from collectibles_exchange.models.credit_ledger import (
    CreditLedgerEntry,
    DeductionFrom,
    LedgerEntryStatus,
)

if TYPE_CHECKING:
    from collectibles_exchange.models.transaction_ref import TransactionRef
    from collectibles_exchange.persistence.repositories.interfaces.credit_ledger_repository import (
        ICreditLedgerRepository,
    )
    from collectibles_exchange.persistence.repositories.interfaces.user_account_repository import (
        IUserAccountRepository,
    )


class CreditLedgerService:
    """Sole writer of ledger rows and coin balances."""

    def __init__(
        self,
        ledger_repository: "ICreditLedgerRepository",
        account_repository: "IUserAccountRepository",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._ledger = ledger_repository
        self._accounts = account_repository
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def balance(self, user_id: str) -> int:
        account = await self._accounts.get(user_id)
        if account is None:
            raise NotFoundError("UserAccount", user_id)
        return account.coins

    async def ensure_balance(
        self,
        user_id: str,
        required: int,
        *,
        action: InsufficientBalanceAction,
        message: str,
    ) -> None:
        """Raise InsufficientBalance with the given next-step action when short of coins."""
        available = await self.balance(user_id)
        if available < required:
            raise InsufficientBalance(
                message,
                user_id=user_id,
                action=action,
                required=required,
                available=available,
            )

    async def debit(
        self,
        user_id: str,
        amount: int,
        reference: "TransactionRef",
        deduction_from: DeductionFrom,
        *,
        counterparty_id: Optional[str] = None,
        insufficient_action: InsufficientBalanceAction = "buy_coins",
    ) -> CreditLedgerEntry:
        """Take amount coins from user_id and record a Success debit row.

        Raises:
            NotFoundError: No account for user_id.
            InsufficientBalance: Balance below amount; nothing is written.
        """
        if amount <= 0:
            raise ValidationError("debit amount must be > 0")
        account = await self._accounts.try_debit(user_id, amount)
        if account is None:
            existing = await self._accounts.get(user_id)
            if existing is None:
                raise NotFoundError("UserAccount", user_id)
            raise InsufficientBalance(
                f"{user_id} needs {amount} coin(s) but has {existing.coins}",
                user_id=user_id,
                action=insufficient_action,
                required=amount,
                available=existing.coins,
            )
        entry = CreditLedgerEntry.debit(
            user_id=user_id,
            amount=amount,
            reference=reference,
            deduction_from=deduction_from,
            counterparty_id=counterparty_id,
            balance_after=account.coins,
        )
        try:
            await self._ledger.append(entry)
        except Exception:
            await self._accounts.credit(user_id, amount)
            raise
        self._logger.info(
            "ledger_debit",
            entry_id=entry.id,
            user_id=user_id,
            amount=amount,
            reference=str(reference),
            deduction_from=deduction_from,
            balance_after=account.coins,
        )
        return entry

    async def refund(self, debit_entry_id: UUID) -> Optional[CreditLedgerEntry]:
        """Return the debited coins with a Refund row. None if already refunded."""
        debit = await self._ledger.get(debit_entry_id)
        if debit is None:
            raise NotFoundError("CreditLedgerEntry", debit_entry_id)
        if not debit.is_debit or debit.status != LedgerEntryStatus.SUCCESS:
            raise ValidationError(f"Ledger entry {debit_entry_id} is not a refundable debit")
        if await self._ledger.find_refund_of(debit_entry_id) is not None:
            return None
        account = await self._accounts.credit(debit.user_id, debit.amount)
        if account is None:
            raise NotFoundError("UserAccount", debit.user_id)
        refund = debit.refund(balance_after=account.coins)
        try:
            await self._ledger.append(refund)
        except ValueError:
            # A concurrent refund won; undo our credit.
            await self._accounts.try_debit(debit.user_id, debit.amount)
            return None
        self._logger.info(
            "ledger_refund",
            entry_id=refund.id,
            refund_of=debit.id,
            user_id=debit.user_id,
            amount=debit.amount,
            reference=str(debit.reference),
            balance_after=account.coins,
        )
        return refund

    async def refund_all(self, reference: "TransactionRef") -> list[CreditLedgerEntry]:
        """Refund every not-yet-refunded debit tied to the transaction."""
        refunds: list[CreditLedgerEntry] = []
        for entry in await self._ledger.list_by_reference(reference):
            if not entry.is_debit or entry.status != LedgerEntryStatus.SUCCESS:
                continue
            refund = await self.refund(entry.id)
            if refund is not None:
                refunds.append(refund)
        return refunds

    async def entries_for(self, reference: "TransactionRef") -> list[CreditLedgerEntry]:
        return await self._ledger.list_by_reference(reference)

    async def history(self, user_id: str) -> list[CreditLedgerEntry]:
        return await self._ledger.list_by_user(user_id)
