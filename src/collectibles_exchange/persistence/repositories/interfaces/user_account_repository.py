# -*- coding: utf-8 -*-
"""Abstract interface for user accounts and coin balances."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from collectibles_exchange.models.user_account import UserAccount


class IUserAccountRepository(ABC):
    """Interface for UserAccount rows with atomic balance updates."""

    @abstractmethod
    async def get(self, user_id: str) -> Optional[UserAccount]:
        ...

    @abstractmethod
    async def save(self, account: UserAccount) -> None:
        ...

    @abstractmethod
    async def try_debit(self, user_id: str, amount: int) -> Optional[UserAccount]:
        """Atomically subtract amount iff the balance covers it.

        Returns the updated account, or None when missing or short of coins.
        """
        ...

    @abstractmethod
    async def credit(self, user_id: str, amount: int) -> Optional[UserAccount]:
        """Atomically add amount. Returns None when the account is missing."""
        ...
