"""In-memory user account repository (keyed by user id)."""

from __future__ import annotations

from collectibles_exchange.models.user_account import UserAccount
from collectibles_exchange.persistence.repositories.interfaces.user_account_repository import (
    IUserAccountRepository,
)


class InMemoryUserAccountRepository(IUserAccountRepository):
    """In-memory implementation of IUserAccountRepository."""

    def __init__(self) -> None:
        self._store: dict[str, UserAccount] = {}

    async def get(self, user_id: str) -> UserAccount | None:
        return self._store.get(user_id)

    async def save(self, account: UserAccount) -> None:
        self._store[account.id] = account

    async def try_debit(self, user_id: str, amount: int) -> UserAccount | None:
        account = self._store.get(user_id)
        if account is None or account.coins < amount:
            return None
        updated = account.with_coins(account.coins - amount)
        self._store[user_id] = updated
        return updated

    async def credit(self, user_id: str, amount: int) -> UserAccount | None:
        account = self._store.get(user_id)
        if account is None:
            return None
        updated = account.with_coins(account.coins + amount)
        self._store[user_id] = updated
        return updated
