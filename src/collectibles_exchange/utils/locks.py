# -*- coding: utf-8 -*-
"""Process-local keyed locks serializing units of work on items, users and proposals.

Each exchange action takes every key it will touch in one call to ``hold``.
Keys are acquired in sorted order, so two actions sharing keys cannot deadlock.
Locks are not reentrant: never call ``hold`` again while already holding a key.
Multi-process deployments need a shared lock (row locks, advisory locks) instead.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from uuid import UUID


def item_key(item_id: UUID) -> str:
    return f"item:{item_id}"


def user_key(user_id: str) -> str:
    return f"user:{user_id}"


def proposal_key(proposal_id: UUID) -> str:
    return f"proposal:{proposal_id}"


def buy_offer_key(offer_id: UUID) -> str:
    return f"buy_offer:{offer_id}"


class KeyedLock:
    """A lazily created asyncio.Lock per key, dropped once nobody holds or waits on it."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, keys: Iterable[str]) -> AsyncIterator[None]:
        """Acquire all keys (sorted, de-duplicated) for the duration of the block."""
        ordered = sorted(set(keys))
        registered: list[str] = []
        acquired: list[str] = []
        try:
            for key in ordered:
                lock = self._locks.setdefault(key, asyncio.Lock())
                self._users[key] = self._users.get(key, 0) + 1
                registered.append(key)
                await lock.acquire()
                acquired.append(key)
            yield
        finally:
            for key in reversed(acquired):
                self._locks[key].release()
            for key in registered:
                remaining = self._users[key] - 1
                if remaining:
                    self._users[key] = remaining
                else:
                    del self._users[key]
                    del self._locks[key]

    def is_locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()
