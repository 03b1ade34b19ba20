# -*- coding: utf-8 -*-
"""UserAccount: coin balance and payout details of one exchange user."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class UserAccount:
    id: str
    coins: int = 0
    """Platform credit balance; never negative."""
    contact: Optional[str] = None
    """Where the user is reached when paying (e.g. e-mail)."""
    payout_contact: Optional[str] = None
    """Account that receives cash owed to this user; required to be paid."""

    def with_coins(self, coins: int) -> UserAccount:
        if coins < 0:
            raise ValueError("coin balance cannot go negative")
        return UserAccount(
            id=self.id,
            coins=coins,
            contact=self.contact,
            payout_contact=self.payout_contact,
        )
