# -*- coding: utf-8 -*-
"""Utility modules."""

from collectibles_exchange.utils.codes import (
    BUY_OFFER_CODE_PREFIX,
    TRADE_CODE_PREFIX,
    transaction_code,
)
from collectibles_exchange.utils.locks import (
    KeyedLock,
    buy_offer_key,
    item_key,
    proposal_key,
    user_key,
)

__all__ = [
    "BUY_OFFER_CODE_PREFIX",
    "TRADE_CODE_PREFIX",
    "KeyedLock",
    "buy_offer_key",
    "item_key",
    "proposal_key",
    "transaction_code",
    "user_key",
]
