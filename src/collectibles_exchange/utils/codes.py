"""Human-readable transaction codes."""

from __future__ import annotations

import secrets
from datetime import UTC, datetime
from typing import Optional

BUY_OFFER_CODE_PREFIX = "ESW"
TRADE_CODE_PREFIX = "TRD"


def transaction_code(prefix: str, *, now: Optional[datetime] = None) -> str:
    """Return <prefix>-YYYYMMDD<4 random digits>HHMMSS, e.g. ESW-202602130042120000."""
    at = now or datetime.now(UTC)
    return f"{prefix}-{at:%Y%m%d}{secrets.randbelow(10_000):04d}{at:%H%M%S}"
