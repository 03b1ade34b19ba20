# -*- coding: utf-8 -*-
"""Unit tests for Settings loading and validation."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from collectibles_exchange.config import Settings


def test_defaults_match_exchange_rules() -> None:
    settings = Settings()

    assert settings.negotiation.max_offer_attempts == 3
    assert settings.negotiation.cart_hold_minutes == 10
    assert settings.negotiation.trade_fee_coins == 1
    assert settings.payment.min_cash_amount == Decimal("0.01")


def test_nested_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NEGOTIATION__MAX_OFFER_ATTEMPTS", "5")
    monkeypatch.setenv("PAYMENT__CURRENCY", "EUR")

    settings = Settings.from_env()

    assert settings.negotiation.max_offer_attempts == 5
    assert settings.payment.currency == "EUR"


def test_out_of_range_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(negotiation={"max_offer_attempts": 0})
    with pytest.raises(ValidationError):
        Settings(payment={"currency": "EURO"})
