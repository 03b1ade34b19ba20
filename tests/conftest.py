# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from typing import Any, Optional

import pytest
from bubus import EventBus  # type: ignore[import-untyped]

from collectibles_exchange.config import Settings
from collectibles_exchange.models.item import Item
from collectibles_exchange.models.user_account import UserAccount
from collectibles_exchange.persistence.repositories.in_memory import (
    InMemoryBuyOfferRepository,
    InMemoryCartRepository,
    InMemoryCreditLedgerRepository,
    InMemoryItemRepository,
    InMemoryOfferAttemptRepository,
    InMemorySettlementRepository,
    InMemoryShipmentRepository,
    InMemoryTradeProposalRepository,
    InMemoryUserAccountRepository,
)
from collectibles_exchange.services.activity import ActivityPublisher
from collectibles_exchange.services.cart import CartService
from collectibles_exchange.services.conflict import ConflictResolver, TransactionReleaser
from collectibles_exchange.services.credit_ledger import CreditLedgerService
from collectibles_exchange.services.item_registry import ItemRegistry
from collectibles_exchange.services.negotiation import OfferNegotiationService
from collectibles_exchange.services.payment import (
    IPaymentGateway,
    PaymentGate,
    PaymentHandoffService,
    PaymentResultRouter,
)
from collectibles_exchange.services.purchase import PurchaseService
from collectibles_exchange.services.shipping import ShipmentService
from collectibles_exchange.services.trade_proposal import TradeProposalService
from collectibles_exchange.utils.locks import KeyedLock


class FakeEventBus:
    """Minimal event bus fake recording dispatched events."""

    def __init__(self) -> None:
        self.handlers: dict[str, list[Any]] = {}
        self.dispatched: list[Any] = []

    def on(self, event_type: type[Any], handler: Any) -> None:
        key = event_type.__name__
        self.handlers.setdefault(key, []).append(handler)

    def dispatch(self, event: Any) -> None:
        self.dispatched.append(event)

    def aliases(self) -> list[str]:
        return [e.alias for e in self.dispatched if hasattr(e, "alias")]


class FakePaymentGateway(IPaymentGateway):
    """Records handoffs; set fail=True to simulate the gateway being down."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.fail = False

    async def initiate_payment(
        self,
        payer_contact: Optional[str],
        amount: Decimal,
        callback_refs: dict[str, str],
    ) -> str:
        self.calls.append(
            {"payer_contact": payer_contact, "amount": amount, "callback_refs": callback_refs}
        )
        if self.fail:
            raise ConnectionError("gateway unavailable")
        return f"https://pay.test/checkout/{callback_refs['payment_ref']}"


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for deterministic assertions."""
    return datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def D() -> Callable[[Any], Decimal]:
    """Decimal helper: D('1.23') -> Decimal('1.23')."""
    return lambda value: Decimal(str(value))


@pytest.fixture
def settings() -> Settings:
    """Settings with default negotiation rules and no notification channels."""
    return Settings(
        console={"enabled": False},
        telegram={"enabled": False},
    )


@pytest.fixture
def item_factory(D: Callable[[Any], Decimal]) -> Callable[..., Item]:
    """Build Item with sensible defaults and easy overrides."""

    def _build(**overrides: Any) -> Item:
        return Item.create(
            owner_id=overrides.pop("owner_id", "seller"),
            title=overrides.pop("title", "1st Edition Charizard"),
            asking_price=overrides.pop("asking_price", D("100")),
            accept_above=overrides.pop("accept_above", D("50")),
            tradable=overrides.pop("tradable", True),
            purchasable=overrides.pop("purchasable", True),
            deal_zone_price=overrides.pop("deal_zone_price", None),
            id=overrides.pop("id", None),
            created_at=overrides.pop("created_at", None),
        )

    return _build


@pytest.fixture
def item_repo() -> InMemoryItemRepository:
    """Fresh in-memory item repository per test."""
    return InMemoryItemRepository()


@pytest.fixture
def account_repo() -> InMemoryUserAccountRepository:
    """Fresh in-memory account repository per test."""
    return InMemoryUserAccountRepository()


@pytest.fixture
def ledger_repo() -> InMemoryCreditLedgerRepository:
    """Fresh in-memory credit ledger repository per test."""
    return InMemoryCreditLedgerRepository()


@pytest.fixture
def fake_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def event_bus() -> EventBus:
    """Isolated event bus instance for tests."""
    return EventBus(
        name="CollectiblesExchangeTests",
        max_history_size=200,
        wal_path=None,
    )


@pytest.fixture
def exchange(
    settings: Settings,
    item_repo: InMemoryItemRepository,
    account_repo: InMemoryUserAccountRepository,
    ledger_repo: InMemoryCreditLedgerRepository,
    fake_bus: FakeEventBus,
) -> SimpleNamespace:
    """Every exchange service wired over fresh in-memory repositories.

    Helpers: ``await exchange.account(user_id, coins=...)`` and
    ``await exchange.listing(owner_id, ...)``.
    """
    ns = SimpleNamespace()
    ns.settings = settings
    ns.bus = fake_bus
    ns.locks = KeyedLock()
    ns.gateway = FakePaymentGateway()
    ns.item_repo = item_repo
    ns.account_repo = account_repo
    ns.ledger_repo = ledger_repo
    ns.attempt_repo = InMemoryOfferAttemptRepository()
    ns.cart_repo = InMemoryCartRepository()
    ns.buy_offer_repo = InMemoryBuyOfferRepository()
    ns.proposal_repo = InMemoryTradeProposalRepository()
    ns.shipment_repo = InMemoryShipmentRepository()
    ns.settlement_repo = InMemorySettlementRepository()

    ns.activity = ActivityPublisher(fake_bus)
    ns.items = ItemRegistry(item_repo)
    ns.ledger = CreditLedgerService(ledger_repo, account_repo)
    ns.gate = PaymentGate()
    ns.handoff = PaymentHandoffService(ns.gateway, account_repo, ns.gate, ns.activity)
    ns.releaser = TransactionReleaser(ns.items, ns.ledger, ns.proposal_repo, ns.buy_offer_repo)
    ns.conflicts = ConflictResolver(
        ns.releaser, ns.proposal_repo, ns.buy_offer_repo, ns.cart_repo, ns.activity
    )
    ns.offers = OfferNegotiationService(
        ns.items, ns.ledger, ns.attempt_repo, ns.cart_repo, settings, ns.locks, ns.activity
    )
    ns.carts = CartService(
        ns.cart_repo, ns.buy_offer_repo, ns.items, ns.releaser, ns.locks, ns.activity
    )
    ns.purchases = PurchaseService(
        ns.buy_offer_repo, ns.items, ns.releaser, ns.conflicts, ns.handoff, ns.locks, ns.activity
    )
    ns.trades = TradeProposalService(
        ns.proposal_repo,
        ns.items,
        ns.ledger,
        ns.releaser,
        ns.conflicts,
        ns.handoff,
        ns.settlement_repo,
        ns.shipment_repo,
        settings,
        ns.locks,
        ns.activity,
    )
    ns.shipments = ShipmentService(
        ns.shipment_repo, ns.proposal_repo, ns.locks, ns.gate, ns.activity
    )
    ns.router = PaymentResultRouter(ns.proposal_repo, ns.buy_offer_repo, ns.trades, ns.purchases)

    async def _account(
        user_id: str,
        coins: int = 5,
        *,
        payout_contact: Optional[str] = None,
    ) -> UserAccount:
        account = UserAccount(
            id=user_id,
            coins=coins,
            contact=f"{user_id}@example.com",
            payout_contact=payout_contact or f"payout-{user_id}",
        )
        await account_repo.save(account)
        return account

    async def _listing(owner_id: str = "seller", **kwargs: Any) -> Item:
        price = Decimal(str(kwargs.pop("asking_price", "100")))
        accept_above = kwargs.pop("accept_above", "50")
        return await ns.items.list_item(
            owner_id,
            kwargs.pop("title", "Vintage card"),
            price,
            Decimal(str(accept_above)) if accept_above is not None else None,
            **kwargs,
        )

    ns.account = _account
    ns.listing = _listing
    return ns
