# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from collectibles_exchange.config import Settings, get_settings
from collectibles_exchange.events.bus import get_event_bus
from collectibles_exchange.notifications.notification_manager import NotificationService
from collectibles_exchange.notifications.strategies.base import BaseNotificationStrategy
from collectibles_exchange.notifications.strategies.console import ConsoleNotifier
from collectibles_exchange.notifications.strategies.telegram import TelegramNotifier
from collectibles_exchange.notifications.stylers.notification_styler import ExchangeNotificationStyler
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
from collectibles_exchange.services.notifications import ExchangeActivityNotifier
from collectibles_exchange.services.payment import (
    HostedCheckoutGateway,
    PaymentGate,
    PaymentHandoffService,
    PaymentResultRouter,
)
from collectibles_exchange.services.purchase import PurchaseService
from collectibles_exchange.services.shipping import ShipmentService
from collectibles_exchange.services.trade_proposal import TradeProposalService, TradeStateMachine
from collectibles_exchange.utils.locks import KeyedLock


def _build_notification_notifiers(
    settings: Settings,
    styler: ExchangeNotificationStyler,
) -> list[BaseNotificationStrategy]:
    notifiers: list[BaseNotificationStrategy] = []
    if settings.console.enabled:
        notifiers.append(ConsoleNotifier(settings=settings, styler=styler))
    if settings.telegram.enabled:
        notifiers.append(TelegramNotifier(settings=settings, styler=styler))
    return notifiers


def _notification_queue_size(settings: Settings) -> int:
    return settings.notifications.queue_size


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, repositories, exchange services and notifications."""

    config = providers.Callable(get_settings)

    event_bus = providers.Callable(get_event_bus)

    locks = providers.Singleton(KeyedLock)

    # Repositories (in-memory implementations of the persistence interfaces)

    item_repository = providers.Singleton(InMemoryItemRepository)

    offer_attempt_repository = providers.Singleton(InMemoryOfferAttemptRepository)

    cart_repository = providers.Singleton(InMemoryCartRepository)

    buy_offer_repository = providers.Singleton(InMemoryBuyOfferRepository)

    trade_proposal_repository = providers.Singleton(InMemoryTradeProposalRepository)

    credit_ledger_repository = providers.Singleton(InMemoryCreditLedgerRepository)

    user_account_repository = providers.Singleton(InMemoryUserAccountRepository)

    shipment_repository = providers.Singleton(InMemoryShipmentRepository)

    settlement_repository = providers.Singleton(InMemorySettlementRepository)

    # Core services

    activity_publisher = providers.Singleton(
        ActivityPublisher,
        event_bus=event_bus,
    )

    item_registry = providers.Singleton(
        ItemRegistry,
        item_repository=item_repository,
    )

    credit_ledger_service = providers.Singleton(
        CreditLedgerService,
        ledger_repository=credit_ledger_repository,
        account_repository=user_account_repository,
    )

    payment_gate = providers.Singleton(PaymentGate)

    payment_gateway = providers.Singleton(
        HostedCheckoutGateway,
        settings=config,
    )

    payment_handoff_service = providers.Singleton(
        PaymentHandoffService,
        gateway=payment_gateway,
        account_repository=user_account_repository,
        gate=payment_gate,
        activity=activity_publisher,
    )

    transaction_releaser = providers.Singleton(
        TransactionReleaser,
        item_registry=item_registry,
        credit_ledger=credit_ledger_service,
        trade_proposal_repository=trade_proposal_repository,
        buy_offer_repository=buy_offer_repository,
    )

    conflict_resolver = providers.Singleton(
        ConflictResolver,
        releaser=transaction_releaser,
        trade_proposal_repository=trade_proposal_repository,
        buy_offer_repository=buy_offer_repository,
        cart_repository=cart_repository,
        activity=activity_publisher,
    )

    # Exchange operations

    offer_negotiation_service = providers.Singleton(
        OfferNegotiationService,
        item_registry=item_registry,
        credit_ledger=credit_ledger_service,
        offer_attempt_repository=offer_attempt_repository,
        cart_repository=cart_repository,
        settings=config,
        locks=locks,
        activity=activity_publisher,
    )

    cart_service = providers.Singleton(
        CartService,
        cart_repository=cart_repository,
        buy_offer_repository=buy_offer_repository,
        item_registry=item_registry,
        releaser=transaction_releaser,
        locks=locks,
        activity=activity_publisher,
    )

    purchase_service = providers.Singleton(
        PurchaseService,
        buy_offer_repository=buy_offer_repository,
        item_registry=item_registry,
        releaser=transaction_releaser,
        conflict_resolver=conflict_resolver,
        payment_handoff=payment_handoff_service,
        locks=locks,
        activity=activity_publisher,
    )

    trade_state_machine = providers.Singleton(TradeStateMachine)

    trade_proposal_service = providers.Singleton(
        TradeProposalService,
        trade_proposal_repository=trade_proposal_repository,
        item_registry=item_registry,
        credit_ledger=credit_ledger_service,
        releaser=transaction_releaser,
        conflict_resolver=conflict_resolver,
        payment_handoff=payment_handoff_service,
        settlement_repository=settlement_repository,
        shipment_repository=shipment_repository,
        settings=config,
        locks=locks,
        activity=activity_publisher,
        state_machine=trade_state_machine,
    )

    shipment_service = providers.Singleton(
        ShipmentService,
        shipment_repository=shipment_repository,
        trade_proposal_repository=trade_proposal_repository,
        locks=locks,
        gate=payment_gate,
        activity=activity_publisher,
    )

    payment_result_router = providers.Singleton(
        PaymentResultRouter,
        trade_proposal_repository=trade_proposal_repository,
        buy_offer_repository=buy_offer_repository,
        trade_proposal_service=trade_proposal_service,
        purchase_service=purchase_service,
    )

    # Notifications

    notification_styler = providers.Singleton(ExchangeNotificationStyler)

    notification_service = providers.Singleton(
        NotificationService,
        notifiers=providers.Callable(_build_notification_notifiers, config, notification_styler),
        queue_size=providers.Callable(_notification_queue_size, config),
    )

    exchange_activity_notifier = providers.Singleton(
        ExchangeActivityNotifier,
        notification_service=notification_service,
        event_bus=event_bus,
    )
