# -*- coding: utf-8 -*-
"""TradeProposal: a barter between two users, optionally with a one-way cash term.

Terms are always stored from the sender's side: the sender gives send_items and
receives receive_items; add_cash is paid by the sender, ask_cash by the receiver.
Rows are never deleted.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from collectibles_exchange.models.payment import PaymentInfo
from collectibles_exchange.models.transaction_ref import TransactionRef


class TradeStatus(str, Enum):
    """Top-level proposal state. Allowed moves live in the trade state machine."""

    NEW = "new"
    COUNTER_OFFER = "counter_offer"
    ACCEPTED = "accepted"
    COUNTER_ACCEPTED = "counter_accepted"
    COMPLETE = "complete"
    DECLINED = "declined"
    CANCEL = "cancel"
    COUNTER_DECLINED = "counter_declined"


class TradeStatusAlias(str, Enum):
    """Fine-grained status shown to users and used as the notification event."""

    TRADE_SENT = "trade-sent"
    TRADE_OFFER_UPDATED = "trade-offer-updated"
    TRADE_CANCELLED = "trade-cancelled"
    TRADE_DECLINED = "trade-declined"
    TRADE_ACCEPTED = "trade-accepted"
    TRADE_ACCEPTED_SENDER_PAY = "trade-offer-accepted-sender-pay"
    TRADE_ACCEPTED_RECEIVER_PAY = "trade-offer-accepted-receiver-pay"
    COUNTER_TRADE_OFFER = "counter-trade-offer"
    COUNTER_OFFER_ACCEPTED = "counter-offer-accepted"
    COUNTER_ACCEPTED_SENDER_PAY = "counter-offer-accepted-sender-pay"
    COUNTER_ACCEPTED_RECEIVER_PAY = "counter-offer-accepted-receiver-pay"
    COUNTER_OFFER_DECLINED = "counter-offer-declined"
    PAYMENT_INITIATED = "payment-initiated"
    PAYMENT_MADE = "payment-made"
    PAYMENT_DECLINED = "payment-declined"
    SHIPPED_BY_SENDER = "shipped-by-sender"
    SHIPPED_BY_RECEIVER = "shipped-by-receiver"
    BOTH_TRADERS_SHIPPED = "both-traders-shipped"
    MARKED_COMPLETED_BY_SENDER = "marked-trade-completed-by-sender"
    MARKED_COMPLETED_BY_RECEIVER = "marked-trade-completed-by-receiver"
    BOTH_MARKED_COMPLETED = "both-marked-trade-completed"


class TradeParty(str, Enum):
    SENDER = "sender"
    RECEIVER = "receiver"


@dataclass(frozen=True, slots=True)
class TradeProposal:
    """One barter negotiation.

    last_moved_by is the user whose terms are currently on the table; the other
    party is the one who may accept or decline them.
    """

    id: UUID
    code: str
    sender_id: str
    receiver_id: str
    send_items: frozenset[UUID]
    receive_items: frozenset[UUID]
    status: TradeStatus
    status_alias: TradeStatusAlias
    last_moved_by: str
    payment: PaymentInfo
    created_at: datetime
    updated_at: datetime
    add_cash: Optional[Decimal] = None
    ask_cash: Optional[Decimal] = None
    message: Optional[str] = None
    sender_confirmed: bool = False
    receiver_confirmed: bool = False
    counter_count: int = 0
    accepted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    """When the proposal reached a negative terminal state."""

    @property
    def ref(self) -> TransactionRef:
        return TransactionRef.trade(self.id)

    @property
    def item_ids(self) -> frozenset[UUID]:
        return self.send_items | self.receive_items

    @property
    def cash_amount(self) -> Optional[Decimal]:
        return self.add_cash if self.add_cash is not None else self.ask_cash

    @property
    def cash_payer_id(self) -> Optional[str]:
        """Party who owes the cash term: sender for add_cash, receiver for ask_cash."""
        if self.add_cash is not None:
            return self.sender_id
        if self.ask_cash is not None:
            return self.receiver_id
        return None

    @property
    def awaiting_party_id(self) -> str:
        """Party expected to respond to the terms on the table."""
        return self.receiver_id if self.last_moved_by == self.sender_id else self.sender_id

    @property
    def both_confirmed(self) -> bool:
        return self.sender_confirmed and self.receiver_confirmed

    def is_party(self, user_id: str) -> bool:
        return user_id in (self.sender_id, self.receiver_id)

    def party_of(self, user_id: str) -> TradeParty:
        if user_id == self.sender_id:
            return TradeParty.SENDER
        if user_id == self.receiver_id:
            return TradeParty.RECEIVER
        raise ValueError(f"{user_id} is not a party of proposal {self.id}")

    def counterparty_of(self, user_id: str) -> str:
        return self.receiver_id if user_id == self.sender_id else self.sender_id

    def owner_of_item(self, item_id: UUID) -> str:
        """Who owned the item when the terms were set (sender for send_items)."""
        return self.sender_id if item_id in self.send_items else self.receiver_id

    def with_status(
        self,
        status: TradeStatus,
        alias: TradeStatusAlias,
        *,
        at: Optional[datetime] = None,
    ) -> TradeProposal:
        now = at or datetime.now(UTC)
        return replace(self, status=status, status_alias=alias, updated_at=now)

    def with_terms(
        self,
        *,
        send_items: frozenset[UUID],
        receive_items: frozenset[UUID],
        add_cash: Optional[Decimal],
        ask_cash: Optional[Decimal],
        moved_by: str,
        message: Optional[str] = None,
        countered: bool = True,
    ) -> TradeProposal:
        """Return a copy carrying a new position (same row, new terms).

        countered=False is a revision by the party whose terms were already on
        the table; it does not count as a counter offer.
        """
        return replace(
            self,
            send_items=send_items,
            receive_items=receive_items,
            add_cash=add_cash,
            ask_cash=ask_cash,
            last_moved_by=moved_by,
            message=message if message is not None else self.message,
            counter_count=self.counter_count + 1 if countered else self.counter_count,
            updated_at=datetime.now(UTC),
        )

    def with_accepted(
        self,
        status: TradeStatus,
        alias: TradeStatusAlias,
        payment: PaymentInfo,
        *,
        at: Optional[datetime] = None,
    ) -> TradeProposal:
        now = at or datetime.now(UTC)
        return replace(
            self,
            status=status,
            status_alias=alias,
            payment=payment,
            accepted_at=now,
            updated_at=now,
        )

    def with_payment(self, payment: PaymentInfo, alias: Optional[TradeStatusAlias] = None) -> TradeProposal:
        return replace(
            self,
            payment=payment,
            status_alias=alias or self.status_alias,
            updated_at=datetime.now(UTC),
        )

    def with_confirmation(self, party: TradeParty) -> TradeProposal:
        if party == TradeParty.SENDER:
            return replace(self, sender_confirmed=True, updated_at=datetime.now(UTC))
        return replace(self, receiver_confirmed=True, updated_at=datetime.now(UTC))

    def with_alias(self, alias: TradeStatusAlias) -> TradeProposal:
        return replace(self, status_alias=alias, updated_at=datetime.now(UTC))

    def with_completed(self, at: Optional[datetime] = None) -> TradeProposal:
        now = at or datetime.now(UTC)
        return replace(
            self,
            status=TradeStatus.COMPLETE,
            status_alias=TradeStatusAlias.BOTH_MARKED_COMPLETED,
            completed_at=now,
            updated_at=now,
        )

    def with_closed(
        self,
        status: TradeStatus,
        alias: TradeStatusAlias,
        at: Optional[datetime] = None,
    ) -> TradeProposal:
        now = at or datetime.now(UTC)
        return replace(self, status=status, status_alias=alias, closed_at=now, updated_at=now)

    @classmethod
    def create(
        cls,
        code: str,
        sender_id: str,
        receiver_id: str,
        send_items: frozenset[UUID],
        receive_items: frozenset[UUID],
        *,
        add_cash: Optional[Decimal] = None,
        ask_cash: Optional[Decimal] = None,
        message: Optional[str] = None,
        id: Optional[UUID] = None,
    ) -> TradeProposal:
        """Create a NEW proposal with the sender's terms on the table."""
        now = datetime.now(UTC)
        return cls(
            id=id or uuid4(),
            code=code,
            sender_id=sender_id,
            receiver_id=receiver_id,
            send_items=send_items,
            receive_items=receive_items,
            status=TradeStatus.NEW,
            status_alias=TradeStatusAlias.TRADE_SENT,
            last_moved_by=sender_id,
            payment=PaymentInfo.not_required(),
            created_at=now,
            updated_at=now,
            add_cash=add_cash,
            ask_cash=ask_cash,
            message=message,
        )
