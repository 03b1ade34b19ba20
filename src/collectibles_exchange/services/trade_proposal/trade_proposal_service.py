# -*- coding: utf-8 -*-
"""TradeProposalService: barter proposals from first offer to settlement.

Every public method is one unit of work under the keyed lock (proposal, its
items and both parties). All checks run before the first write; a rejected
action leaves no partial state. Notifications go out after the lock is released.
"""

from __future__ import annotations

import structlog
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional
from uuid import UUID

from collectibles_exchange.events.exchange.activity_events import ActivityKind
from collectibles_exchange.exceptions import (
    ConflictError,
    NotFoundError,
    PaymentRequiredError,
    ValidationError,
)
from collectibles_exchange.models.credit_ledger import DeductionFrom
from collectibles_exchange.models.item import ItemCapability
from collectibles_exchange.models.payment import PaymentInfo, PaymentResultStatus
from collectibles_exchange.models.settlement import OwnershipTransfer, SettlementRecord
from collectibles_exchange.models.trade_proposal import (
    TradeParty,
    TradeProposal,
    TradeStatus,
    TradeStatusAlias,
)
from collectibles_exchange.models.transaction_ref import TransactionRef
from collectibles_exchange.services.payment.payment_gate import PaymentOutcome
from collectibles_exchange.services.trade_proposal.state_machine import (
    ACCEPTED_STATUSES,
    NEGOTIATING_STATUSES,
    TradeStateMachine,
    is_terminal,
)
from collectibles_exchange.utils.codes import TRADE_CODE_PREFIX, transaction_code
from collectibles_exchange.utils.locks import KeyedLock, item_key, proposal_key, user_key

if TYPE_CHECKING:
    from collectibles_exchange.config import Settings
    from collectibles_exchange.persistence.repositories.interfaces.settlement_repository import (
        ISettlementRepository,
    )
    from collectibles_exchange.persistence.repositories.interfaces.shipment_repository import (
        IShipmentRepository,
    )
    from collectibles_exchange.persistence.repositories.interfaces.trade_proposal_repository import (
        ITradeProposalRepository,
    )
    from collectibles_exchange.services.activity import ActivityPublisher
    from collectibles_exchange.services.conflict import ConflictResolver, TransactionReleaser
    from collectibles_exchange.services.credit_ledger import CreditLedgerService
    from collectibles_exchange.services.item_registry import ItemRegistry
    from collectibles_exchange.services.payment.payment_handoff import PaymentHandoffService


@dataclass(frozen=True)
class CancelResult:
    """Outcome of cancel_trade. already_final is True when nothing had to change."""

    proposal: TradeProposal
    already_final: bool
    active_count: int
    """Proposals still pending for the caller after this call."""

    @property
    def status(self) -> TradeStatus:
        return self.proposal.status


class TradeProposalService:
    """Propose, counter, accept, decline, cancel, pay for and settle trades."""

    def __init__(
        self,
        trade_proposal_repository: "ITradeProposalRepository",
        item_registry: "ItemRegistry",
        credit_ledger: "CreditLedgerService",
        releaser: "TransactionReleaser",
        conflict_resolver: "ConflictResolver",
        payment_handoff: "PaymentHandoffService",
        settlement_repository: "ISettlementRepository",
        shipment_repository: "IShipmentRepository",
        settings: "Settings",
        locks: KeyedLock,
        activity: Optional["ActivityPublisher"] = None,
        state_machine: Optional[TradeStateMachine] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the trade proposal service.

        Args:
            trade_proposal_repository: Proposal rows (never deleted).
            item_registry: Proposal locks, reservations and ownership transfer.
            credit_ledger: Trade fees and their refunds.
            releaser: Unwinds proposals on decline or cancel.
            conflict_resolver: Cancels overlapping transactions on commit.
            payment_handoff: Gate rules and gateway call for cash terms.
            settlement_repository: One SettlementRecord per completed proposal.
            shipment_repository: Blocks cancellation once something shipped.
            settings: Application settings (negotiation and payment sections).
            locks: Shared keyed lock serializing units of work.
            activity: Optional; notifies the other party after each change.
            state_machine: Optional; defaults to TradeStateMachine().
            get_logger: Logger factory.
            logger_name: Optional logger name.
        """
        self._proposals = trade_proposal_repository
        self._items = item_registry
        self._ledger = credit_ledger
        self._releaser = releaser
        self._conflicts = conflict_resolver
        self._handoff = payment_handoff
        self._settlements = settlement_repository
        self._shipments = shipment_repository
        self._settings = settings
        self._locks = locks
        self._activity = activity
        self._machine = state_machine or TradeStateMachine()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def get(self, proposal_id: UUID) -> TradeProposal:
        proposal = await self._proposals.get(proposal_id)
        if proposal is None:
            raise NotFoundError("TradeProposal", proposal_id)
        return proposal

    async def active_count(self, user_id: str) -> int:
        return sum(
            1 for p in await self._proposals.list_by_user(user_id) if not is_terminal(p.status)
        )

    # Negotiation

    async def propose_trade(
        self,
        sender_id: str,
        receiver_id: str,
        send_item_ids: Iterable[UUID],
        receive_item_ids: Iterable[UUID],
        add_cash: Optional[Decimal] = None,
        ask_cash: Optional[Decimal] = None,
        message: Optional[str] = None,
    ) -> TradeProposal:
        """Open a NEW proposal: sender gives send_item_ids for receive_item_ids.

        Raises:
            ValidationError: Self-trade, no items, bad cash terms, wrong owner or
                an item that is not tradable.
            ConflictError: An item is reserved by another transaction.
        """
        if sender_id == receiver_id:
            raise ValidationError("You cannot trade with yourself")
        send = frozenset(send_item_ids)
        receive = frozenset(receive_item_ids)
        add_cash, ask_cash = self._cash_terms(add_cash, ask_cash)
        keys = [
            user_key(sender_id),
            user_key(receiver_id),
            *(item_key(i) for i in send | receive),
        ]
        async with self._locks.hold(keys):
            await self._check_items(sender_id, receiver_id, send, receive)
            proposal = TradeProposal.create(
                transaction_code(TRADE_CODE_PREFIX),
                sender_id,
                receiver_id,
                send,
                receive,
                add_cash=add_cash,
                ask_cash=ask_cash,
                message=message,
            )
            await self._proposals.save(proposal)
            for item_id in sorted(proposal.item_ids):
                await self._items.lock_for_proposal(item_id, proposal.id)
        self._logger.info(
            "trade_proposed",
            proposal_id=proposal.id,
            code=proposal.code,
            sender_id=sender_id,
            receiver_id=receiver_id,
            send_items=len(send),
            receive_items=len(receive),
            cash=proposal.cash_amount,
        )
        self._notify(proposal, TradeStatusAlias.TRADE_SENT, sender_id, receiver_id)
        return proposal

    async def counter_trade(
        self,
        proposal_id: UUID,
        actor_id: str,
        offered_item_ids: Iterable[UUID],
        requested_item_ids: Iterable[UUID],
        add_cash: Optional[Decimal] = None,
        ask_cash: Optional[Decimal] = None,
        message: Optional[str] = None,
    ) -> TradeProposal:
        """Replace the terms on the table with the actor's position.

        Terms are given from the actor's side: offered items are what the actor
        gives, add_cash is what the actor pays, ask_cash what the actor asks for.
        The awaiting party's move is a counter offer; the other party revising
        their own terms keeps the status and is reported as trade-offer-updated.
        """
        offered = frozenset(offered_item_ids)
        requested = frozenset(requested_item_ids)
        add_cash, ask_cash = self._cash_terms(add_cash, ask_cash)
        async with self._unit(proposal_id, offered | requested) as proposal:
            self._require_party(proposal, actor_id)
            if proposal.status not in NEGOTIATING_STATUSES:
                raise ConflictError(
                    f"Proposal {proposal.code} can no longer be countered ({proposal.status.value})"
                )
            revising = actor_id == proposal.last_moved_by
            if revising:
                status, alias = proposal.status, TradeStatusAlias.TRADE_OFFER_UPDATED
            else:
                self._machine.ensure(proposal.status, TradeStatus.COUNTER_OFFER)
                status, alias = TradeStatus.COUNTER_OFFER, TradeStatusAlias.COUNTER_TRADE_OFFER
            if actor_id == proposal.sender_id:
                send, receive = offered, requested
                sender_cash, receiver_cash = add_cash, ask_cash
            else:
                send, receive = requested, offered
                sender_cash, receiver_cash = ask_cash, add_cash
            await self._check_items(
                proposal.sender_id, proposal.receiver_id, send, receive, proposal_id=proposal.id
            )
            for item_id in sorted(proposal.item_ids - (send | receive)):
                await self._items.unlock_for_proposal(item_id, proposal.id)
            for item_id in sorted(send | receive):
                await self._items.lock_for_proposal(item_id, proposal.id)
            proposal = proposal.with_terms(
                send_items=send,
                receive_items=receive,
                add_cash=sender_cash,
                ask_cash=receiver_cash,
                moved_by=actor_id,
                message=message,
                countered=not revising,
            ).with_status(status, alias)
            await self._proposals.save(proposal)
        self._logger.info(
            "trade_countered",
            proposal_id=proposal.id,
            actor_id=actor_id,
            alias=alias,
            counter_count=proposal.counter_count,
            cash=proposal.cash_amount,
        )
        self._notify(proposal, alias, actor_id, proposal.counterparty_of(actor_id))
        return proposal

    async def accept_trade(self, proposal_id: UUID, actor_id: str) -> TradeProposal:
        """Accept the terms on the table; only the party who did not set them may.

        Reserves every item, charges both parties the trade fee and either waits
        for the cash payment or, without a cash term, commits immediately.

        Raises:
            InsufficientBalance: buy_coins for the actor, contact_trader for the other party.
            ConflictError: An item is reserved elsewhere or the proposal moved on.
        """
        async with self._unit(proposal_id) as proposal:
            self._require_party(proposal, actor_id)
            if actor_id != proposal.awaiting_party_id:
                raise ValidationError("You cannot accept your own terms")
            target = self._machine.accept_target(proposal.status)
            await self._check_items(
                proposal.sender_id,
                proposal.receiver_id,
                proposal.send_items,
                proposal.receive_items,
                proposal_id=proposal.id,
            )
            other_id = proposal.counterparty_of(actor_id)
            fee = self._settings.negotiation.trade_fee_coins
            if fee > 0:
                await self._ledger.ensure_balance(
                    actor_id, fee, action="buy_coins", message="You need coins to accept this trade"
                )
                await self._ledger.ensure_balance(
                    other_id,
                    fee,
                    action="contact_trader",
                    message="The other trader does not have enough coins, contact the trader",
                )
            await self._items.reserve_all(proposal.item_ids, proposal.ref, ItemCapability.TRADE)
            try:
                if fee > 0:
                    await self._ledger.debit(
                        proposal.receiver_id,
                        fee,
                        proposal.ref,
                        DeductionFrom.RECEIVER,
                        counterparty_id=proposal.sender_id,
                        insufficient_action="buy_coins" if actor_id == proposal.receiver_id else "contact_trader",
                    )
                    await self._ledger.debit(
                        proposal.sender_id,
                        fee,
                        proposal.ref,
                        DeductionFrom.SENDER,
                        counterparty_id=proposal.receiver_id,
                        insufficient_action="buy_coins" if actor_id == proposal.sender_id else "contact_trader",
                    )
            except Exception:
                await self._ledger.refund_all(proposal.ref)
                for item_id in proposal.item_ids:
                    await self._items.release(item_id, proposal.ref)
                raise

            payer_id = proposal.cash_payer_id
            if payer_id is None:
                payment = PaymentInfo.not_required()
                payer: Optional[TradeParty] = None
            else:
                payment = PaymentInfo.unpaid(
                    proposal.cash_amount, payer_id=payer_id, payee_id=proposal.counterparty_of(payer_id)
                )
                payer = proposal.party_of(payer_id)
            alias = self._machine.acceptance_alias(target, payer)
            proposal = proposal.with_accepted(target, alias, payment)
            await self._proposals.save(proposal)
            cancelled = 0
            if payer_id is None:
                cancelled = (await self._conflicts.sweep(proposal.item_ids, proposal.ref)).total
        self._logger.info(
            "trade_accepted",
            proposal_id=proposal.id,
            actor_id=actor_id,
            status=proposal.status,
            alias=proposal.status_alias,
            payment_state=proposal.payment.state,
            cancelled_conflicts=cancelled,
        )
        self._notify(proposal, alias, actor_id, proposal.counterparty_of(actor_id))
        return proposal

    async def decline_trade(self, proposal_id: UUID, actor_id: str) -> TradeProposal:
        """Decline the terms on the table, or back out of an accepted trade.

        While negotiating only the awaiting party declines. After acceptance
        either party may, under the same guards as cancellation.
        """
        async with self._unit(proposal_id) as proposal:
            self._require_party(proposal, actor_id)
            if proposal.status in NEGOTIATING_STATUSES and actor_id != proposal.awaiting_party_id:
                raise ValidationError("Only the party awaiting a response can decline; cancel instead")
            target = self._machine.decline_target(proposal.status)
            if proposal.status in ACCEPTED_STATUSES:
                await self._ensure_cancellable(proposal)
            alias = self._machine.decline_alias(target)
            released = await self._releaser.release_trade(proposal, target, alias)
        self._logger.info(
            "trade_declined",
            proposal_id=proposal.id,
            actor_id=actor_id,
            status=target,
            refunds=len(released.refunds),
        )
        self._notify(released.proposal, alias, actor_id, proposal.counterparty_of(actor_id))
        return released.proposal

    async def cancel_trade(self, proposal_id: UUID, actor_id: str) -> CancelResult:
        """Withdraw from the proposal. Cancelling a finished proposal reports its final state."""
        async with self._unit(proposal_id) as proposal:
            self._require_party(proposal, actor_id)
            if is_terminal(proposal.status):
                return CancelResult(
                    proposal=proposal,
                    already_final=True,
                    active_count=await self.active_count(actor_id),
                )
            self._machine.ensure(proposal.status, TradeStatus.CANCEL)
            await self._ensure_cancellable(proposal)
            released = await self._releaser.release_trade(
                proposal, TradeStatus.CANCEL, TradeStatusAlias.TRADE_CANCELLED
            )
            active = await self.active_count(actor_id)
        self._logger.info(
            "trade_cancelled",
            proposal_id=proposal.id,
            actor_id=actor_id,
            refunds=len(released.refunds),
        )
        self._notify(
            released.proposal,
            TradeStatusAlias.TRADE_CANCELLED,
            actor_id,
            proposal.counterparty_of(actor_id),
        )
        return CancelResult(proposal=released.proposal, already_final=False, active_count=active)

    # Payment

    async def initiate_payment(self, proposal_id: UUID, actor_id: str) -> TradeProposal:
        """Start (or resume) the cash payment owed under an accepted proposal."""
        async with self._locks.hold([proposal_key(proposal_id)]):
            proposal = await self.get(proposal_id)
            self._require_party(proposal, actor_id)
            if proposal.status not in ACCEPTED_STATUSES:
                raise ConflictError(f"Proposal {proposal.code} is {proposal.status.value}")
            handoff = await self._handoff.prepare(
                proposal.payment, actor_id, transaction_id=proposal.id, kind="payment"
            )
            proposal = proposal.with_payment(handoff.payment, TradeStatusAlias.PAYMENT_INITIATED)
            await self._proposals.save(proposal)

        payment = await self._handoff.redirect(proposal.payment, transaction_id=proposal.id, kind="payment")
        if payment is not proposal.payment:
            async with self._locks.hold([proposal_key(proposal_id)]):
                current = await self.get(proposal_id)
                if (
                    current.payment.payment_ref != payment.payment_ref
                    or current.payment.state != payment.state
                ):
                    return current
                proposal = current.with_payment(payment)
                await self._proposals.save(proposal)
        if handoff.started:
            self._notify(
                proposal,
                TradeStatusAlias.PAYMENT_INITIATED,
                actor_id,
                proposal.counterparty_of(actor_id),
                kind="payment",
            )
        return proposal

    async def confirm_payment(
        self,
        payment_ref: str,
        status: PaymentResultStatus,
        payer_id: Optional[str],
        amount: Decimal,
    ) -> TradeProposal:
        """Apply the gateway result. The first approval commits the items."""
        snapshot = await self._proposals.get_by_payment_ref(payment_ref)
        if snapshot is None:
            raise NotFoundError("TradeProposal payment", payment_ref)
        cancelled = 0
        async with self._unit(snapshot.id) as proposal:
            result = self._handoff.gate.apply_result(
                proposal.payment, status, gateway_payer_id=payer_id, amount=amount
            )
            if result.outcome == PaymentOutcome.ALREADY_PAID:
                return proposal
            if result.outcome == PaymentOutcome.DECLINED:
                alias = TradeStatusAlias.PAYMENT_DECLINED
                proposal = proposal.with_payment(result.payment, alias)
                await self._proposals.save(proposal)
            else:
                if proposal.status not in ACCEPTED_STATUSES:
                    raise ConflictError(f"Proposal {proposal.code} is {proposal.status.value}")
                alias = TradeStatusAlias.PAYMENT_MADE
                proposal = proposal.with_payment(result.payment, alias)
                await self._proposals.save(proposal)
                cancelled = (await self._conflicts.sweep(proposal.item_ids, proposal.ref)).total
        self._logger.info(
            "trade_payment_result",
            proposal_id=proposal.id,
            outcome=result.outcome,
            amount=amount,
            cancelled_conflicts=cancelled,
        )
        payer = proposal.payment.payer_id
        if payer is not None:
            self._notify(proposal, alias, payer, proposal.counterparty_of(payer), kind="payment")
        return proposal

    # Completion

    async def mark_complete(self, proposal_id: UUID, actor_id: str) -> TradeProposal:
        """Set the actor's completion flag; the second flag settles the trade.

        Raises:
            PaymentRequiredError: A cash term is owed and not yet paid.
        """
        settled = False
        cancelled = 0
        async with self._unit(proposal_id) as proposal:
            self._require_party(proposal, actor_id)
            if proposal.status == TradeStatus.COMPLETE:
                return proposal
            if proposal.status not in ACCEPTED_STATUSES:
                raise ConflictError(f"Proposal {proposal.code} is {proposal.status.value}")
            if not self._handoff.gate.allows_settlement(proposal.payment):
                raise PaymentRequiredError("The cash payment must be completed first")
            party = proposal.party_of(actor_id)
            already = proposal.sender_confirmed if party == TradeParty.SENDER else proposal.receiver_confirmed
            if already:
                return proposal
            proposal = proposal.with_confirmation(party)
            if proposal.both_confirmed:
                proposal, cancelled = await self._settle(proposal)
                settled = True
            else:
                proposal = proposal.with_alias(
                    TradeStatusAlias.MARKED_COMPLETED_BY_SENDER
                    if party == TradeParty.SENDER
                    else TradeStatusAlias.MARKED_COMPLETED_BY_RECEIVER
                )
                await self._proposals.save(proposal)
        self._logger.info(
            "trade_marked_complete",
            proposal_id=proposal.id,
            actor_id=actor_id,
            settled=settled,
        )
        if settled:
            self._after_settlement(proposal, cancelled)
        else:
            self._notify(proposal, proposal.status_alias, actor_id, proposal.counterparty_of(actor_id))
        return proposal

    async def finalize(self, proposal_id: UUID) -> TradeProposal:
        """Settle a proposal both parties marked complete. No-op once complete."""
        async with self._unit(proposal_id) as proposal:
            if proposal.status == TradeStatus.COMPLETE:
                return proposal
            self._machine.ensure(proposal.status, TradeStatus.COMPLETE)
            if not self._handoff.gate.allows_settlement(proposal.payment):
                raise PaymentRequiredError("The cash payment must be completed first")
            if not proposal.both_confirmed:
                raise ConflictError("Both traders must mark the trade completed")
            proposal, cancelled = await self._settle(proposal)
        self._after_settlement(proposal, cancelled)
        return proposal

    async def _settle(self, proposal: TradeProposal) -> tuple[TradeProposal, int]:
        """Swap ownership, write the settlement record once and sweep conflicts."""
        transfers: list[OwnershipTransfer] = []
        for item_id in sorted(proposal.item_ids):
            from_id = proposal.owner_of_item(item_id)
            to_id = proposal.counterparty_of(from_id)
            await self._items.transfer_ownership(item_id, from_id, to_id, proposal.ref)
            transfers.append(OwnershipTransfer(item_id=item_id, from_id=from_id, to_id=to_id))
        record = SettlementRecord.create(
            proposal.id,
            tuple(transfers),
            cash_amount=proposal.cash_amount,
            cash_payer_id=proposal.cash_payer_id,
        )
        if not await self._settlements.add_if_absent(record):
            self._logger.warning("trade_settlement_exists", proposal_id=proposal.id)
        proposal = proposal.with_completed()
        await self._proposals.save(proposal)
        sweep = await self._conflicts.sweep(proposal.item_ids, proposal.ref)
        self._logger.info(
            "trade_settled",
            proposal_id=proposal.id,
            code=proposal.code,
            transfers=len(transfers),
            cancelled_conflicts=sweep.total,
        )
        return proposal, sweep.total

    def _after_settlement(self, proposal: TradeProposal, cancelled: int) -> None:
        for user_id in (proposal.sender_id, proposal.receiver_id):
            self._notify(proposal, TradeStatusAlias.BOTH_MARKED_COMPLETED, None, user_id)
        if self._activity is not None:
            self._activity.settlement_completed(
                proposal.id, "trade", sorted(proposal.item_ids), cancelled
            )

    # Helpers

    @asynccontextmanager
    async def _unit(
        self,
        proposal_id: UUID,
        extra_items: Iterable[UUID] = (),
    ) -> AsyncIterator[TradeProposal]:
        """Hold the proposal, its items and both parties; yield the fresh proposal.

        Retries when a counter changed the item set between the read and the lock.
        """
        extra = frozenset(extra_items)
        while True:
            snapshot = await self.get(proposal_id)
            keys = [
                proposal_key(proposal_id),
                user_key(snapshot.sender_id),
                user_key(snapshot.receiver_id),
                *(item_key(i) for i in snapshot.item_ids | extra),
            ]
            async with self._locks.hold(keys):
                proposal = await self.get(proposal_id)
                if proposal.item_ids == snapshot.item_ids:
                    yield proposal
                    return

    def _cash_terms(
        self, add_cash: Optional[Decimal], ask_cash: Optional[Decimal]
    ) -> tuple[Optional[Decimal], Optional[Decimal]]:
        """Normalize cash terms: zero means none; at most one side may carry cash."""
        minimum = self._settings.payment.min_cash_amount
        terms: list[Optional[Decimal]] = []
        for value in (add_cash, ask_cash):
            if value is None or value == 0:
                terms.append(None)
                continue
            if value < 0:
                raise ValidationError("Cash amounts cannot be negative")
            if value < minimum:
                raise ValidationError(f"Cash amounts must be at least {minimum}")
            terms.append(value)
        if terms[0] is not None and terms[1] is not None:
            raise ValidationError("A trade can either add cash or ask for cash, not both")
        return terms[0], terms[1]

    async def _check_items(
        self,
        sender_id: str,
        receiver_id: str,
        send: frozenset[UUID],
        receive: frozenset[UUID],
        *,
        proposal_id: Optional[UUID] = None,
    ) -> None:
        if not send and not receive:
            raise ValidationError("A trade needs at least one item")
        if send & receive:
            raise ValidationError("An item cannot be on both sides of a trade")
        for owner_id, item_ids in ((sender_id, send), (receiver_id, receive)):
            for item_id in sorted(item_ids):
                item = await self._items.get(item_id)
                if item.owner_id != owner_id:
                    raise ValidationError(f"Item {item_id} is not owned by {owner_id}")
                if not item.has_capability(ItemCapability.TRADE):
                    raise ValidationError(f"Item {item_id} is not available for trade")
                if item.is_reserved and (
                    proposal_id is None or item.reserved_by != TransactionRef.trade(proposal_id)
                ):
                    raise ConflictError(f"Item {item_id} is already in another transaction")

    async def _ensure_cancellable(self, proposal: TradeProposal) -> None:
        if await self._shipments.list_by_proposal(proposal.id):
            raise ConflictError("Items have already been shipped for this trade")
        if self._handoff.gate.blocks_cancellation(proposal.payment):
            raise ConflictError("A payment for this trade is already in progress")

    @staticmethod
    def _require_party(proposal: TradeProposal, user_id: str) -> None:
        if not proposal.is_party(user_id):
            raise ValidationError(f"{user_id} is not part of proposal {proposal.code}")

    def _notify(
        self,
        proposal: TradeProposal,
        alias: TradeStatusAlias,
        from_user_id: Optional[str],
        to_user_id: str,
        *,
        kind: ActivityKind = "trade",
    ) -> None:
        if self._activity is None:
            return
        self._activity.notify(
            alias.value,
            from_user_id,
            to_user_id,
            proposal.id,
            kind,
            code=proposal.code,
        )
