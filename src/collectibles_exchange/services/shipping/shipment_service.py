# -*- coding: utf-8 -*-
"""ShipmentService: tracking details each trader records for their side of an accepted trade."""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Optional
from uuid import UUID

from collectibles_exchange.exceptions import (
    ConflictError,
    NotFoundError,
    PaymentRequiredError,
    ValidationError,
)
from collectibles_exchange.models.shipment import Shipment
from collectibles_exchange.models.trade_proposal import TradeParty, TradeStatusAlias
from collectibles_exchange.services.payment.payment_gate import PaymentGate
from collectibles_exchange.services.trade_proposal.state_machine import ACCEPTED_STATUSES
from collectibles_exchange.utils.locks import KeyedLock, proposal_key

if TYPE_CHECKING:
    from collectibles_exchange.persistence.repositories.interfaces.shipment_repository import (
        IShipmentRepository,
    )
    from collectibles_exchange.persistence.repositories.interfaces.trade_proposal_repository import (
        ITradeProposalRepository,
    )
    from collectibles_exchange.services.activity import ActivityPublisher

SHIPMENT_STATUS_UPDATED_ALIAS = "shipment-status-updated"


class ShipmentService:
    def __init__(
        self,
        shipment_repository: "IShipmentRepository",
        trade_proposal_repository: "ITradeProposalRepository",
        locks: KeyedLock,
        gate: Optional[PaymentGate] = None,
        activity: Optional["ActivityPublisher"] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._shipments = shipment_repository
        self._proposals = trade_proposal_repository
        self._locks = locks
        self._gate = gate or PaymentGate()
        self._activity = activity
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def record_shipment(
        self,
        proposal_id: UUID,
        user_id: str,
        tracking_id: str,
        carrier: Optional[str] = None,
    ) -> Shipment:
        """Record (or correct) the tracking id for user_id's side of the trade.

        Raises:
            ValidationError: Not a party, or an empty tracking id.
            ConflictError: Proposal not accepted.
            PaymentRequiredError: Cash owed under the trade is not paid yet.
        """
        async with self._locks.hold([proposal_key(proposal_id)]):
            proposal = await self._proposals.get(proposal_id)
            if proposal is None:
                raise NotFoundError("TradeProposal", proposal_id)
            if not proposal.is_party(user_id):
                raise ValidationError(f"{user_id} is not part of proposal {proposal.code}")
            if proposal.status not in ACCEPTED_STATUSES:
                raise ConflictError(f"Proposal {proposal.code} is {proposal.status.value}")
            if not self._gate.allows_settlement(proposal.payment):
                raise PaymentRequiredError("The cash payment must be completed before shipping")

            existing = await self._shipments.get_for_party(proposal_id, user_id)
            try:
                shipment = Shipment.create(proposal_id, user_id, tracking_id, carrier=carrier)
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            if existing is not None:
                shipment = Shipment(
                    id=existing.id,
                    proposal_id=proposal_id,
                    user_id=user_id,
                    tracking_id=shipment.tracking_id,
                    shipment_status=existing.shipment_status,
                    created_at=existing.created_at,
                    updated_at=shipment.updated_at,
                    carrier=carrier or existing.carrier,
                )
            await self._shipments.save(shipment)

            other_id = proposal.counterparty_of(user_id)
            other_shipped = await self._shipments.get_for_party(proposal_id, other_id) is not None
            if other_shipped:
                alias = TradeStatusAlias.BOTH_TRADERS_SHIPPED
            elif proposal.party_of(user_id) == TradeParty.SENDER:
                alias = TradeStatusAlias.SHIPPED_BY_SENDER
            else:
                alias = TradeStatusAlias.SHIPPED_BY_RECEIVER
            proposal = proposal.with_alias(alias)
            await self._proposals.save(proposal)

        self._logger.info(
            "shipment_recorded",
            proposal_id=proposal_id,
            user_id=user_id,
            tracking_id=shipment.tracking_id,
            carrier=shipment.carrier,
            alias=alias,
            updated=existing is not None,
        )
        if self._activity is not None:
            self._activity.notify(
                alias.value, user_id, other_id, proposal_id, "shipping", code=proposal.code
            )
        return shipment

    async def update_status(self, proposal_id: UUID, user_id: str, shipment_status: str) -> Shipment:
        """Store a carrier status (e.g. in_transit, delivered) for user_id's shipment."""
        if not shipment_status.strip():
            raise ValidationError("shipment_status must not be empty")
        async with self._locks.hold([proposal_key(proposal_id)]):
            shipment = await self._shipments.get_for_party(proposal_id, user_id)
            if shipment is None:
                raise NotFoundError("Shipment", f"{proposal_id}/{user_id}")
            if shipment.shipment_status == shipment_status:
                return shipment
            shipment = shipment.with_status(shipment_status)
            await self._shipments.save(shipment)
            proposal = await self._proposals.get(proposal_id)
        self._logger.info(
            "shipment_status_updated",
            proposal_id=proposal_id,
            user_id=user_id,
            shipment_status=shipment_status,
        )
        if self._activity is not None and proposal is not None:
            self._activity.notify(
                SHIPMENT_STATUS_UPDATED_ALIAS,
                user_id,
                proposal.counterparty_of(user_id),
                proposal_id,
                "shipping",
                code=proposal.code,
                detail=shipment_status,
            )
        return shipment
