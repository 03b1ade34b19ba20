# -*- coding: utf-8 -*-
"""ItemRegistry: the only writer of item ownership, reservation and proposal locks.

A reservation is an exclusive token (TransactionRef) set by compare-and-set on
the repository, so two concurrent reservations of one item cannot both succeed.
"""

from __future__ import annotations

import structlog
from collections.abc import Iterable
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional
from uuid import UUID

from collectibles_exchange.exceptions import ConflictError, NotFoundError, ValidationError
from collectibles_exchange.models.item import Item, ItemCapability

if TYPE_CHECKING:
    from collectibles_exchange.models.transaction_ref import TransactionRef
    from collectibles_exchange.persistence.repositories.interfaces.item_repository import (
        IItemRepository,
    )


class ItemRegistry:
    """Reservation, release, locking and ownership transfer of items."""

    def __init__(
        self,
        item_repository: "IItemRepository",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._repo = item_repository
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def get(self, item_id: UUID) -> Item:
        """Return the item or raise NotFoundError."""
        item = await self._repo.get(item_id)
        if item is None:
            raise NotFoundError("Item", item_id)
        return item

    async def list_item(
        self,
        owner_id: str,
        title: str,
        asking_price: Decimal,
        accept_above: Optional[Decimal] = None,
        *,
        tradable: bool = True,
        purchasable: bool = True,
        deal_zone_price: Optional[Decimal] = None,
    ) -> Item:
        """Create and store a new listing owned by owner_id."""
        try:
            item = Item.create(
                owner_id=owner_id,
                title=title,
                asking_price=asking_price,
                accept_above=accept_above,
                tradable=tradable,
                purchasable=purchasable,
                deal_zone_price=deal_zone_price,
            )
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        await self._repo.save(item)
        self._logger.info(
            "item_listed",
            item_id=item.id,
            owner_id=owner_id,
            asking_price=asking_price,
            deal_zone=item.is_deal_zone,
        )
        return item

    async def delist(self, item_id: UUID, owner_id: str) -> Item:
        """Soft-delete a listing.

        Refused while the item is reserved or referenced by an open trade proposal;
        those proposals have to be cancelled or declined first.
        """
        item = await self.get(item_id)
        if item.owner_id != owner_id:
            raise ValidationError("Only the owner can remove a listing")
        if item.is_deleted:
            return item
        if item.is_reserved:
            raise ConflictError(f"Item {item_id} is reserved by a pending transaction")
        if item.proposal_locks:
            raise ConflictError(
                f"Item {item_id} is part of {len(item.proposal_locks)} open trade proposal(s)"
            )
        updated = item.with_deleted()
        await self._repo.save(updated)
        self._logger.info("item_delisted", item_id=item_id, owner_id=owner_id)
        return updated

    async def try_reserve(
        self,
        item_id: UUID,
        holder: "TransactionRef",
        capability: ItemCapability,
    ) -> Item:
        """Reserve the item for holder iff it is free, live and has the capability.

        Re-reserving for the same holder is a no-op.

        Raises:
            ValidationError: Missing, inactive or incapable item.
            ConflictError: Item reserved by another transaction.
        """
        item = await self.get(item_id)
        if not item.has_capability(capability):
            raise ValidationError(f"Item {item_id} is not available for {capability.value}")
        if item.reserved_by == holder:
            return item
        updated = await self._repo.compare_and_set_reservation(item_id, None, holder)
        if updated is None:
            self._logger.info(
                "item_reserve_conflict",
                item_id=item_id,
                holder=str(holder),
            )
            raise ConflictError(f"Item {item_id} is already reserved")
        self._logger.debug("item_reserved", item_id=item_id, holder=str(holder))
        return updated

    async def reserve_all(
        self,
        item_ids: Iterable[UUID],
        holder: "TransactionRef",
        capability: ItemCapability,
    ) -> list[Item]:
        """Reserve every item or none: on failure, reservations taken here are released."""
        taken: list[UUID] = []
        reserved: list[Item] = []
        try:
            for item_id in sorted(set(item_ids)):
                before = await self.get(item_id)
                item = await self.try_reserve(item_id, holder, capability)
                if before.reserved_by != holder:
                    taken.append(item_id)
                reserved.append(item)
        except (ConflictError, ValidationError):
            for item_id in taken:
                await self.release(item_id, holder)
            raise
        return reserved

    async def release(self, item_id: UUID, holder: Optional["TransactionRef"] = None) -> Optional[Item]:
        """Clear the reservation. Idempotent.

        With holder, only a reservation held by that transaction is cleared.
        """
        item = await self._repo.get(item_id)
        if item is None or item.reserved_by is None:
            return item
        if holder is not None and item.reserved_by != holder:
            return item
        updated = await self._repo.compare_and_set_reservation(item_id, item.reserved_by, None)
        if updated is None:
            return await self._repo.get(item_id)
        self._logger.debug("item_released", item_id=item_id, holder=str(item.reserved_by))
        return updated

    async def handover(
        self,
        item_id: UUID,
        from_holder: "TransactionRef",
        to_holder: "TransactionRef",
    ) -> Item:
        """Move a reservation from one transaction to another without freeing the item."""
        updated = await self._repo.compare_and_set_reservation(item_id, from_holder, to_holder)
        if updated is None:
            raise ConflictError(f"Item {item_id} is not reserved by {from_holder}")
        return updated

    async def lock_for_proposal(self, item_id: UUID, proposal_id: UUID) -> Item:
        item = await self.get(item_id)
        if proposal_id in item.proposal_locks:
            return item
        updated = item.with_proposal_lock(proposal_id)
        await self._repo.save(updated)
        return updated

    async def unlock_for_proposal(self, item_id: UUID, proposal_id: UUID) -> Optional[Item]:
        item = await self._repo.get(item_id)
        if item is None or proposal_id not in item.proposal_locks:
            return item
        updated = item.without_proposal_lock(proposal_id)
        await self._repo.save(updated)
        return updated

    async def transfer_ownership(
        self,
        item_id: UUID,
        from_id: str,
        to_id: str,
        holder: "TransactionRef",
    ) -> Item:
        """Give the item to to_id; only the committing holder may do this.

        Clears the reservation and all proposal locks. Repeating a finished
        transfer is a no-op.

        Raises:
            ConflictError: Owner is not from_id or the item is not reserved by holder.
        """
        item = await self.get(item_id)
        if item.owner_id == to_id and item.reserved_by is None:
            return item
        if item.owner_id != from_id:
            raise ConflictError(f"Item {item_id} is no longer owned by {from_id}")
        if item.reserved_by != holder:
            raise ConflictError(f"Item {item_id} is not reserved by {holder}")
        updated = item.with_owner(to_id)
        await self._repo.save(updated)
        self._logger.info(
            "item_ownership_transferred",
            item_id=item_id,
            from_id=from_id,
            to_id=to_id,
            holder=str(holder),
        )
        return updated
