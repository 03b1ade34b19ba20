"""Shipment tracking for accepted trades."""

from collectibles_exchange.services.shipping.shipment_service import (
    SHIPMENT_STATUS_UPDATED_ALIAS,
    ShipmentService,
)

__all__ = ["SHIPMENT_STATUS_UPDATED_ALIAS", "ShipmentService"]
