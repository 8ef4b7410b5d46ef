"""Domain model shared by all carriers."""

from shipbridge.models.location import COMMERCIAL, RESIDENTIAL, Location, is_blank
from shipbridge.models.money import Money
from shipbridge.models.package import IMPERIAL, METRIC, Package
from shipbridge.models.responses import (
    RateEstimate,
    RateResponse,
    ShipmentEvent,
    TrackingResponse,
    sort_events,
)
from shipbridge.models.shipment import (
    DEFAULT_SERVICE_CODE,
    AcceptedShipment,
    ConfirmedShipment,
    FailedShipment,
    Label,
    RejectedShipment,
    Shipment,
    ShipmentResult,
    ShipmentState,
)

__all__ = [
    "COMMERCIAL",
    "RESIDENTIAL",
    "IMPERIAL",
    "METRIC",
    "DEFAULT_SERVICE_CODE",
    "Location",
    "Package",
    "Money",
    "Label",
    "Shipment",
    "ShipmentState",
    "ConfirmedShipment",
    "AcceptedShipment",
    "RejectedShipment",
    "FailedShipment",
    "ShipmentResult",
    "RateEstimate",
    "RateResponse",
    "ShipmentEvent",
    "TrackingResponse",
    "is_blank",
    "sort_events",
]
