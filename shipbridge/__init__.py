"""Multi-carrier shipping: rates, tracking and label purchase.

Example:
    from shipbridge import UPS, Location, Package

    ups = UPS(key="...", login="...", password="...", test=True)
    response = ups.find_rates(origin, destination, Package(weight=100, dimensions=(93, 10)))
"""

from shipbridge.carriers import CARRIERS, UPS, BogusCarrier, Carrier, get_carrier_class
from shipbridge.config import ShipbridgeConfig, load_carrier, load_config
from shipbridge.models import (
    AcceptedShipment,
    ConfirmedShipment,
    FailedShipment,
    Label,
    Location,
    Money,
    Package,
    RateEstimate,
    RateResponse,
    RejectedShipment,
    Shipment,
    ShipmentEvent,
    ShipmentState,
    TrackingResponse,
)

__version__ = "0.1.0"

__all__ = [
    "CARRIERS",
    "Carrier",
    "UPS",
    "BogusCarrier",
    "get_carrier_class",
    "ShipbridgeConfig",
    "load_config",
    "load_carrier",
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
    "RateEstimate",
    "RateResponse",
    "ShipmentEvent",
    "TrackingResponse",
]
