"""In-memory stub carrier for development and tests.

Makes no network calls. Every operation succeeds with fixed data.
"""

import logging
import random
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Iterable, Mapping

from shipbridge.carriers.base import Carrier, as_package_tuple
from shipbridge.models import (
    AcceptedShipment,
    ConfirmedShipment,
    Label,
    Location,
    Money,
    Package,
    RateEstimate,
    RateResponse,
    Shipment,
    ShipmentEvent,
    ShipmentResult,
    TrackingResponse,
)

logger = logging.getLogger(__name__)

BOGUS_SERVICE_NAME = "Carrier Pigeon"
BOGUS_SERVICE_CODE = "01"
BOGUS_PRICE = Money(Decimal("5.23"), "USD")
TRACKING_NUMBER_LENGTH = 9


def random_tracking_number() -> str:
    return "".join(random.choices("0123456789", k=TRACKING_NUMBER_LENGTH))


class BogusCarrier(Carrier):
    """Stub carrier returning canned rates, tracking and labels."""

    name = "Bogus Carrier"

    def find_rates(
        self,
        origin: Location,
        destination: Location,
        packages: Package | Iterable[Package],
        options: Mapping[str, Any] | None = None,
    ) -> RateResponse:
        packages = as_package_tuple(packages)
        estimate = RateEstimate(
            origin=origin,
            destination=destination,
            carrier=self.name,
            service_name=BOGUS_SERVICE_NAME,
            service_code=BOGUS_SERVICE_CODE,
            total_price=BOGUS_PRICE.amount,
            currency=BOGUS_PRICE.currency,
            packages=packages,
        )
        return RateResponse(success=True, rates=(estimate,))

    def find_tracking_info(
        self,
        tracking_number: str,
        options: Mapping[str, Any] | None = None,
    ) -> TrackingResponse:
        event = ShipmentEvent(name="Delivered", time=datetime.now(timezone.utc))
        return TrackingResponse(
            success=True,
            tracking_number=tracking_number,
            shipment_events=(event,),
        )

    def buy_shipping_labels(
        self,
        shipper: Location,
        origin: Location,
        destination: Location,
        packages: Package | Iterable[Package],
        options: Mapping[str, Any] | None = None,
    ) -> ShipmentResult:
        """Accept immediately with one label per package, all sharing a tracking number."""
        opts = self.merged_options(options)
        shipment = Shipment(
            shipper=shipper,
            payer=opts.payer or shipper,
            origin=origin,
            destination=destination,
            packages=as_package_tuple(packages),
            number=opts.shipment_number,
            service=opts.service or BOGUS_SERVICE_CODE,
        )
        tracking = random_tracking_number()
        confirmed = ConfirmedShipment(shipment=shipment, price=BOGUS_PRICE, digest=tracking)
        logger.info("Bogus carrier issued tracking number %s", tracking)
        return AcceptedShipment(
            confirmed=confirmed,
            price=BOGUS_PRICE,
            tracking=tracking,
            labels=tuple(Label(tracking=tracking) for _ in shipment.packages),
        )
