"""Shipment and label-purchase protocol states.

A label purchase moves through explicit, immutable states:

    Shipment --confirm--> ConfirmedShipment --accept--> AcceptedShipment
                                  |
                                  +--price gate--> RejectedShipment

and any carrier-reported failure ends in FailedShipment. An
AcceptedShipment can only be built from a ConfirmedShipment, so a shipment
that was accepted without being confirmed cannot be represented.

Every terminal state exposes the same read-only view (``price``,
``tracking``, ``labels``, ``errors``) so callers can inspect a result
without switching on its type.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from shipbridge.models.location import Location
from shipbridge.models.money import Money
from shipbridge.models.package import Package

DEFAULT_SERVICE_CODE = "03"


class ShipmentState(str, Enum):
    """Label purchase protocol states."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass(frozen=True)
class Label:
    """Purchased label for one package.

    Attributes:
        tracking: Carrier-issued tracking number for the package.
        image: Decoded label image bytes (None for stub carriers).
    """

    tracking: str | None
    image: bytes | None = None


@dataclass(frozen=True)
class Shipment:
    """A shipment requested for label purchase.

    Attributes:
        shipper: Account owner the shipment is billed under.
        payer: Party paying for the shipment (defaults to the shipper).
        origin: Ship-from address.
        destination: Ship-to address.
        packages: Parcels in the shipment, in order.
        number: Caller's reference, echoed back by the carrier.
        service: Carrier service code.
    """

    shipper: Location
    origin: Location
    destination: Location
    packages: tuple[Package, ...]
    payer: Location | None = None
    number: str | None = None
    service: str = DEFAULT_SERVICE_CODE

    def __post_init__(self) -> None:
        object.__setattr__(self, "packages", tuple(self.packages))
        if self.payer is None:
            object.__setattr__(self, "payer", self.shipper)
        if not self.service:
            object.__setattr__(self, "service", DEFAULT_SERVICE_CODE)

    state = ShipmentState.PENDING


class _ShipmentView:
    """Accessors derived from the requested shipment.

    Subclasses provide ``shipment``.
    """

    @property
    def packages(self) -> tuple[Package, ...]:
        return self.shipment.packages

    @property
    def service(self) -> str:
        return self.shipment.service

    @property
    def number(self) -> str | None:
        return self.shipment.number


@dataclass(frozen=True)
class ConfirmedShipment(_ShipmentView):
    """Carrier has quoted a price and issued a digest; nothing purchased yet."""

    shipment: Shipment
    price: Money
    digest: str

    state = ShipmentState.CONFIRMED
    tracking = None
    labels = ()
    errors = None


@dataclass(frozen=True)
class AcceptedShipment(_ShipmentView):
    """Purchased shipment with final price, tracking number and labels.

    The purchase stands even when the carrier returned fewer labels than
    there are packages; ``complete`` is False in that case and the missing
    labels have to be recovered from the carrier.
    """

    confirmed: ConfirmedShipment
    price: Money
    tracking: str
    labels: tuple[Label, ...]

    state = ShipmentState.ACCEPTED
    errors = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", tuple(self.labels))

    @property
    def shipment(self) -> Shipment:
        return self.confirmed.shipment

    @property
    def digest(self) -> str:
        return self.confirmed.digest

    @property
    def complete(self) -> bool:
        """True when there is one label per package."""
        return len(self.labels) == len(self.shipment.packages)


@dataclass(frozen=True)
class RejectedShipment(_ShipmentView):
    """Quoted price exceeded the caller's expected price plus tolerance.

    The accept step was not attempted; no charge was made.
    """

    confirmed: ConfirmedShipment
    expected_price: Money
    price_epsilon: Money

    state = ShipmentState.REJECTED
    tracking = None
    labels = ()
    errors = None

    @property
    def shipment(self) -> Shipment:
        return self.confirmed.shipment

    @property
    def price(self) -> Money:
        return self.confirmed.price

    @property
    def digest(self) -> str:
        return self.confirmed.digest


@dataclass(frozen=True)
class FailedShipment(_ShipmentView):
    """Carrier reported an error during confirm or accept.

    Attributes:
        shipment: The requested shipment.
        errors: Carrier error message.
        error_code: Translated E-XXXX code for the failure.
        confirmed: Set when the failure happened at the accept step.
    """

    shipment: Shipment
    errors: str
    error_code: str | None = None
    confirmed: ConfirmedShipment | None = None

    state = ShipmentState.FAILED
    tracking = None
    labels = ()

    @property
    def price(self) -> Money | None:
        return self.confirmed.price if self.confirmed else None

    @property
    def digest(self) -> str | None:
        return self.confirmed.digest if self.confirmed else None


ShipmentResult = Union[AcceptedShipment, RejectedShipment, FailedShipment]
