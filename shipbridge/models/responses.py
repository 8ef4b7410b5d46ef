"""Result envelopes returned by carrier operations.

Responses are immutable. ``success=False`` carries the carrier's message and
is a normal return, not an error; ``params`` holds the raw parsed payload for
debugging.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from shipbridge.models.location import Location
from shipbridge.models.money import CENT
from shipbridge.models.package import Package


@dataclass(frozen=True)
class RateEstimate:
    """One quoted service option.

    Attributes:
        origin: Ship-from address the quote was made for.
        destination: Ship-to address.
        carrier: Carrier display name.
        service_name: Human-readable service name, None when the code is
            not in any service table.
        service_code: Carrier service code.
        total_price: Total charge.
        currency: ISO 4217 currency code.
        packages: Package set the quote applies to.
    """

    origin: Location
    destination: Location
    carrier: str
    service_name: str | None
    service_code: str | None = None
    total_price: Decimal = Decimal("0")
    currency: str | None = None
    packages: tuple[Package, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "packages", tuple(self.packages))

    @property
    def total_price_cents(self) -> int:
        return int((self.total_price / CENT).to_integral_value(rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class ShipmentEvent:
    """A single tracking milestone.

    ``time`` is None when the carrier did not report both a date and a time;
    such events have no place in a chronological ordering.
    """

    name: str
    time: datetime | None = None
    location: Location | None = None


@dataclass(frozen=True)
class Response:
    """Common envelope fields.

    Attributes:
        success: Whether the carrier reported success.
        message: Carrier status or error description.
        params: Raw parsed response payload.
        error_code: Translated E-XXXX code when ``success`` is False.
        xml: Raw response XML, kept when ``log_xml`` is set.
        request: Raw request XML, kept when ``log_xml`` is set.
    """

    success: bool
    message: str | None = None
    params: dict[str, Any] = field(default_factory=dict)
    error_code: str | None = None
    xml: str | None = None
    request: str | None = None


@dataclass(frozen=True)
class RateResponse(Response):
    rates: tuple[RateEstimate, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rates", tuple(self.rates))

    @property
    def estimates(self) -> tuple[RateEstimate, ...]:
        return self.rates


@dataclass(frozen=True)
class TrackingResponse(Response):
    tracking_number: str | None = None
    origin: Location | None = None
    destination: Location | None = None
    shipment_events: tuple[ShipmentEvent, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "shipment_events", tuple(self.shipment_events))

    @property
    def latest_event(self) -> ShipmentEvent | None:
        return self.shipment_events[-1] if self.shipment_events else None


def sort_events(events: Iterable[ShipmentEvent]) -> list[ShipmentEvent]:
    """Order events chronologically.

    Timed events are sorted ascending (stable for equal times). Events
    without a time cannot be compared, so they keep their parsed order after
    the timed ones.
    """
    events = list(events)
    timed = sorted((e for e in events if e.time is not None), key=lambda e: e.time)
    untimed = [e for e in events if e.time is None]
    return timed + untimed
