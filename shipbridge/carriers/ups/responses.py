"""UPS XML response models and parsers.

Replies are converted to dicts with xmltodict, then validated into typed
pydantic models. A missing element is an explicit ``None`` (or an empty
list for repeating elements) on the model, never a silent lookup failure,
so parsers can tell a business failure (status code is not "1") from a
malformed reply (status is "1" but a required element is absent).

Example:
    response = parse_rate_response(xml, origin, destination, packages)
    if response.success:
        cheapest = min(response.rates, key=lambda r: r.total_price)
"""

import base64
import binascii
import logging
import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, TypeVar
from xml.parsers.expat import ExpatError

import xmltodict
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from shipbridge.carriers.ups.constants import SUCCESS_STATUS_CODE, UPS_CARRIER_NAME
from shipbridge.carriers.ups.service_codes import service_name_for
from shipbridge.errors import MalformedResponseError, translate_carrier_error
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
    Shipment,
    ShipmentEvent,
    TrackingResponse,
    is_blank,
    sort_events,
)

logger = logging.getLogger(__name__)

# Elements that may repeat; always parsed as lists
REPEATING_ELEMENTS = ("Error", "RatedShipment", "Shipment", "Package", "Activity", "PackageResults")

DELIVERED = "delivered"

_DATE_PATTERN = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
_TIME_PATTERN = re.compile(r"^(\d{2})(\d{2})(\d{2})$")


# ---------------------------------------------------------------------------
# Typed response models
# ---------------------------------------------------------------------------


class UPSModel(BaseModel):
    """Base for response elements: unknown children are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _normalize_element(cls, data: Any) -> Any:
        # Empty elements parse as None; attributed text parses as {"@a": .., "#text": ..}
        if data is None:
            return {}
        if isinstance(data, dict):
            return {key: _element_text(value) for key, value in data.items()}
        return data


def _element_text(value: Any) -> Any:
    if isinstance(value, dict) and "#text" in value and all(
        k == "#text" or k.startswith("@") for k in value
    ):
        return value["#text"]
    return value


class ResponseError(UPSModel):
    severity: str | None = Field(None, alias="ErrorSeverity")
    code: str | None = Field(None, alias="ErrorCode")
    description: str | None = Field(None, alias="ErrorDescription")


class ResponseStatus(UPSModel):
    """The ``Response`` element present in every reply."""

    status_code: str | None = Field(None, alias="ResponseStatusCode")
    status_description: str | None = Field(None, alias="ResponseStatusDescription")
    errors: list[ResponseError] = Field(default_factory=list, alias="Error")

    @property
    def success(self) -> bool:
        return (self.status_code or "").strip() == SUCCESS_STATUS_CODE

    @property
    def message(self) -> str | None:
        """Status description, else the first error description."""
        if not is_blank(self.status_description):
            return self.status_description
        for error in self.errors:
            if not is_blank(error.description):
                return error.description
        return None

    @property
    def error_code(self) -> str | None:
        """Translated E-XXXX code for a failed reply."""
        if self.success:
            return None
        carrier_code = self.errors[0].code if self.errors else None
        return translate_carrier_error(carrier_code, self.message)[0]


class CodeDescription(UPSModel):
    code: str | None = Field(None, alias="Code")
    description: str | None = Field(None, alias="Description")


class Address(UPSModel):
    address_line1: str | None = Field(None, alias="AddressLine1")
    address_line2: str | None = Field(None, alias="AddressLine2")
    address_line3: str | None = Field(None, alias="AddressLine3")
    city: str | None = Field(None, alias="City")
    state_province_code: str | None = Field(None, alias="StateProvinceCode")
    postal_code: str | None = Field(None, alias="PostalCode")
    country_code: str | None = Field(None, alias="CountryCode")

    def to_location(self) -> Location:
        return Location(
            country=self.country_code,
            postal_code=self.postal_code,
            province=self.state_province_code,
            city=self.city,
            address1=self.address_line1,
            address2=self.address_line2,
            address3=self.address_line3,
        )


class Charges(UPSModel):
    currency_code: str | None = Field(None, alias="CurrencyCode")
    monetary_value: str | None = Field(None, alias="MonetaryValue")


class UPSResponse(UPSModel):
    response: ResponseStatus = Field(default_factory=ResponseStatus, alias="Response")


# Rating


class RatedShipment(UPSModel):
    service: CodeDescription | None = Field(None, alias="Service")
    total_charges: Charges | None = Field(None, alias="TotalCharges")


class RatingResponse(UPSResponse):
    rated_shipments: list[RatedShipment] = Field(default_factory=list, alias="RatedShipment")


# Tracking


class ActivityStatus(UPSModel):
    status_type: CodeDescription | None = Field(None, alias="StatusType")


class ActivityLocation(UPSModel):
    address: Address | None = Field(None, alias="Address")


class Activity(UPSModel):
    location: ActivityLocation | None = Field(None, alias="ActivityLocation")
    status: ActivityStatus | None = Field(None, alias="Status")
    date: str | None = Field(None, alias="Date")
    time: str | None = Field(None, alias="Time")

    @property
    def description(self) -> str:
        if self.status and self.status.status_type and self.status.status_type.description:
            return self.status.status_type.description
        return ""


class TrackedPackage(UPSModel):
    tracking_number: str | None = Field(None, alias="TrackingNumber")
    activities: list[Activity] = Field(default_factory=list, alias="Activity")


class Party(UPSModel):
    address: Address | None = Field(None, alias="Address")


class TrackedShipment(UPSModel):
    shipper: Party | None = Field(None, alias="Shipper")
    ship_to: Party | None = Field(None, alias="ShipTo")
    shipment_identification_number: str | None = Field(None, alias="ShipmentIdentificationNumber")
    packages: list[TrackedPackage] = Field(default_factory=list, alias="Package")


class TrackResponse(UPSResponse):
    shipments: list[TrackedShipment] = Field(default_factory=list, alias="Shipment")


# Label purchase


class ShipmentCharges(UPSModel):
    total_charges: Charges | None = Field(None, alias="TotalCharges")


class ShipmentConfirmResponse(UPSResponse):
    shipment_charges: ShipmentCharges | None = Field(None, alias="ShipmentCharges")
    shipment_identification_number: str | None = Field(None, alias="ShipmentIdentificationNumber")
    shipment_digest: str | None = Field(None, alias="ShipmentDigest")


class LabelImage(UPSModel):
    image_format: CodeDescription | None = Field(None, alias="LabelImageFormat")
    graphic_image: str | None = Field(None, alias="GraphicImage")


class PackageResult(UPSModel):
    tracking_number: str | None = Field(None, alias="TrackingNumber")
    label_image: LabelImage | None = Field(None, alias="LabelImage")


class ShipmentResults(UPSModel):
    shipment_charges: ShipmentCharges | None = Field(None, alias="ShipmentCharges")
    shipment_identification_number: str | None = Field(None, alias="ShipmentIdentificationNumber")
    package_results: list[PackageResult] = Field(default_factory=list, alias="PackageResults")


class ShipmentAcceptResponse(UPSResponse):
    shipment_results: ShipmentResults | None = Field(None, alias="ShipmentResults")


# ---------------------------------------------------------------------------
# Document parsing
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=UPSResponse)


def parse_document(xml: str, model: type[ModelT], action: str) -> tuple[ModelT, dict[str, Any]]:
    """Parse a reply into ``model`` and the raw root payload.

    Args:
        xml: Raw response text.
        model: Response model for the root element.
        action: Action name for error messages.

    Returns:
        Tuple of (typed model, raw root payload dict).

    Raises:
        MalformedResponseError: If the text is not XML, has no Response
            element, or does not fit the model.
    """
    try:
        document = xmltodict.parse(xml, force_list=REPEATING_ELEMENTS)
    except ExpatError as e:
        raise MalformedResponseError.from_code(
            "E-3006",
            carrier=UPS_CARRIER_NAME,
            action=action,
            element=f"a well-formed XML document ({e})",
            details={"xml": xml[:500]},
        ) from e

    _root_tag, payload = next(iter(document.items()))
    payload = payload if isinstance(payload, dict) else {}
    if not isinstance(payload.get("Response"), dict):
        raise _malformed(action, "the Response element", payload)
    try:
        return model.model_validate(payload), payload
    except ValidationError as e:
        raise MalformedResponseError.from_code(
            "E-3006",
            carrier=UPS_CARRIER_NAME,
            action=action,
            element=f"a valid {model.__name__} ({e.error_count()} validation errors)",
            details={"errors": e.errors(include_url=False)},
        ) from e


def _malformed(action: str, element: str, params: dict[str, Any]) -> MalformedResponseError:
    return MalformedResponseError.from_code(
        "E-3006",
        carrier=UPS_CARRIER_NAME,
        action=action,
        element=element,
        details={"params": params},
    )


def parse_money(charges: Charges | None, action: str, params: dict[str, Any]) -> Money:
    """Convert a charges element into Money.

    Raises:
        MalformedResponseError: If the value or currency is missing or not
            a number.
    """
    if charges is None or is_blank(charges.monetary_value) or is_blank(charges.currency_code):
        raise _malformed(action, "TotalCharges/MonetaryValue and CurrencyCode", params)
    try:
        return Money(Decimal(charges.monetary_value.strip()), charges.currency_code)
    except InvalidOperation:
        raise _malformed(action, f"a numeric MonetaryValue (got {charges.monetary_value!r})", params)


def parse_timestamp(date: str | None, time: str | None) -> datetime | None:
    """Combine ``YYYYMMDD`` and ``HHMMSS`` fields into a UTC datetime.

    Returns:
        The timestamp, or None when either field is absent or not in the
        expected digit format.
    """
    if is_blank(date) or is_blank(time):
        return None
    date_match = _DATE_PATTERN.match(date.strip())
    time_match = _TIME_PATTERN.match(time.strip())
    if not date_match or not time_match:
        logger.debug("Ignoring unparseable activity timestamp %r %r", date, time)
        return None
    year, month, day = (int(part) for part in date_match.groups())
    hour, minute, second = (int(part) for part in time_match.groups())
    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    except ValueError:
        logger.debug("Ignoring out-of-range activity timestamp %r %r", date, time)
        return None


# ---------------------------------------------------------------------------
# Rates
# ---------------------------------------------------------------------------


def parse_rate_response(
    xml: str,
    origin: Location,
    destination: Location,
    packages: Iterable[Package],
    carrier_name: str = UPS_CARRIER_NAME,
) -> RateResponse:
    """Parse a RatingServiceSelectionResponse.

    Each RatedShipment becomes a RateEstimate whose service name is resolved
    from the origin country. A successful reply without RatedShipment
    elements yields no rates.
    """
    rating, params = parse_document(xml, RatingResponse, "Rate")
    status = rating.response
    packages = tuple(packages)

    if not status.success:
        return RateResponse(
            success=False,
            message=status.message,
            params=params,
            error_code=status.error_code,
        )

    rates = []
    for rated in rating.rated_shipments:
        service_code = rated.service.code if rated.service else None
        price = parse_money(rated.total_charges, "Rate", params)
        rates.append(
            RateEstimate(
                origin=origin,
                destination=destination,
                carrier=carrier_name,
                service_name=service_name_for(origin.country_code, service_code),
                service_code=service_code,
                total_price=price.amount,
                currency=price.currency,
                packages=packages,
            )
        )
    return RateResponse(success=True, message=status.message, params=params, rates=rates)


# ---------------------------------------------------------------------------
# Tracking
# ---------------------------------------------------------------------------


def _activity_event(activity: Activity) -> ShipmentEvent:
    address = activity.location.address if activity.location else None
    return ShipmentEvent(
        name=activity.description,
        time=parse_timestamp(activity.date, activity.time),
        location=address.to_location() if address is not None else None,
    )


def merge_origin_and_destination(
    events: list[ShipmentEvent],
    origin: Location | None,
    destination: Location | None,
) -> list[ShipmentEvent]:
    """Reconcile the first and last events with the shipment's addresses.

    Origin: when the first event is in the origin's country and its city is
    blank or matches, its location becomes the origin; otherwise an event at
    the origin with the first event's name and time is prepended.

    Destination: a final "delivered" event takes the destination as its
    location.

    Without a known origin country (or destination), the events are left as
    parsed.
    """
    events = list(events)
    if not events:
        return events

    if origin is not None and origin.country_code:
        first = events[0]
        location = first.location
        same_country = location is not None and location.country_code == origin.country_code
        same_or_blank_city = location is not None and (
            is_blank(location.city) or location.city == origin.city
        )
        origin_event = ShipmentEvent(first.name, first.time, origin)
        if same_country and same_or_blank_city:
            events[0] = origin_event
        else:
            events.insert(0, origin_event)

    last = events[-1]
    if destination is not None and (last.name or "").strip().lower() == DELIVERED:
        events[-1] = ShipmentEvent(last.name, last.time, destination)
    return events


def parse_tracking_response(xml: str) -> TrackingResponse:
    """Parse a TrackResponse into tracking number, addresses and events.

    Raises:
        MalformedResponseError: If a successful reply has no Shipment.
    """
    tracking, params = parse_document(xml, TrackResponse, "Track")
    status = tracking.response

    if not status.success:
        return TrackingResponse(
            success=False,
            message=status.message,
            params=params,
            error_code=status.error_code,
        )

    if not tracking.shipments:
        raise _malformed("Track", "the Shipment element", params)

    shipment = tracking.shipments[0]
    first_package = shipment.packages[0] if shipment.packages else None

    tracking_number = shipment.shipment_identification_number
    if is_blank(tracking_number) and first_package is not None:
        tracking_number = first_package.tracking_number

    origin = _party_location(shipment.shipper)
    destination = _party_location(shipment.ship_to)

    events: list[ShipmentEvent] = []
    if first_package is not None and first_package.activities:
        events = sort_events(_activity_event(a) for a in first_package.activities)
        events = merge_origin_and_destination(events, origin, destination)

    return TrackingResponse(
        success=True,
        message=status.message,
        params=params,
        tracking_number=tracking_number,
        origin=origin,
        destination=destination,
        shipment_events=events,
    )


def _party_location(party: Party | None) -> Location | None:
    if party is None or party.address is None:
        return None
    return party.address.to_location()


# ---------------------------------------------------------------------------
# Label purchase
# ---------------------------------------------------------------------------


def parse_shipment_confirm(xml: str, shipment: Shipment) -> ConfirmedShipment | FailedShipment:
    """Parse a ShipmentConfirmResponse into a confirmed or failed shipment.

    Raises:
        MalformedResponseError: If a successful reply lacks the charges or
            the digest.
    """
    confirm, params = parse_document(xml, ShipmentConfirmResponse, "ShipConfirm")
    status = confirm.response

    if not status.success:
        return FailedShipment(
            shipment=shipment,
            errors=status.message or "Shipment confirm failed",
            error_code=status.error_code,
        )

    charges = confirm.shipment_charges.total_charges if confirm.shipment_charges else None
    price = parse_money(charges, "ShipConfirm", params)
    if is_blank(confirm.shipment_digest):
        raise _malformed("ShipConfirm", "the ShipmentDigest element", params)
    return ConfirmedShipment(shipment=shipment, price=price, digest=confirm.shipment_digest)


def decode_label_image(encoded: str | None, params: dict[str, Any]) -> bytes:
    """Decode a base64 GraphicImage.

    Raises:
        MalformedResponseError: If the image is missing or not base64.
    """
    if is_blank(encoded):
        raise _malformed("ShipAccept", "LabelImage/GraphicImage", params)
    try:
        return base64.b64decode("".join(encoded.split()), validate=True)
    except (binascii.Error, ValueError):
        raise _malformed("ShipAccept", "a base64 LabelImage/GraphicImage", params)


def parse_shipment_accept(xml: str, confirmed: ConfirmedShipment) -> AcceptedShipment | FailedShipment:
    """Parse a ShipmentAcceptResponse into an accepted or failed shipment.

    Raises:
        MalformedResponseError: If a successful reply lacks ShipmentResults,
            the charges, the identification number or a label image.
    """
    accept, params = parse_document(xml, ShipmentAcceptResponse, "ShipAccept")
    status = accept.response

    if not status.success:
        return FailedShipment(
            shipment=confirmed.shipment,
            errors=status.message or "Shipment accept failed",
            error_code=status.error_code,
            confirmed=confirmed,
        )

    results = accept.shipment_results
    if results is None:
        raise _malformed("ShipAccept", "the ShipmentResults element", params)
    charges = results.shipment_charges.total_charges if results.shipment_charges else None
    price = parse_money(charges, "ShipAccept", params)
    if is_blank(results.shipment_identification_number):
        raise _malformed("ShipAccept", "ShipmentResults/ShipmentIdentificationNumber", params)

    labels = [
        Label(
            tracking=package_result.tracking_number,
            image=decode_label_image(
                package_result.label_image.graphic_image if package_result.label_image else None,
                params,
            ),
        )
        for package_result in results.package_results
    ]
    accepted = AcceptedShipment(
        confirmed=confirmed,
        price=price,
        tracking=results.shipment_identification_number,
        labels=labels,
    )
    if not accepted.complete:
        logger.warning(
            "ShipAccept returned %d labels for %d packages (shipment %s)",
            len(labels),
            len(confirmed.packages),
            results.shipment_identification_number,
        )
    return accepted
