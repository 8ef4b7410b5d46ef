"""UPS XML request builders.

Transforms the shared domain model into UPS XML API documents. Every
outbound body is two concatenated documents: the AccessRequest carrying the
account credentials, followed by the action request.

Example:
    from shipbridge.carriers.ups.requests import (
        build_access_request,
        build_rate_request,
        request_body,
    )

    body = request_body(
        build_access_request(options),
        build_rate_request(origin, destination, packages, options),
    )
"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from shipbridge.carriers.base import CarrierOptions
from shipbridge.carriers.ups.constants import (
    CONFIRM_REQUEST_OPTION,
    DEFAULT_LABEL_FORMAT,
    DEFAULT_PACKAGING_CODE,
    IMPERIAL_COUNTRIES,
    IMPERIAL_DIMENSION_UNIT,
    IMPERIAL_WEIGHT_UNIT,
    MEASUREMENT_DECIMALS,
    METRIC_DIMENSION_UNIT,
    METRIC_WEIGHT_UNIT,
    MIN_MEASUREMENT,
    RATE_REQUEST_OPTION,
    REQUEST_ACTIONS,
    TRACK_REQUEST_OPTION,
    Resource,
    resolve_pickup_code,
)
from shipbridge.models import ConfirmedShipment, Location, Package, Shipment, is_blank
from shipbridge.models.package import AXES
from shipbridge.xml import XmlNode

SHIPPER = "Shipper"
SHIP_TO = "ShipTo"
SHIP_FROM = "ShipFrom"

_QUANTUM = Decimal(1).scaleb(-MEASUREMENT_DECIMALS)
_MIN_MEASUREMENT = Decimal(str(MIN_MEASUREMENT))


def digits_only(value: str | None) -> str:
    """Strip everything but digits from a phone or fax number."""
    if not value:
        return ""
    return re.sub(r"\D", "", value)


def format_measurement(value: float) -> str:
    """Round to 3 decimals and floor at 0.1.

    UPS rejects zero and negative measurements, so any value below the
    floor is sent as 0.1.

    Example:
        >>> format_measurement(12.34567)
        '12.346'
        >>> format_measurement(0)
        '0.1'
        >>> format_measurement(1e17)
        '100000000000000000.0'
    """
    rounded = Decimal(str(value)).quantize(_QUANTUM, rounding=ROUND_HALF_UP)
    text = format(max(rounded, _MIN_MEASUREMENT).normalize(), "f")
    return text if "." in text else f"{text}.0"


def is_imperial(origin: Location) -> bool:
    """True when shipments from ``origin`` are measured in inches/pounds."""
    return origin.country_code in IMPERIAL_COUNTRIES


def request_body(*documents: XmlNode) -> str:
    """Serialize and concatenate request documents."""
    return "\n".join(doc.to_xml() for doc in documents)


def _add_request_header(
    root: XmlNode,
    resource: Resource,
    option: str | None = None,
    customer_context: str | None = None,
) -> None:
    with root.child("Request") as request:
        request.add("RequestAction", REQUEST_ACTIONS[resource])
        if option is not None:
            request.add("RequestOption", option)
        if customer_context:
            with request.child("TransactionReference") as reference:
                reference.add("CustomerContext", customer_context)


def build_access_request(options: CarrierOptions) -> XmlNode:
    """Build the AccessRequest document with the account credentials."""
    root = XmlNode("AccessRequest")
    root.add("AccessLicenseNumber", options.key)
    root.add("UserId", options.login)
    root.add("Password", options.password)
    return root


def build_location_node(role: str, location: Location, account: str | None = None) -> XmlNode:
    """Build a Shipper, ShipTo or ShipFrom element.

    The shipping party's name goes in ``Name``; every other role uses
    ``CompanyName`` and may carry ``AttentionName``. ``account`` becomes
    ``ShipperNumber`` on the Shipper and ``ShipperAssignedIdentificationNumber``
    on the ShipTo; it is never attached to a ShipFrom.

    Blank fields produce no element. Addresses are sent as residential
    unless the location is asserted commercial.

    Args:
        role: One of SHIPPER, SHIP_TO, SHIP_FROM.
        location: Address to serialize.
        account: UPS account number for this party.

    Returns:
        The location element.
    """
    node = XmlNode(role)
    if not is_blank(location.name):
        if role == SHIPPER:
            node.add("Name", location.name)
        else:
            node.add("CompanyName", location.name)
            node.add_text("AttentionName", location.attention)

    node.add_text("PhoneNumber", digits_only(location.phone))
    node.add_text("FaxNumber", digits_only(location.fax))

    if role == SHIPPER:
        node.add_text("ShipperNumber", account)
    elif role == SHIP_TO:
        node.add_text("ShipperAssignedIdentificationNumber", account)

    with node.child("Address") as address:
        address.add_text("AddressLine1", location.address1)
        address.add_text("AddressLine2", location.address2)
        address.add_text("AddressLine3", location.address3)
        address.add_text("City", location.city)
        address.add_text("StateProvinceCode", location.province)
        address.add_text("PostalCode", location.postal_code)
        address.add_text("CountryCode", location.country_code)
        if not location.commercial:
            address.add("ResidentialAddressIndicator", True)
    return node


def build_package_node(
    package: Package,
    origin: Location,
    *,
    require_positive_dimensions: bool = False,
    include_description: bool = False,
) -> XmlNode:
    """Build a Package element in the origin country's units.

    Args:
        package: Parcel to serialize.
        origin: Ship-from address; selects imperial or metric units.
        require_positive_dimensions: Omit the Dimensions block unless every
            axis is strictly positive (label purchase requests).
        include_description: Emit the package Description when present.

    Returns:
        The Package element.
    """
    imperial = is_imperial(origin)
    node = XmlNode("Package")
    with node.child("PackagingType") as packaging_type:
        packaging_type.add("Code", DEFAULT_PACKAGING_CODE.value)
    if include_description:
        node.add_text("Description", package.description)

    values = [package.inches(axis) if imperial else package.cm(axis) for axis in AXES]
    if not require_positive_dimensions or all(v > 0 for v in values):
        with node.child("Dimensions") as dimensions:
            with dimensions.child("UnitOfMeasurement") as units:
                units.add("Code", IMPERIAL_DIMENSION_UNIT if imperial else METRIC_DIMENSION_UNIT)
            for axis, value in zip(AXES, values):
                dimensions.add(axis.capitalize(), format_measurement(value))

    with node.child("PackageWeight") as package_weight:
        with package_weight.child("UnitOfMeasurement") as units:
            units.add("Code", IMPERIAL_WEIGHT_UNIT if imperial else METRIC_WEIGHT_UNIT)
        weight = package.lbs() if imperial else package.kgs()
        package_weight.add("Weight", format_measurement(weight))
    return node


def build_rate_request(
    origin: Location,
    destination: Location,
    packages: Iterable[Package],
    options: CarrierOptions,
) -> XmlNode:
    """Build a RatingServiceSelectionRequest that shops every service.

    When ``options.shipper`` names a shipping party other than ``origin``,
    the shipper is sent as Shipper and the origin as ShipFrom.
    """
    root = XmlNode("RatingServiceSelectionRequest")
    _add_request_header(root, Resource.RATES, option=RATE_REQUEST_OPTION)
    with root.child("PickupType") as pickup_type:
        pickup_type.add("Code", resolve_pickup_code(options.pickup_type))

    shipper = options.shipper or origin
    with root.child("Shipment") as shipment:
        shipment.append(build_location_node(SHIPPER, shipper, options.origin_account))
        shipment.append(build_location_node(SHIP_TO, destination, options.destination_account))
        if options.shipper is not None and options.shipper != origin:
            shipment.append(build_location_node(SHIP_FROM, origin))
        for package in packages:
            shipment.append(build_package_node(package, origin))
    return root


def build_tracking_request(tracking_number: str) -> XmlNode:
    """Build a TrackRequest asking for all activity."""
    root = XmlNode("TrackRequest")
    _add_request_header(root, Resource.TRACK, option=TRACK_REQUEST_OPTION)
    root.add("TrackingNumber", str(tracking_number))
    return root


def build_shipment_confirm_request(shipment: Shipment) -> XmlNode:
    """Build a ShipmentConfirmRequest for label purchase.

    Billed to the payer's account under shipment-level prepaid terms.
    """
    root = XmlNode("ShipmentConfirmRequest")
    _add_request_header(
        root,
        Resource.SHIPMENT_CONFIRM,
        option=CONFIRM_REQUEST_OPTION,
        customer_context=shipment.number,
    )
    with root.child("LabelSpecification") as label_spec:
        with label_spec.child("LabelPrintMethod") as print_method:
            print_method.add("Code", DEFAULT_LABEL_FORMAT)
        with label_spec.child("LabelImageFormat") as image_format:
            image_format.add("Code", DEFAULT_LABEL_FORMAT)

    with root.child("Shipment") as node:
        node.append(build_location_node(SHIPPER, shipment.shipper, shipment.shipper.number))
        node.append(build_location_node(SHIP_TO, shipment.destination, shipment.destination.number))
        node.append(build_location_node(SHIP_FROM, shipment.origin))
        with node.child("PaymentInformation") as payment:
            with payment.child("Prepaid") as prepaid:
                with prepaid.child("BillShipper") as bill_shipper:
                    bill_shipper.add_text("AccountNumber", shipment.payer.number)
        with node.child("Service") as service:
            service.add("Code", shipment.service)
        for package in shipment.packages:
            node.append(
                build_package_node(
                    package,
                    shipment.origin,
                    require_positive_dimensions=True,
                    include_description=True,
                )
            )
    return root


def build_shipment_accept_request(confirmed: ConfirmedShipment) -> XmlNode:
    """Build a ShipmentAcceptRequest committing a confirmed shipment."""
    root = XmlNode("ShipmentAcceptRequest")
    _add_request_header(
        root,
        Resource.SHIPMENT_ACCEPT,
        customer_context=confirmed.shipment.number,
    )
    root.add("ShipmentDigest", confirmed.digest)
    return root
