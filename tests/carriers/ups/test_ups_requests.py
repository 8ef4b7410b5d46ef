"""Tests for UPS XML request builders."""

import pytest
import xmltodict

from shipbridge.carriers.base import CarrierOptions
from shipbridge.carriers.ups.requests import (
    SHIP_FROM,
    SHIP_TO,
    SHIPPER,
    build_access_request,
    build_location_node,
    build_package_node,
    build_rate_request,
    build_shipment_accept_request,
    build_shipment_confirm_request,
    build_tracking_request,
    digits_only,
    format_measurement,
    request_body,
)
from shipbridge.models import ConfirmedShipment, Location, Money, Package, Shipment


def _text(node, *path):
    for tag in path:
        node = node.find(tag)
        assert node is not None, f"missing {tag}"
    return node.text


class TestFormatting:

    @pytest.mark.parametrize(
        "value,expected",
        [
            (12.34567, "12.346"),
            (10, "10.0"),
            (0, "0.1"),
            (-4, "0.1"),
            (0.04, "0.1"),
            (0.1004, "0.1"),
            (7.5, "7.5"),
            (1e17, "100000000000000000.0"),
            (123456789.0004, "123456789.0"),
        ],
    )
    def test_format_measurement(self, value, expected):
        """Rounded to 3 decimals and floored at 0.1."""
        assert format_measurement(value) == expected

    def test_digits_only(self):
        assert digits_only("(310) 555-1212") == "3105551212"
        assert digits_only(None) == ""


class TestAccessRequest:

    def test_credentials_in_order(self):
        options = CarrierOptions(key="KEY", login="user", password="pw")
        node = build_access_request(options)
        assert [c.tag for c in node.children] == ["AccessLicenseNumber", "UserId", "Password"]
        assert _text(node, "Password") == "pw"

    def test_request_body_concatenates_documents(self):
        options = CarrierOptions(key="KEY", login="user", password="pw")
        body = request_body(build_access_request(options), build_tracking_request("1Z999"))
        assert body.count('<?xml version="1.0" encoding="utf-8"?>') == 2
        assert body.index("<AccessRequest>") < body.index("<TrackRequest>")


class TestLocationNode:

    def test_shipper_uses_name_and_shipper_number(self, atlanta_warehouse):
        node = build_location_node(SHIPPER, atlanta_warehouse, "A1B2C3")
        assert _text(node, "Name") == "Widget Warehouse"
        assert node.find("CompanyName") is None
        assert node.find("AttentionName") is None
        assert _text(node, "ShipperNumber") == "A1B2C3"

    def test_ship_to_uses_company_and_attention(self, atlanta_warehouse):
        node = build_location_node(SHIP_TO, atlanta_warehouse, "ACCT")
        assert _text(node, "CompanyName") == "Widget Warehouse"
        assert _text(node, "AttentionName") == "Shipping Dept"
        assert _text(node, "ShipperAssignedIdentificationNumber") == "ACCT"
        assert node.find("ShipperNumber") is None

    def test_ship_from_never_carries_account(self, atlanta_warehouse):
        node = build_location_node(SHIP_FROM, atlanta_warehouse, "ACCT")
        assert node.find("ShipperNumber") is None
        assert node.find("ShipperAssignedIdentificationNumber") is None

    def test_phone_and_fax_digits_only(self, atlanta_warehouse):
        node = build_location_node(SHIP_TO, atlanta_warehouse)
        assert _text(node, "PhoneNumber") == "4045550100"
        assert _text(node, "FaxNumber") == "4045550101"

    def test_blank_fields_omitted(self, ottawa):
        node = build_location_node(SHIP_TO, ottawa)
        assert node.find("PhoneNumber") is None
        assert node.find("FaxNumber") is None
        assert node.find("AttentionName") is None
        address = node.find("Address")
        assert address.find("AddressLine2") is None
        assert address.find("AddressLine3") is None

    def test_residential_unless_commercial(self, beverly_hills, atlanta_warehouse):
        residential = build_location_node(SHIP_TO, beverly_hills).find("Address")
        commercial = build_location_node(SHIP_TO, atlanta_warehouse).find("Address")
        assert _text(residential, "ResidentialAddressIndicator") == "true"
        assert commercial.find("ResidentialAddressIndicator") is None

    def test_unknown_address_type_is_residential(self):
        node = build_location_node(SHIP_TO, Location(city="Springfield", country="US"))
        assert node.find("Address").find("ResidentialAddressIndicator") is not None


class TestPackageNode:

    def test_imperial_origin_uses_inches_and_pounds(self, wii_package, atlanta_warehouse):
        node = build_package_node(wii_package, atlanta_warehouse)
        assert _text(node, "PackagingType", "Code") == "02"
        assert _text(node, "Dimensions", "UnitOfMeasurement", "Code") == "IN"
        assert _text(node, "Dimensions", "Length") == "15.0"
        assert _text(node, "Dimensions", "Height") == "4.5"
        assert _text(node, "PackageWeight", "UnitOfMeasurement", "Code") == "LBS"
        assert _text(node, "PackageWeight", "Weight") == "7.5"

    def test_metric_origin_converts_imperial_package(self, wii_package, ottawa):
        node = build_package_node(wii_package, ottawa)
        assert _text(node, "Dimensions", "UnitOfMeasurement", "Code") == "CM"
        assert _text(node, "Dimensions", "Length") == "38.1"
        assert _text(node, "PackageWeight", "UnitOfMeasurement", "Code") == "KGS"
        assert _text(node, "PackageWeight", "Weight") == "3.402"

    def test_zero_dimensions_floored_for_rates(self, atlanta_warehouse):
        node = build_package_node(Package(weight=0, units="imperial"), atlanta_warehouse)
        assert _text(node, "Dimensions", "Width") == "0.1"
        assert _text(node, "PackageWeight", "Weight") == "0.1"

    def test_label_requests_skip_non_positive_dimensions(self, atlanta_warehouse):
        package = Package(weight=16, dimensions=(10, 0, 5), units="imperial")
        node = build_package_node(package, atlanta_warehouse, require_positive_dimensions=True)
        assert node.find("Dimensions") is None
        assert node.find("PackageWeight") is not None

    def test_description_only_when_requested(self, wii_package, atlanta_warehouse):
        assert build_package_node(wii_package, atlanta_warehouse).find("Description") is None
        node = build_package_node(wii_package, atlanta_warehouse, include_description=True)
        assert _text(node, "Description") == "Game console"


class TestRateRequest:

    def test_structure(self, atlanta_warehouse, beverly_hills, wii_package, book_package):
        options = CarrierOptions(origin_account="A1B2C3", pickup_type="one_time_pickup")
        root = build_rate_request(atlanta_warehouse, beverly_hills, [wii_package, book_package], options)

        request = root.find("Request")
        assert [c.tag for c in request.children] == ["RequestAction", "RequestOption"]
        assert _text(request, "RequestAction") == "Rate"
        assert _text(request, "RequestOption") == "Shop"
        assert _text(root, "PickupType", "Code") == "06"

        shipment = root.find("Shipment")
        assert _text(shipment, "Shipper", "ShipperNumber") == "A1B2C3"
        assert shipment.find("ShipFrom") is None
        assert len(shipment.find_all("Package")) == 2

    def test_default_pickup_is_daily(self, atlanta_warehouse, beverly_hills, wii_package):
        root = build_rate_request(atlanta_warehouse, beverly_hills, [wii_package], CarrierOptions())
        assert _text(root, "PickupType", "Code") == "01"

    def test_distinct_shipper_adds_ship_from(self, atlanta_warehouse, beverly_hills, ottawa, wii_package):
        options = CarrierOptions(shipper=ottawa)
        root = build_rate_request(atlanta_warehouse, beverly_hills, [wii_package], options)
        shipment = root.find("Shipment")
        assert _text(shipment, "Shipper", "Name") == "Maple Outfitters"
        assert _text(shipment, "ShipFrom", "CompanyName") == "Widget Warehouse"

    def test_serializes_packages_consecutively(self, atlanta_warehouse, beverly_hills, wii_package, book_package):
        root = build_rate_request(atlanta_warehouse, beverly_hills, [wii_package, book_package], CarrierOptions())
        parsed = xmltodict.parse(root.to_xml())
        assert len(parsed["RatingServiceSelectionRequest"]["Shipment"]["Package"]) == 2


class TestTrackingRequest:

    def test_structure(self):
        root = build_tracking_request("1Z12345E0291980793")
        assert _text(root, "Request", "RequestAction") == "Track"
        assert _text(root, "Request", "RequestOption") == "1"
        assert _text(root, "TrackingNumber") == "1Z12345E0291980793"


class TestShipmentConfirmRequest:

    @pytest.fixture
    def shipment(self, atlanta_warehouse, beverly_hills, wii_package):
        return Shipment(
            shipper=atlanta_warehouse,
            origin=atlanta_warehouse,
            destination=beverly_hills,
            packages=[wii_package],
            number="ORDER-1001",
            service="02",
        )

    def test_header(self, shipment):
        request = build_shipment_confirm_request(shipment).find("Request")
        assert [c.tag for c in request.children] == [
            "RequestAction",
            "RequestOption",
            "TransactionReference",
        ]
        assert _text(request, "RequestAction") == "ShipConfirm"
        assert _text(request, "RequestOption") == "validate"
        assert _text(request, "TransactionReference", "CustomerContext") == "ORDER-1001"

    def test_label_specification(self, shipment):
        root = build_shipment_confirm_request(shipment)
        assert _text(root, "LabelSpecification", "LabelPrintMethod", "Code") == "GIF"
        assert _text(root, "LabelSpecification", "LabelImageFormat", "Code") == "GIF"

    def test_shipment_body(self, shipment):
        node = build_shipment_confirm_request(shipment).find("Shipment")
        assert [c.tag for c in node.children] == [
            "Shipper",
            "ShipTo",
            "ShipFrom",
            "PaymentInformation",
            "Service",
            "Package",
        ]
        assert _text(node, "Shipper", "ShipperNumber") == "A1B2C3"
        assert _text(node, "PaymentInformation", "Prepaid", "BillShipper", "AccountNumber") == "A1B2C3"
        assert _text(node, "Service", "Code") == "02"
        assert _text(node, "Package", "Description") == "Game console"

    def test_payer_account_billed(self, shipment, ottawa):
        payer = Location(name="Payer Co", country="US", number="PAYER1")
        shipment = Shipment(
            shipper=shipment.shipper,
            payer=payer,
            origin=shipment.origin,
            destination=ottawa,
            packages=shipment.packages,
        )
        node = build_shipment_confirm_request(shipment).find("Shipment")
        assert _text(node, "PaymentInformation", "Prepaid", "BillShipper", "AccountNumber") == "PAYER1"

    def test_no_reference_without_number(self, atlanta_warehouse, beverly_hills, wii_package):
        shipment = Shipment(
            shipper=atlanta_warehouse,
            origin=atlanta_warehouse,
            destination=beverly_hills,
            packages=[wii_package],
        )
        request = build_shipment_confirm_request(shipment).find("Request")
        assert request.find("TransactionReference") is None


class TestShipmentAcceptRequest:

    def test_structure(self, atlanta_warehouse, beverly_hills, wii_package):
        shipment = Shipment(
            shipper=atlanta_warehouse,
            origin=atlanta_warehouse,
            destination=beverly_hills,
            packages=[wii_package],
            number="ORDER-1001",
        )
        confirmed = ConfirmedShipment(shipment=shipment, price=Money("10.30", "USD"), digest="DIGEST")
        root = build_shipment_accept_request(confirmed)
        request = root.find("Request")
        assert _text(request, "RequestAction") == "ShipAccept"
        assert request.find("RequestOption") is None
        assert _text(request, "TransactionReference", "CustomerContext") == "ORDER-1001"
        assert _text(root, "ShipmentDigest") == "DIGEST"
