"""Tests for the stub carrier."""

from decimal import Decimal

from shipbridge.carriers import BogusCarrier
from shipbridge.models import ShipmentState


class TestBogusCarrier:

    def test_rates(self, atlanta_warehouse, beverly_hills, wii_package):
        response = BogusCarrier().find_rates(atlanta_warehouse, beverly_hills, wii_package)
        assert response.success is True
        (rate,) = response.rates
        assert rate.carrier == "Bogus Carrier"
        assert rate.service_name == "Carrier Pigeon"
        assert rate.service_code == "01"
        assert rate.total_price == Decimal("5.23")
        assert rate.currency == "USD"

    def test_tracking(self):
        response = BogusCarrier().find_tracking_info("123456789")
        assert response.tracking_number == "123456789"
        assert [e.name for e in response.shipment_events] == ["Delivered"]
        assert response.latest_event.time is not None

    def test_labels(self, atlanta_warehouse, beverly_hills, wii_package, book_package):
        result = BogusCarrier().buy_shipping_labels(
            atlanta_warehouse, atlanta_warehouse, beverly_hills, [wii_package, book_package]
        )
        assert result.state is ShipmentState.ACCEPTED
        assert len(result.tracking) == 9
        assert result.tracking.isdigit()
        assert [label.tracking for label in result.labels] == [result.tracking] * 2

    def test_needs_no_credentials(self):
        assert BogusCarrier().valid_credentials() is True
