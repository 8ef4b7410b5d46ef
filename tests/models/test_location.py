"""Tests for the Location value object."""

import pytest

from shipbridge.models import COMMERCIAL, RESIDENTIAL, Location, is_blank


class TestCountryCode:
    """country_code normalizes the free-form country field."""

    def test_upper_cases_two_letter_code(self):
        assert Location(country="us").country_code == "US"

    def test_blank_country_is_none(self):
        assert Location(country="  ").country_code is None
        assert Location().country_code is None


class TestAddressType:
    """Addresses are residential unless asserted commercial."""

    def test_unknown_type_is_not_commercial(self):
        location = Location(city="Ottawa")
        assert location.commercial is False
        assert location.residential is True

    def test_commercial(self):
        location = Location(address_type=COMMERCIAL)
        assert location.commercial is True
        assert location.residential is False

    def test_invalid_type_rejected(self):
        with pytest.raises(ValueError, match="address_type"):
            Location(address_type="warehouse")


class TestFromMapping:
    """Location.from_mapping accepts loosely keyed data."""

    def test_aliases(self):
        location = Location.from_mapping({
            "company": "Acme",
            "address": "1 Main St",
            "state": "NY",
            "zip": "10001",
            "country_code": "us",
            "account": "X9Y8Z7",
        })
        assert location.name == "Acme"
        assert location.address1 == "1 Main St"
        assert location.province == "NY"
        assert location.postal_code == "10001"
        assert location.country_code == "US"
        assert location.number == "X9Y8Z7"

    def test_commercial_flag(self):
        assert Location.from_mapping({"commercial": True}).address_type == COMMERCIAL
        assert Location.from_mapping({"residential": True}).address_type == RESIDENTIAL

    def test_unknown_keys_ignored(self):
        location = Location.from_mapping({"city": "Paris", "favourite_colour": "blue"})
        assert location.city == "Paris"

    def test_location_passes_through(self, beverly_hills):
        assert Location.from_mapping(beverly_hills) is beverly_hills


def test_is_blank():
    assert is_blank(None)
    assert is_blank("")
    assert is_blank("   ")
    assert not is_blank("x")
    assert not is_blank(0)
