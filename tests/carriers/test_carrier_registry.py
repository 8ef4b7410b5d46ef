"""Tests for carrier lookup by name."""

import pytest

from shipbridge.carriers import CARRIERS, UPS, BogusCarrier, get_carrier_class


@pytest.mark.parametrize(
    "name,expected",
    [("ups", UPS), ("UPS", UPS), ("bogus", BogusCarrier), ("Bogus Carrier", BogusCarrier)],
)
def test_get_carrier_class(name, expected):
    assert get_carrier_class(name) is expected


def test_unknown_carrier():
    with pytest.raises(KeyError, match="Unknown carrier"):
        get_carrier_class("pony express")


def test_registry_names():
    assert set(CARRIERS) == {"ups", "bogus"}
