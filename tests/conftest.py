"""Root-level pytest fixtures for all tests.

Provides shared fixtures:
- Sample locations and packages
- Canned UPS XML replies
- A mock transport recording every POST
"""

from unittest.mock import MagicMock

import pytest

from shipbridge.models import COMMERCIAL, Location, Package
from tests.helpers.ups_replies import (
    ACCEPT_SUCCESS_XML,
    CONFIRM_SUCCESS_XML,
    RATE_SUCCESS_XML,
    TRACK_SUCCESS_XML,
)


# ============================================================================
# Pytest Markers
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests requiring live carrier credentials"
    )


# ============================================================================
# Locations and packages
# ============================================================================


@pytest.fixture
def beverly_hills() -> Location:
    """US residential destination."""
    return Location(
        name="Bob Bobsen",
        phone="(310) 555-1212",
        address1="455 N. Rexford Dr.",
        address2="3rd Floor",
        city="Beverly Hills",
        province="CA",
        postal_code="90210",
        country="US",
    )


@pytest.fixture
def atlanta_warehouse() -> Location:
    """US commercial origin with a shipper number."""
    return Location(
        name="Widget Warehouse",
        attention="Shipping Dept",
        phone="404-555-0100",
        fax="404.555.0101",
        address1="1 Peachtree St",
        city="Atlanta",
        province="GA",
        postal_code="30303",
        country="US",
        number="A1B2C3",
        address_type=COMMERCIAL,
    )


@pytest.fixture
def ottawa() -> Location:
    return Location(
        name="Maple Outfitters",
        address1="110 Laurier Ave W",
        city="Ottawa",
        province="ON",
        postal_code="K1P 1J1",
        country="CA",
    )


@pytest.fixture
def london() -> Location:
    return Location(
        name="Tea Merchants",
        address1="10 Downing St",
        city="London",
        postal_code="SW1A 2AA",
        country="GB",
    )


@pytest.fixture
def wii_package() -> Package:
    """Imperial package: 7.5 lb, 15 x 10 x 4.5 in."""
    return Package(weight=120, dimensions=(15, 10, 4.5), units="imperial", description="Game console")


@pytest.fixture
def book_package() -> Package:
    """Metric package: 250 g, 20 x 15 x 2 cm."""
    return Package(weight=250, dimensions=(20, 15, 2), description="Paperback")


# ============================================================================
# Transport
# ============================================================================


@pytest.fixture
def mock_transport() -> MagicMock:
    """Transport whose ``post`` replies are set per test via side_effect/return_value."""
    transport = MagicMock()
    transport.post = MagicMock()
    return transport


# ============================================================================
# Canned UPS replies (see tests/helpers/ups_replies.py)
# ============================================================================


@pytest.fixture
def rate_success_xml() -> str:
    return RATE_SUCCESS_XML


@pytest.fixture
def track_success_xml() -> str:
    return TRACK_SUCCESS_XML


@pytest.fixture
def confirm_success_xml() -> str:
    return CONFIRM_SUCCESS_XML


@pytest.fixture
def accept_success_xml() -> str:
    return ACCEPT_SUCCESS_XML
