"""Canonical UPS XML API constants.

Single source of truth for endpoints, request codes, unit selection and
label defaults. Request builders and parsers import from here instead of
using inline magic strings.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping


# ---------------------------------------------------------------------------
# Carrier identity
# ---------------------------------------------------------------------------

UPS_CARRIER_NAME = "UPS"
UPS_HOME_COUNTRY = "US"

# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

TEST_URL = "https://wwwcie.ups.com"
LIVE_URL = "https://www.ups.com"


class Resource(str, Enum):
    """URL suffixes for each XML API action."""

    RATES = "ups.app/xml/Rate"
    TRACK = "ups.app/xml/Track"
    SHIPMENT_CONFIRM = "ups.app/xml/ShipConfirm"
    SHIPMENT_ACCEPT = "ups.app/xml/ShipAccept"


def resource_url(resource: Resource, test: bool = False) -> str:
    """Return the full URL for ``resource`` on the test or live host."""
    return f"{TEST_URL if test else LIVE_URL}/{resource.value}"


# ---------------------------------------------------------------------------
# Response status
# ---------------------------------------------------------------------------

SUCCESS_STATUS_CODE = "1"

# ---------------------------------------------------------------------------
# Pickup codes
# ---------------------------------------------------------------------------


class PickupCode(str, Enum):
    """UPS PickupType codes used when rating."""

    DAILY_PICKUP = "01"
    CUSTOMER_COUNTER = "03"
    ONE_TIME_PICKUP = "06"
    ON_CALL_AIR = "07"
    SUGGESTED_RETAIL_RATES = "11"
    LETTER_CENTER = "19"
    AIR_SERVICE_CENTER = "20"


DEFAULT_PICKUP_CODE = PickupCode.DAILY_PICKUP


def resolve_pickup_code(raw_value: str | None) -> str:
    """Resolve a pickup type to its UPS code.

    Accepts a numeric code ("06") or a name ("one_time_pickup",
    "One Time Pickup"). Blank or unknown values give daily pickup.
    """
    if not raw_value:
        return DEFAULT_PICKUP_CODE.value
    stripped = raw_value.strip()
    if stripped in {code.value for code in PickupCode}:
        return stripped
    member = PickupCode.__members__.get(stripped.upper().replace(" ", "_"))
    return member.value if member else DEFAULT_PICKUP_CODE.value


# ---------------------------------------------------------------------------
# Packaging
# ---------------------------------------------------------------------------


class PackagingCode(str, Enum):
    """UPS PackagingType codes."""

    LETTER = "01"
    CUSTOMER_SUPPLIED = "02"
    TUBE = "03"
    PAK = "04"
    EXPRESS_BOX = "21"


DEFAULT_PACKAGING_CODE = PackagingCode.CUSTOMER_SUPPLIED

# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------

# Origin countries whose shipments are measured in inches and pounds
IMPERIAL_COUNTRIES: frozenset[str] = frozenset({"US", "LR", "MM"})

IMPERIAL_DIMENSION_UNIT = "IN"
METRIC_DIMENSION_UNIT = "CM"
IMPERIAL_WEIGHT_UNIT = "LBS"
METRIC_WEIGHT_UNIT = "KGS"

MIN_MEASUREMENT = 0.1
MEASUREMENT_DECIMALS = 3

# ---------------------------------------------------------------------------
# Label specification
# ---------------------------------------------------------------------------

DEFAULT_LABEL_FORMAT = "GIF"

# ---------------------------------------------------------------------------
# Request option values
# ---------------------------------------------------------------------------

RATE_REQUEST_OPTION = "Shop"
TRACK_REQUEST_OPTION = "1"  # all activity
CONFIRM_REQUEST_OPTION = "validate"

REQUEST_ACTIONS: Mapping[Resource, str] = MappingProxyType({
    Resource.RATES: "Rate",
    Resource.TRACK: "Track",
    Resource.SHIPMENT_CONFIRM: "ShipConfirm",
    Resource.SHIPMENT_ACCEPT: "ShipAccept",
})
