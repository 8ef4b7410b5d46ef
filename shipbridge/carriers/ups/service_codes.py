"""Canonical UPS service code definitions.

The same service code names a different product depending on where the
shipment starts: "07" is "UPS Worldwide Express" from the US but
"UPS Express" from Canada. Names are resolved from the origin country
through regional tables, falling back to the US (default) table.

All tables are read-only mappings built at import time.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from shipbridge.carriers.ups.constants import UPS_HOME_COUNTRY


class ServiceCode(str, Enum):
    """UPS service codes for shipping services."""

    NEXT_DAY_AIR = "01"
    SECOND_DAY_AIR = "02"
    GROUND = "03"
    WORLDWIDE_EXPRESS = "07"
    WORLDWIDE_EXPEDITED = "08"
    UPS_STANDARD = "11"
    THREE_DAY_SELECT = "12"
    NEXT_DAY_AIR_SAVER = "13"
    NEXT_DAY_AIR_EARLY = "14"
    WORLDWIDE_EXPRESS_PLUS = "54"
    SECOND_DAY_AIR_AM = "59"
    SAVER = "65"
    TODAY_STANDARD = "82"
    TODAY_DEDICATED_COURIER = "83"
    TODAY_INTERCITY = "84"
    TODAY_EXPRESS = "85"
    TODAY_EXPRESS_SAVER = "86"


DEFAULT_SERVICE = ServiceCode.GROUND

# Display names for US-origin shipments, and the final fallback everywhere
DEFAULT_SERVICES: Mapping[str, str] = MappingProxyType({
    "01": "UPS Next Day Air",
    "02": "UPS Second Day Air",
    "03": "UPS Ground",
    "07": "UPS Worldwide Express",
    "08": "UPS Worldwide Expedited",
    "11": "UPS Standard",
    "12": "UPS Three-Day Select",
    "13": "UPS Next Day Air Saver",
    "14": "UPS Next Day Air Early A.M.",
    "54": "UPS Worldwide Express Plus",
    "59": "UPS Second Day Air A.M.",
    "65": "UPS Saver",
    "82": "UPS Today Standard",
    "83": "UPS Today Dedicated Courier",
    "84": "UPS Today Intercity",
    "85": "UPS Today Express",
    "86": "UPS Today Express Saver",
})

CANADA_ORIGIN_SERVICES: Mapping[str, str] = MappingProxyType({
    "01": "UPS Express",
    "02": "UPS Expedited",
    "14": "UPS Express Early A.M.",
})

MEXICO_ORIGIN_SERVICES: Mapping[str, str] = MappingProxyType({
    "07": "UPS Express",
    "08": "UPS Expedited",
    "54": "UPS Express Plus",
})

EU_ORIGIN_SERVICES: Mapping[str, str] = MappingProxyType({
    "07": "UPS Express",
    "08": "UPS Expedited",
})

OTHER_NON_US_ORIGIN_SERVICES: Mapping[str, str] = MappingProxyType({
    "07": "UPS Express",
})

# Origins served by the EU-origin service names. Includes GB, which UPS
# still names with the EU table.
EU_ORIGIN_COUNTRY_CODES: frozenset[str] = frozenset({
    "GB", "AT", "BE", "BG", "CY", "CZ", "DK", "EE", "FI", "FR",
    "DE", "GR", "HU", "IE", "IT", "LV", "LT", "LU", "MT", "NL",
    "PL", "PT", "RO", "SK", "SI", "ES", "SE",
})


def regional_services(origin_country: str | None) -> Mapping[str, str] | None:
    """Return the regional service table for an origin country, if any."""
    if origin_country == "CA":
        return CANADA_ORIGIN_SERVICES
    if origin_country == "MX":
        return MEXICO_ORIGIN_SERVICES
    if origin_country in EU_ORIGIN_COUNTRY_CODES:
        return EU_ORIGIN_SERVICES
    return None


def service_name_for(origin_country: str | None, code: str | None) -> str | None:
    """Resolve a service code to its display name for an origin country.

    Resolution order, first match wins:
    1. Canada, Mexico or EU origin: the regional table.
    2. Any origin other than the US: the generic non-US table.
    3. The default (US) table.

    Args:
        origin_country: 2-letter origin country code (None when unknown).
        code: UPS service code (e.g., "07").

    Returns:
        Display name, or None when no applicable table knows the code.
    """
    if not code:
        return None
    origin_country = origin_country.upper() if origin_country else None

    regional = regional_services(origin_country)
    name = regional.get(code) if regional is not None else None
    if name is None and origin_country != UPS_HOME_COUNTRY:
        name = OTHER_NON_US_ORIGIN_SERVICES.get(code)
    if name is None:
        name = DEFAULT_SERVICES.get(code)
    return name


def resolve_service_code(raw_value: str | None, default: str = DEFAULT_SERVICE.value) -> str:
    """Resolve a service value to a UPS service code.

    Accepts a numeric code ("01") or a ServiceCode member name
    ("next_day_air", "Next Day Air"). Blank values give ``default``; unknown
    values are passed through unchanged so the carrier can reject them.
    """
    if not raw_value:
        return default
    stripped = raw_value.strip()
    if stripped.isdigit():
        return stripped.zfill(2)
    member = ServiceCode.__members__.get(stripped.upper().replace(" ", "_").replace("-", "_"))
    return member.value if member else stripped
