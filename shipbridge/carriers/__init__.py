"""Carrier implementations and lookup by name.

Example:
    carrier_class = get_carrier_class("ups")
    carrier = carrier_class(key="...", login="...", password="...")
"""

from shipbridge.carriers.base import Carrier, CarrierOptions
from shipbridge.carriers.bogus import BogusCarrier
from shipbridge.carriers.ups import UPS

CARRIERS: dict[str, type[Carrier]] = {
    "ups": UPS,
    "bogus": BogusCarrier,
}


def get_carrier_class(name: str) -> type[Carrier]:
    """Look up a carrier class by registry key or display name.

    Raises:
        KeyError: If no carrier matches.
    """
    key = name.strip().lower()
    if key in CARRIERS:
        return CARRIERS[key]
    for carrier_class in CARRIERS.values():
        if carrier_class.name.lower() == key:
            return carrier_class
    raise KeyError(f"Unknown carrier: {name!r}. Known carriers: {', '.join(sorted(CARRIERS))}")


__all__ = [
    "CARRIERS",
    "BogusCarrier",
    "Carrier",
    "CarrierOptions",
    "UPS",
    "get_carrier_class",
]
