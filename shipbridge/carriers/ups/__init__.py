"""UPS XML API carrier."""

from shipbridge.carriers.ups.carrier import UPS

__all__ = ["UPS"]
