"""Physical parcel with unit-converted accessors.

Weights are stored in grams (metric) or ounces (imperial) and dimensions in
centimetres or inches, matching how carriers quote parcels. Converting to
the unit a carrier wants is the package's job; request builders only pick
the unit and format the number.
"""

from dataclasses import dataclass
from typing import Literal

METRIC = "metric"
IMPERIAL = "imperial"

CM_PER_INCH = 2.54
GRAMS_PER_OUNCE = 28.349523125
OUNCES_PER_POUND = 16
GRAMS_PER_KILOGRAM = 1000

AXES = ("length", "width", "height")

Axis = Literal["length", "width", "height"]


@dataclass(frozen=True)
class Package:
    """A parcel to rate or ship.

    Attributes:
        weight: Grams when ``units`` is metric, ounces when imperial.
        dimensions: (length, width, height) in cm or inches. Missing axes
            count as zero.
        units: "metric" or "imperial".
        description: Free-text contents description.
    """

    weight: float
    dimensions: tuple[float, ...] = ()
    units: str = METRIC
    description: str | None = None

    def __post_init__(self) -> None:
        if self.units not in (METRIC, IMPERIAL):
            raise ValueError(f"units must be {METRIC!r} or {IMPERIAL!r}, got {self.units!r}")
        dims = tuple(float(d) for d in self.dimensions)[:3]
        object.__setattr__(self, "dimensions", dims + (0.0,) * (3 - len(dims)))
        object.__setattr__(self, "weight", float(self.weight))

    @property
    def imperial(self) -> bool:
        return self.units == IMPERIAL

    def _axis_value(self, axis: Axis) -> float:
        try:
            return self.dimensions[AXES.index(axis)]
        except ValueError:
            raise ValueError(f"Unknown axis {axis!r}; expected one of {AXES}") from None

    def inches(self, axis: Axis) -> float:
        value = self._axis_value(axis)
        return value if self.imperial else value / CM_PER_INCH

    def cm(self, axis: Axis) -> float:
        value = self._axis_value(axis)
        return value * CM_PER_INCH if self.imperial else value

    def ounces(self) -> float:
        return self.weight if self.imperial else self.weight / GRAMS_PER_OUNCE

    def grams(self) -> float:
        return self.weight * GRAMS_PER_OUNCE if self.imperial else self.weight

    def lbs(self) -> float:
        return self.ounces() / OUNCES_PER_POUND

    def kgs(self) -> float:
        return self.grams() / GRAMS_PER_KILOGRAM
