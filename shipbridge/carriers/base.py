"""Abstract base class for all carriers.

Each carrier turns the shared domain model (Location, Package) into its own
wire format and parses replies back into RateResponse, TrackingResponse and
shipment results. Carrier identity and default options live on the
instance, so two differently configured carriers of the same type can
coexist in one process.

Business failures reported by the carrier never raise; they come back as
``success=False`` responses or a FailedShipment. Only transport failures
and malformed replies raise.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict

from shipbridge.models import (
    Location,
    Money,
    Package,
    RateResponse,
    ShipmentResult,
    TrackingResponse,
)
from shipbridge.transport import PostFunction, Transport, as_transport


class CarrierOptions(BaseModel):
    """Options recognized by carriers.

    Credentials (``key``, ``login``, ``password``) are embedded verbatim in
    requests. The remaining fields tune individual operations and can be
    given per call to override instance defaults.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid", coerce_numbers_to_str=True)

    key: str | None = None
    login: str | None = None
    password: str | None = None
    origin_account: str | None = None
    destination_account: str | None = None
    shipper: Location | None = None
    payer: Location | None = None
    expected_price: Money | Decimal | None = None
    price_epsilon: Money | Decimal | None = None
    shipment_number: str | None = None
    service: str | None = None
    pickup_type: str | None = None
    log_xml: bool = False
    test: bool = False


class Carrier(ABC):
    """Abstract base class for carriers.

    Concrete implementations must provide:
    - find_rates: quote every service for a shipment
    - find_tracking_info: tracking history for a tracking number
    - buy_shipping_labels: purchase labels, returning a terminal shipment state

    Example:
        carrier = UPS(key="...", login="...", password="...", test=True)
        response = carrier.find_rates(origin, destination, [package])
        if response.success:
            for rate in response.rates:
                print(rate.service_name, rate.total_price)
    """

    name = "Carrier"

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        transport: Transport | PostFunction | None = None,
        name: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize with default options.

        Args:
            options: Default options applied to every call.
            transport: Object with ``post(url, body)`` or a bare function.
                Defaults to an httpx transport created on first use.
            name: Display name overriding the class default.
            **kwargs: Further default options, merged over ``options``.
        """
        self.name = name or type(self).name
        self._options = CarrierOptions.model_validate({**(options or {}), **kwargs})
        self._transport = as_transport(transport) if transport is not None else None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    @property
    def options(self) -> CarrierOptions:
        return self._options

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = as_transport(None)
        return self._transport

    def merged_options(self, overrides: Mapping[str, Any] | None = None) -> CarrierOptions:
        """Return instance options with per-call ``overrides`` applied."""
        if not overrides:
            return self._options
        base = {k: getattr(self._options, k) for k in self._options.model_fields_set}
        return CarrierOptions.model_validate({**base, **overrides})

    def requirements(self) -> frozenset[str]:
        """Names of options that must be set before the carrier is usable."""
        return frozenset()

    def missing_credentials(self) -> list[str]:
        return sorted(
            name for name in self.requirements()
            if not getattr(self._options, name, None)
        )

    def valid_credentials(self) -> bool:
        return not self.missing_credentials()

    @abstractmethod
    def find_rates(
        self,
        origin: Location,
        destination: Location,
        packages: Package | Iterable[Package],
        options: Mapping[str, Any] | None = None,
    ) -> RateResponse:
        """Quote available services from ``origin`` to ``destination``."""
        ...

    @abstractmethod
    def find_tracking_info(
        self,
        tracking_number: str,
        options: Mapping[str, Any] | None = None,
    ) -> TrackingResponse:
        """Fetch tracking history for ``tracking_number``."""
        ...

    @abstractmethod
    def buy_shipping_labels(
        self,
        shipper: Location,
        origin: Location,
        destination: Location,
        packages: Package | Iterable[Package],
        options: Mapping[str, Any] | None = None,
    ) -> ShipmentResult:
        """Purchase labels, returning an accepted, rejected or failed shipment."""
        ...


def as_package_tuple(packages: Package | Iterable[Package]) -> tuple[Package, ...]:
    """Normalize a single package or an iterable of packages to a tuple."""
    if isinstance(packages, Package):
        return (packages,)
    result = tuple(packages)
    for package in result:
        if not isinstance(package, Package):
            raise TypeError(f"Expected Package, got {type(package).__name__}")
    return result
