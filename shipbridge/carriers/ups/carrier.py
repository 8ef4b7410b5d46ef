"""UPS carrier over the legacy XML API (Rate, Track, ShipConfirm, ShipAccept).

Example:
    ups = UPS(key="...", login="...", password="...", test=True)
    rates = ups.find_rates(origin, destination, [package])
    result = ups.buy_shipping_labels(
        shipper, origin, destination, [package],
        {"service": "01", "expected_price": "42.10", "price_epsilon": "0.50"},
    )
    if result.state is ShipmentState.ACCEPTED:
        save(result.labels)
"""

import dataclasses
import logging
from typing import Any, Iterable, Mapping

from shipbridge.carriers.base import Carrier, CarrierOptions, as_package_tuple
from shipbridge.carriers.ups.constants import UPS_CARRIER_NAME, Resource, resource_url
from shipbridge.carriers.ups.requests import (
    build_access_request,
    build_rate_request,
    build_shipment_accept_request,
    build_shipment_confirm_request,
    build_tracking_request,
    request_body,
)
from shipbridge.carriers.ups.responses import (
    parse_rate_response,
    parse_shipment_accept,
    parse_shipment_confirm,
    parse_tracking_response,
)
from shipbridge.carriers.ups.service_codes import resolve_service_code
from shipbridge.errors import AcceptOutcomeUnknownError, CarrierTransportError
from shipbridge.models import (
    ConfirmedShipment,
    FailedShipment,
    Location,
    Money,
    Package,
    RateResponse,
    RejectedShipment,
    Shipment,
    ShipmentResult,
    TrackingResponse,
)
from shipbridge.utils.redaction import redact_xml
from shipbridge.xml import XmlNode

logger = logging.getLogger(__name__)


class UPS(Carrier):
    """UPS carrier.

    Requires ``key`` (access license number), ``login`` and ``password``.
    Holds no state between calls beyond its options.
    """

    name = UPS_CARRIER_NAME

    def requirements(self) -> frozenset[str]:
        return frozenset({"key", "login", "password"})

    # ── Public operations ─────────────────────────────────────────────

    def find_rates(
        self,
        origin: Location,
        destination: Location,
        packages: Package | Iterable[Package],
        options: Mapping[str, Any] | None = None,
    ) -> RateResponse:
        """Shop every UPS service for the shipment.

        Args:
            origin: Ship-from address. Its country picks the units and the
                service names.
            destination: Ship-to address.
            packages: One package or several.
            options: Per-call overrides (``shipper``, ``origin_account``,
                ``destination_account``, ``pickup_type``, ``test``, ``log_xml``).

        Returns:
            RateResponse with one RateEstimate per quoted service, or
            ``success=False`` with the carrier's message.

        Raises:
            CarrierTransportError: On network failure.
            MalformedResponseError: If the reply cannot be parsed.
        """
        opts = self.merged_options(options)
        packages = as_package_tuple(packages)
        request = build_rate_request(origin, destination, packages, opts)
        body, xml = self._commit(Resource.RATES, request, opts)
        response = parse_rate_response(xml, origin, destination, packages, self.name)
        if not response.success:
            logger.warning("UPS rate request failed: %s", response.message)
        return self._with_debug(response, body, xml, opts)

    def find_tracking_info(
        self,
        tracking_number: str,
        options: Mapping[str, Any] | None = None,
    ) -> TrackingResponse:
        """Fetch all activity for a tracking number.

        Raises:
            CarrierTransportError: On network failure.
            MalformedResponseError: If a successful reply has no shipment.
        """
        opts = self.merged_options(options)
        request = build_tracking_request(tracking_number)
        body, xml = self._commit(Resource.TRACK, request, opts)
        response = parse_tracking_response(xml)
        if not response.success:
            logger.warning("UPS tracking for %s failed: %s", tracking_number, response.message)
        return self._with_debug(response, body, xml, opts)

    def buy_shipping_labels(
        self,
        shipper: Location,
        origin: Location,
        destination: Location,
        packages: Package | Iterable[Package],
        options: Mapping[str, Any] | None = None,
    ) -> ShipmentResult:
        """Purchase labels with the confirm, price-check, accept sequence.

        1. ShipConfirm quotes a price and returns a digest.
        2. If ``expected_price`` is set and the quote exceeds it by more than
           ``price_epsilon``, stop with a RejectedShipment.
        3. ShipAccept commits the digest and returns tracking and labels.

        Args:
            shipper: Account owner; its ``number`` is the shipper number.
            origin: Ship-from address.
            destination: Ship-to address.
            packages: One package or several.
            options: ``service`` (default "03" Ground), ``payer`` (default
                shipper), ``shipment_number``, ``expected_price``,
                ``price_epsilon``, ``test``, ``log_xml``.

        Returns:
            AcceptedShipment, RejectedShipment or FailedShipment.

        Raises:
            CarrierTransportError: If confirm could not be sent or the
                accept request certainly never left.
            AcceptOutcomeUnknownError: If the accept request failed after it
                may have reached UPS. Never retried automatically.
            MalformedResponseError: If a reply cannot be parsed.
        """
        opts = self.merged_options(options)
        shipment = Shipment(
            shipper=shipper,
            payer=opts.payer or shipper,
            origin=origin,
            destination=destination,
            packages=as_package_tuple(packages),
            number=opts.shipment_number,
            service=resolve_service_code(opts.service),
        )

        confirmed = self.confirm_shipment(shipment, opts)
        if isinstance(confirmed, FailedShipment):
            return confirmed

        rejected = self.check_price(confirmed, opts)
        if rejected is not None:
            return rejected

        return self.accept_shipment(confirmed, opts)

    # ── Label purchase steps ──────────────────────────────────────────

    def confirm_shipment(
        self,
        shipment: Shipment,
        options: CarrierOptions | Mapping[str, Any] | None = None,
    ) -> ConfirmedShipment | FailedShipment:
        """Send ShipConfirm. Safe to retry: nothing is purchased."""
        opts = self._resolve(options)
        _body, xml = self._commit(
            Resource.SHIPMENT_CONFIRM, build_shipment_confirm_request(shipment), opts
        )
        result = parse_shipment_confirm(xml, shipment)
        if isinstance(result, FailedShipment):
            logger.warning("UPS shipment confirm failed: %s", result.errors)
        else:
            logger.info("UPS confirmed shipment at %s", result.price)
        return result

    def check_price(
        self,
        confirmed: ConfirmedShipment,
        options: CarrierOptions | Mapping[str, Any] | None = None,
    ) -> RejectedShipment | None:
        """Return a RejectedShipment when the quote is over the tolerated price.

        The quote passes when no expected price is set, or when
        ``quoted - expected <= epsilon``. Bare numbers are read in the quote's
        currency.
        """
        opts = self._resolve(options)
        if opts.expected_price is None:
            return None

        currency = confirmed.price.currency
        expected = Money.parse(opts.expected_price, currency)
        epsilon = Money.parse(opts.price_epsilon if opts.price_epsilon is not None else 0, currency)
        if expected.currency != currency or epsilon.currency != currency:
            logger.warning(
                "UPS quote currency %s does not match expected price %s; not accepting",
                currency,
                expected,
            )
            return RejectedShipment(confirmed=confirmed, expected_price=expected, price_epsilon=epsilon)

        if confirmed.price - expected <= epsilon:
            return None
        logger.warning(
            "UPS quote %s exceeds expected %s by more than %s; not accepting",
            confirmed.price,
            expected,
            epsilon,
        )
        return RejectedShipment(confirmed=confirmed, expected_price=expected, price_epsilon=epsilon)

    def accept_shipment(
        self,
        confirmed: ConfirmedShipment,
        options: CarrierOptions | Mapping[str, Any] | None = None,
    ) -> ShipmentResult:
        """Send ShipAccept for a confirmed shipment. Never retried.

        Raises:
            AcceptOutcomeUnknownError: If the request may have reached UPS
                before the transport failed.
        """
        opts = self._resolve(options)
        try:
            _body, xml = self._commit(
                Resource.SHIPMENT_ACCEPT, build_shipment_accept_request(confirmed), opts
            )
        except CarrierTransportError as e:
            if not e.reached_carrier:
                raise
            logger.error("UPS accept outcome unknown for digest %s: %s", confirmed.digest, e)
            raise AcceptOutcomeUnknownError.from_code(
                "E-3007",
                carrier=self.name,
                reason=e.message,
                confirmed=confirmed,
                details=e.details,
            ) from e

        result = parse_shipment_accept(xml, confirmed)
        if isinstance(result, FailedShipment):
            logger.warning("UPS shipment accept failed: %s", result.errors)
        else:
            logger.info("UPS accepted shipment %s at %s", result.tracking, result.price)
        return result

    # ── Transport ─────────────────────────────────────────────────────

    def _resolve(self, options: CarrierOptions | Mapping[str, Any] | None) -> CarrierOptions:
        if isinstance(options, CarrierOptions):
            return options
        return self.merged_options(options)

    def _commit(self, resource: Resource, request: XmlNode, opts: CarrierOptions) -> tuple[str, str]:
        """POST access + action documents and return (request body, reply)."""
        url = resource_url(resource, test=opts.test)
        body = request_body(build_access_request(opts), request)
        logger.info("UPS %s request to %s", resource.name.lower(), url)
        if opts.log_xml:
            logger.debug("UPS %s request XML:\n%s", resource.name.lower(), redact_xml(body))
        xml = self.transport.post(url, body)
        if opts.log_xml:
            logger.debug("UPS %s response XML:\n%s", resource.name.lower(), xml)
        return body, xml

    @staticmethod
    def _with_debug(response, body: str, xml: str, opts: CarrierOptions):
        """Attach raw request/response XML when ``log_xml`` is set."""
        if not opts.log_xml:
            return response
        return dataclasses.replace(response, xml=xml, request=redact_xml(body))
