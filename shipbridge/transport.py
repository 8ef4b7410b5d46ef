"""Synchronous HTTP transport for carrier requests.

Carriers only need ``post(url, body) -> str``. Any object with that method,
or a plain function with that signature, can stand in for the default
httpx-backed implementation (tests pass a MagicMock).

No retries are attempted. Whether a failed request may be repeated depends
on the carrier action (a label accept may already have charged the
account), so the caller decides.
"""

import logging
from typing import Callable, Protocol, Union

import httpx

from shipbridge.errors.domain import CarrierTransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
REQUEST_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Transport(Protocol):
    """Transport contract used by carriers."""

    def post(self, url: str, body: str) -> str:
        """POST ``body`` to ``url`` and return the response text.

        Raises:
            CarrierTransportError: On network failure or non-2xx status.
        """


PostFunction = Callable[[str, str], str]


class FunctionTransport:
    """Adapts a bare ``post(url, body)`` function to the Transport contract."""

    def __init__(self, post: PostFunction) -> None:
        self._post = post

    def post(self, url: str, body: str) -> str:
        return self._post(url, body)


class HttpxTransport:
    """Transport over a shared ``httpx.Client``.

    Example:
        with HttpxTransport(timeout=15.0) as transport:
            carrier = UPS(transport=transport, key=..., login=..., password=...)
            carrier.find_rates(origin, destination, packages)
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client or httpx.Client(timeout=timeout)
        self._owns_client = client is None

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def post(self, url: str, body: str) -> str:
        """POST an XML body and return the decoded response text.

        Raises:
            CarrierTransportError: ``reached_carrier`` is False only for
                connection failures, where the request never left.
        """
        try:
            resp = self._client.post(
                url,
                content=body.encode("utf-8"),
                headers={"Content-Type": REQUEST_CONTENT_TYPE},
            )
        except httpx.ConnectError as e:
            raise CarrierTransportError.from_code(
                "E-3001",
                carrier=_host(url),
                action="POST",
                reason=str(e),
                reached_carrier=False,
                details={"url": url},
            ) from e
        except httpx.HTTPError as e:
            raise CarrierTransportError.from_code(
                "E-3001",
                carrier=_host(url),
                action="POST",
                reason=f"{type(e).__name__}: {e}",
                details={"url": url},
            ) from e

        if resp.status_code >= 300:
            logger.warning("Carrier endpoint %s returned HTTP %s", url, resp.status_code)
            raise CarrierTransportError.from_code(
                "E-3001",
                carrier=_host(url),
                action="POST",
                reason=f"HTTP {resp.status_code}",
                details={"url": url, "status_code": resp.status_code, "body": resp.text[:500]},
            )
        return resp.text


def as_transport(transport: Union[Transport, PostFunction, None]) -> Transport:
    """Return a Transport for an object, a bare function, or None (httpx)."""
    if transport is None:
        return HttpxTransport()
    if hasattr(transport, "post"):
        return transport
    if callable(transport):
        return FunctionTransport(transport)
    raise TypeError(f"Expected a transport or post function, got {type(transport).__name__}")


def _host(url: str) -> str:
    return httpx.URL(url).host or url
