"""Tests for the httpx-backed transport."""

import httpx
import pytest

from shipbridge.errors import CarrierTransportError
from shipbridge.transport import (
    REQUEST_CONTENT_TYPE,
    FunctionTransport,
    HttpxTransport,
    as_transport,
)

URL = "https://wwwcie.ups.com/ups.app/xml/Track"


def _transport(handler) -> HttpxTransport:
    return HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestHttpxTransport:

    def test_posts_body_and_returns_text(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["content_type"] = request.headers["Content-Type"]
            seen["body"] = request.content.decode("utf-8")
            return httpx.Response(200, text="<TrackResponse/>")

        assert _transport(handler).post(URL, "<TrackRequest/>") == "<TrackResponse/>"
        assert seen == {
            "method": "POST",
            "content_type": REQUEST_CONTENT_TYPE,
            "body": "<TrackRequest/>",
        }

    def test_http_error_status(self):
        transport = _transport(lambda request: httpx.Response(503, text="down"))
        with pytest.raises(CarrierTransportError) as exc_info:
            transport.post(URL, "<TrackRequest/>")
        error = exc_info.value
        assert error.code == "E-3001"
        assert error.details["status_code"] == 503
        assert error.reached_carrier is True

    def test_connect_error_never_reached_carrier(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(CarrierTransportError) as exc_info:
            _transport(handler).post(URL, "<TrackRequest/>")
        assert exc_info.value.reached_carrier is False
        assert "wwwcie.ups.com" in exc_info.value.message

    def test_read_timeout_may_have_reached_carrier(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(CarrierTransportError) as exc_info:
            _transport(handler).post(URL, "<TrackRequest/>")
        assert exc_info.value.reached_carrier is True

    def test_does_not_close_borrowed_client(self):
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        with HttpxTransport(client=client):
            pass
        assert client.is_closed is False
        client.close()


class TestAsTransport:

    def test_function_is_wrapped(self):
        transport = as_transport(lambda url, body: "ok")
        assert isinstance(transport, FunctionTransport)
        assert transport.post(URL, "") == "ok"

    def test_object_with_post_returned(self):
        existing = FunctionTransport(lambda url, body: "ok")
        assert as_transport(existing) is existing

    def test_rejects_other_values(self):
        with pytest.raises(TypeError):
            as_transport(42)
