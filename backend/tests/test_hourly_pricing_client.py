import asyncio
import json

import httpx
import pytest

from nanny_booking.pricing import HourlyPricingUnavailable
from nanny_booking.services import hourly_pricing_client as client

URL = "https://pricing.example.com/hourly"


def _run(handler, **kw):
    return asyncio.run(
        client.fetch_hourly_quote({"bookingType": "emergency"}, url=URL, transport=httpx.MockTransport(handler), **kw)
    )


def test_fetch_returns_json_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"total": 615, "baseHourlyRate": 80})

    data = _run(handler)
    assert data["total"] == 615
    assert seen == {"url": URL, "body": {"bookingType": "emergency"}}


def test_api_key_sent_as_bearer(monkeypatch):
    monkeypatch.setattr(client.settings, "HOURLY_PRICING_API_KEY", "secret")
    headers = {}

    def handler(request):
        headers.update(request.headers)
        return httpx.Response(200, json={})

    _run(handler)
    assert headers["authorization"] == "Bearer secret"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json=[1, 2, 3]),
    ],
)
def test_bad_responses_raise_unavailable(response):
    with pytest.raises(HourlyPricingUnavailable):
        _run(lambda request: response)


def test_transport_error_raises_unavailable():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(HourlyPricingUnavailable):
        _run(handler)


def test_missing_url_raises_unavailable(monkeypatch):
    monkeypatch.setattr(client.settings, "HOURLY_PRICING_URL", "")
    with pytest.raises(HourlyPricingUnavailable):
        asyncio.run(client.fetch_hourly_quote({}))
