"""Tests for the IP geolocation client."""
import httpx
import pytest

from fxrates.config import Config
from fxrates.geolocation import IpGeolocator
from fxrates.utils.errors import GeolocationError


class DummyResponse:
    def __init__(self, data, status_code: int = 200, invalid_json: bool = False):
        self._data = data
        self.status_code = status_code
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("not json")
        return self._data

    def raise_for_status(self):
        if self.status_code >= 400:
            raise httpx.HTTPStatusError("error", request=None, response=None)


class DummyClient:
    requested = []

    def __init__(self, response=None, exc=None):
        self._response = response
        self._exc = exc

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def get(self, url, params=None):
        DummyClient.requested.append(url)
        if self._exc is not None:
            raise self._exc
        return self._response


@pytest.fixture(autouse=True)
def reset_requests():
    DummyClient.requested = []


def _patch_client(monkeypatch, **kwargs):
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout=None: DummyClient(**kwargs))


@pytest.mark.asyncio
async def test_country_lookup_success(monkeypatch):
    _patch_client(monkeypatch, response=DummyResponse({"status": "success", "countryCode": "MY"}))

    geolocator = IpGeolocator(base_url="http://geo.test/json/")
    assert await geolocator.country_for("203.0.113.7") == "MY"
    assert DummyClient.requested == ["http://geo.test/json/203.0.113.7"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kwargs",
    [
        {"exc": httpx.ConnectTimeout("timed out")},
        {"exc": httpx.ConnectError("refused")},
        {"response": DummyResponse({}, status_code=503)},
        {"response": DummyResponse(None, invalid_json=True)},
        {"response": DummyResponse({"status": "fail", "message": "private range"})},
        {"response": DummyResponse({"countryCode": None})},
        {"response": DummyResponse(["MY"])},
    ],
)
async def test_failures_fall_back_to_us(monkeypatch, kwargs):
    _patch_client(monkeypatch, **kwargs)
    geolocator = IpGeolocator()
    assert await geolocator.country_for("198.51.100.1") == "US"


@pytest.mark.asyncio
async def test_lookup_raises_on_missing_country(monkeypatch):
    _patch_client(monkeypatch, response=DummyResponse({"status": "fail"}))
    with pytest.raises(GeolocationError):
        await IpGeolocator().lookup("10.0.0.1")


@pytest.mark.asyncio
async def test_missing_address_skips_lookup(monkeypatch):
    _patch_client(monkeypatch, response=DummyResponse({"countryCode": "JP"}))
    assert await IpGeolocator().country_for(None) == "US"
    assert DummyClient.requested == []


def test_from_config(temp_config_file):
    geolocator = IpGeolocator.from_config(Config(temp_config_file))
    assert geolocator.base_url == "http://geo.test/json"
    assert geolocator.timeout == 0.5
