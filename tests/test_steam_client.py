"""Tests for steam_client.py against httpx.MockTransport."""

import httpx
import pytest

from dota_crawler.steam_client import (
    BadStatus,
    FetchSuccess,
    SteamMatchClient,
    TransportFailure,
)


@pytest.mark.asyncio
async def test_request_shape(settings) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text='{"result":{}}')

    async with SteamMatchClient(settings, transport=httpx.MockTransport(handler)) as client:
        outcome = await client.fetch_match(5000)

    assert outcome == FetchSuccess(status_code=200, body='{"result":{}}')
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/IDOTA2Match_570/GetMatchDetails/v1"
    assert request.url.params["key"] == "TESTKEY"
    assert request.url.params["match_id"] == "5000"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["User-Agent"] == "Dota API Crawler 0.1"


@pytest.mark.asyncio
async def test_non_200_is_bad_status(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="Service Unavailable")

    async with SteamMatchClient(settings, transport=httpx.MockTransport(handler)) as client:
        outcome = await client.fetch_match(1)

    assert outcome == BadStatus(status_code=503)


@pytest.mark.asyncio
async def test_network_error_is_transport_failure(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with SteamMatchClient(settings, transport=httpx.MockTransport(handler)) as client:
        outcome = await client.fetch_match(1)

    assert isinstance(outcome, TransportFailure)
    assert "connection refused" in outcome.error


@pytest.mark.asyncio
async def test_timeout_is_transport_failure(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("", request=request)

    async with SteamMatchClient(settings, transport=httpx.MockTransport(handler)) as client:
        outcome = await client.fetch_match(1)

    assert outcome == TransportFailure(error="ReadTimeout")
