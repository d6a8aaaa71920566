"""
steam_client.py — Async client for IDOTA2Match_570/GetMatchDetails.

fetch_match() never raises for network problems: the outcome is one of
FetchSuccess, TransportFailure or BadStatus, and the crawler decides what
to do with it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import httpx

from dota_crawler.config import CrawlerSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchSuccess:
    status_code: int
    body: str


@dataclass(frozen=True)
class TransportFailure:
    """No response at all: DNS, connect, timeout, read errors."""
    error: str


@dataclass(frozen=True)
class BadStatus:
    status_code: int


FetchOutcome = Union[FetchSuccess, TransportFailure, BadStatus]


class SteamMatchClient:
    """Wraps one httpx.AsyncClient for the lifetime of a crawl.

    Use as an async context manager:

        async with SteamMatchClient(settings) as client:
            outcome = await client.fetch_match(match_id)

    `transport` is for tests (httpx.MockTransport).
    """

    def __init__(
        self,
        settings: CrawlerSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._url = f"{settings.base_url}/GetMatchDetails/v1"
        self._client = httpx.AsyncClient(
            headers=settings.headers,
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "SteamMatchClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_match(self, match_id: int) -> FetchOutcome:
        """GET /GetMatchDetails/v1?key=…&match_id=…: one match, one request.

        A 200 body is the whole match wrapped in "result":
          {"result": {"match_id", "radiant_win", "duration", "start_time",
                      "lobby_type", "game_mode", "players": [...], ...}}
        Unknown or hidden matches also come back as 200, with only
          {"result": {"error": "<message>"}}
        The body is returned untouched; classify.py interprets it.

        Never raises for network problems: returns TransportFailure when no
        response arrived and BadStatus for any status other than 200
        (Steam answers 429/503 when throttling).
        """
        params = {"key": self._settings.api_key, "match_id": match_id}
        try:
            r = await self._client.get(self._url, params=params)
        except httpx.RequestError as e:
            logger.warning("Steam API network error (match_id=%s): %s", match_id, e)
            return TransportFailure(error=str(e) or type(e).__name__)

        if r.status_code != 200:
            logger.warning(
                "Steam API match_id=%s returned HTTP %s: %s",
                match_id, r.status_code, r.text[:200],
            )
            return BadStatus(status_code=r.status_code)

        return FetchSuccess(status_code=r.status_code, body=r.text)
