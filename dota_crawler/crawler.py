"""
crawler.py — Walks a descending match_id range and records every match.

For each match_id, process_match():
  1. fetches GetMatchDetails (one request),
  2. on a transport error or non-200 status: sleeps the cooldown and
     retries the same match_id (no retry ceiling, nothing persisted),
  3. on HTTP 200: classifies the body and inserts one `matches` row,
  4. sleeps the pacing delay before returning.

Everything runs in one asyncio task: one request and one transaction at a
time.  Only a storage error other than a duplicate matchId stops a crawl.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator, Optional

import httpx

from dota_crawler.classify import classify_response
from dota_crawler.config import CrawlerSettings, DEFAULT_END_ID
from dota_crawler.match_store import MatchStore
from dota_crawler.steam_client import BadStatus, SteamMatchClient, TransportFailure

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


def iter_match_ids(start_id: int, end_id: int = DEFAULT_END_ID) -> Iterator[int]:
    """Yields start_id, start_id-1, …, end_id+1 (empty if start_id <= end_id)."""
    match_id = start_id
    while match_id > end_id:
        yield match_id
        match_id -= 1


@dataclass
class CrawlStats:
    attempts: int = 0
    recorded: int = 0
    duplicates: int = 0
    transport_failures: int = 0
    bad_statuses: int = 0


class MatchCrawler:
    """Fetch → classify → persist pipeline plus the range walk driving it."""

    def __init__(
        self,
        settings: CrawlerSettings,
        client: SteamMatchClient,
        store: MatchStore,
        sleep: SleepFunc = asyncio.sleep,
        echo: Callable[[str], None] = print,
    ) -> None:
        self._settings = settings
        self._client = client
        self._store = store
        self._sleep = sleep
        self._echo = echo
        self.stats = CrawlStats()

    async def process_match(self, match_id: int) -> bool:
        """Fetches and records one match, retrying until it gets HTTP 200.

        Returns True if a new row was written, False for an already
        recorded match.  Storage errors other than duplicates propagate.
        """
        while True:
            self.stats.attempts += 1
            outcome = await self._client.fetch_match(match_id)

            if isinstance(outcome, TransportFailure):
                self.stats.transport_failures += 1
                self._echo(f"Getting match {match_id}: (transport error: {outcome.error})")
                await self._sleep(self._settings.cooldown_seconds)
                continue

            if isinstance(outcome, BadStatus):
                self.stats.bad_statuses += 1
                self._echo(f"Getting match {match_id}: (HTTP status {outcome.status_code})")
                await self._sleep(self._settings.cooldown_seconds)
                continue

            self._echo(f"Getting match {match_id}: (HTTP status {outcome.status_code})")
            break

        record = classify_response(match_id, outcome.status_code, outcome.body)
        try:
            inserted = self._store.save_match(**record)
        except Exception as exc:
            logger.error("[crawler] Failed to save match %d: %s", match_id, exc)
            raise

        if inserted:
            self.stats.recorded += 1
        else:
            self.stats.duplicates += 1

        await self._sleep(self._settings.crawl_wait_seconds)
        return inserted

    async def crawl(self, start_id: int, end_id: int = DEFAULT_END_ID) -> CrawlStats:
        """Processes every match_id from start_id down to end_id+1, in order."""
        logger.info("[crawler] Crawling match_id %d → %d (exclusive)", start_id, end_id)

        for match_id in iter_match_ids(start_id, end_id):
            await self.process_match(match_id)

        logger.info(
            "[crawler] Range done: %d attempts | +%d new | %d already recorded | "
            "%d transport errors | %d bad statuses",
            self.stats.attempts, self.stats.recorded, self.stats.duplicates,
            self.stats.transport_failures, self.stats.bad_statuses,
        )
        return self.stats


async def run_crawl(
    settings: CrawlerSettings,
    start_id: int,
    end_id: int = DEFAULT_END_ID,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep: SleepFunc = asyncio.sleep,
) -> CrawlStats:
    """Opens the store and the HTTP client for one run and releases both on exit."""
    with MatchStore(settings.database_url) as store:
        logger.info("[crawler] DB ready. Current match count: %d", store.count_matches())
        async with SteamMatchClient(settings, transport=transport) as client:
            crawler = MatchCrawler(settings, client, store, sleep=sleep)
            return await crawler.crawl(start_id, end_id)
