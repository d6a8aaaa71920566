"""Shared fixtures: settings on a temp SQLite file, a store, a fake sleep."""

from __future__ import annotations

import pytest

from dota_crawler.config import CrawlerSettings
from dota_crawler.match_store import MatchStore


@pytest.fixture
def settings(tmp_path) -> CrawlerSettings:
    return CrawlerSettings(
        api_key="TESTKEY",
        database_url=f"sqlite:///{tmp_path / 'database' / 'database.sqlite'}",
        base_url="https://steam.test/IDOTA2Match_570",
    )


@pytest.fixture
def store(settings):
    with MatchStore(settings.database_url) as s:
        yield s


class FakeSleep:
    """Records requested delays instead of sleeping."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()
