"""
config.py — Constants and runtime settings for the Dota API crawler.

Constants describe the remote API and the crawl pacing and are stable across
environments.  Runtime settings (API key, database URL, overrides) are read
from environment variables by CrawlerSettings.from_env().
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Remote API
# ---------------------------------------------------------------------------

STEAM_API_HOST = "api.steampowered.com"
STEAM_API_NAMESPACE = "IDOTA2Match_570"
DEFAULT_BASE_URL = f"https://{STEAM_API_HOST}/{STEAM_API_NAMESPACE}"

USER_AGENT = "Dota API Crawler 0.1"
DEFAULT_HEADERS: dict[str, str] = {
    "Accept": "application/json",
    "User-Agent": USER_AGENT,
}

# result.error values with a dedicated flag column in `matches`.
# Any other error string is stored verbatim in errorMessage.
MATCH_NOT_FOUND_ERROR = "Match ID not found"
PRACTICE_MATCH_ERROR = "Practice matches are not available via GetMatchDetails"

# ---------------------------------------------------------------------------
# Crawl pacing
# ---------------------------------------------------------------------------

CRAWL_WAIT_SECONDS: float = 1.0       # after every persisted match
COOLDOWN_SECONDS: float = 30.0        # after a transport error or non-200 status
HTTP_TIMEOUT_SECONDS: float = 30.0

DEFAULT_END_ID = 1
MAX_MATCH_ID = 2**64 - 1

DEFAULT_DATABASE_URL = "sqlite:///./database/database.sqlite"


@dataclass(frozen=True)
class CrawlerSettings:
    """Everything the client and the crawler need, passed in explicitly."""

    api_key: str
    database_url: str = DEFAULT_DATABASE_URL
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = USER_AGENT
    timeout_seconds: float = HTTP_TIMEOUT_SECONDS
    crawl_wait_seconds: float = CRAWL_WAIT_SECONDS
    cooldown_seconds: float = COOLDOWN_SECONDS

    @property
    def headers(self) -> dict[str, str]:
        return {**DEFAULT_HEADERS, "User-Agent": self.user_agent}

    @property
    def masked_api_key(self) -> str:
        # Never log the key itself, only its length and prefix
        if not self.api_key:
            return "<unset>"
        return f"{self.api_key[:4]}*** (len={len(self.api_key)})"

    @classmethod
    def from_env(cls) -> "CrawlerSettings":
        """Reads settings from the environment (call load_dotenv() first).

        Raises RuntimeError when STEAM_API_KEY is missing.
        """
        api_key = os.getenv("STEAM_API_KEY")
        if not api_key:
            raise RuntimeError("STEAM_API_KEY is not set")
        return cls(
            api_key=api_key,
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            base_url=os.getenv("STEAM_API_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", str(HTTP_TIMEOUT_SECONDS))),
            crawl_wait_seconds=float(os.getenv("CRAWL_WAIT_SECONDS", str(CRAWL_WAIT_SECONDS))),
            cooldown_seconds=float(os.getenv("CRAWL_COOLDOWN_SECONDS", str(COOLDOWN_SECONDS))),
        )
