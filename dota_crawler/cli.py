"""
cli.py — Command-line entry point.

    dota-crawler run <start_id> [end_id]
    python -m dota_crawler.cli run <start_id> [end_id]

Environment variables (.env in the working directory is loaded first):
    STEAM_API_KEY           — Steam Web API key (required)
    DATABASE_URL            — default: sqlite:///./database/database.sqlite
    STEAM_API_BASE_URL      — default: https://api.steampowered.com/IDOTA2Match_570
    CRAWL_WAIT_SECONDS      — delay after each recorded match (default: 1)
    CRAWL_COOLDOWN_SECONDS  — delay before retrying a failed fetch (default: 30)
    HTTP_TIMEOUT_SECONDS    — per-request timeout (default: 30)
    LOG_LEVEL               — default: INFO
"""

from __future__ import annotations

import asyncio
import logging
import os

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from dota_crawler.config import CrawlerSettings, DEFAULT_END_ID, MAX_MATCH_ID
from dota_crawler.crawler import run_crawl

logger = logging.getLogger("dota_crawler")

app = typer.Typer(help="Harvest Dota 2 match details from the Steam Web API into SQLite.")


@app.callback()
def main() -> None:
    """Dota API crawler."""


def _setup_logging() -> None:
    """Raises ValueError for an unknown LOG_LEVEL name."""
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL (got {level_name!r})")
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@app.command()
def run(
    start_id: Annotated[int, typer.Argument(min=0, max=MAX_MATCH_ID, help="First match_id to fetch (walks downwards)")],
    end_id: Annotated[int, typer.Argument(min=0, max=MAX_MATCH_ID, help="Stop before this match_id")] = DEFAULT_END_ID,
) -> None:
    """Fetch and record every match from START_ID down to END_ID (exclusive)."""
    load_dotenv()

    try:
        _setup_logging()
        settings = CrawlerSettings.from_env()
    except (RuntimeError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    logger.info("=" * 60)
    logger.info("Dota API crawler starting")
    logger.info("  RANGE               = %d → %d (exclusive)", start_id, end_id)
    logger.info("  STEAM_API_KEY       = %s", settings.masked_api_key)
    logger.info("  STEAM_API_BASE_URL  = %s", settings.base_url)
    logger.info("  DATABASE_URL        = %s", settings.database_url)
    logger.info("  CRAWL_WAIT_SECONDS  = %.1f", settings.crawl_wait_seconds)
    logger.info("  COOLDOWN_SECONDS    = %.1f", settings.cooldown_seconds)
    logger.info("=" * 60)

    asyncio.run(run_crawl(settings, start_id, end_id))


if __name__ == "__main__":
    app()
