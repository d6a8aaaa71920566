"""
match_store.py — Persistence for crawl results (`matches` table).

One MatchStore owns one engine for the whole run and is closed on exit:

    with MatchStore(settings.database_url) as store:
        store.save_match(**record)

Each save_match() is its own transaction.  A duplicate matchId
(IntegrityError) means the match was recorded by an earlier run and is not
an error; every other SQLAlchemy error propagates to the caller.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from dota_crawler.database import (
    create_all_tables,
    create_db_engine,
    make_session_factory,
    sqlite_file_path,
)
from dota_crawler.models import MatchRecord

logger = logging.getLogger(__name__)

# matchId is an unsigned 64-bit id, the column a signed BIGINT.
# Ids >= 2**63 are stored wrapped (two's complement) and unwrapped on read.
_UINT64_RANGE = 2**64
_INT64_MAX = 2**63 - 1


def to_db_match_id(match_id: int) -> int:
    return match_id - _UINT64_RANGE if match_id > _INT64_MAX else match_id


def from_db_match_id(stored_id: int) -> int:
    return stored_id + _UINT64_RANGE if stored_id < 0 else stored_id


class MatchStore:
    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        # Checked before the engine connects: connecting creates the file
        db_file = sqlite_file_path(database_url)
        needs_schema = db_file is None or not db_file.exists()

        self._engine = create_db_engine(database_url)
        self._session_factory = make_session_factory(self._engine)

        if needs_schema:
            create_all_tables(self._engine)
            logger.info("[store] Created matches table (%s)", database_url)

    def __enter__(self) -> "MatchStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._engine.dispose()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save_match(
        self,
        match_id: int,
        http_status_code: int,
        raw_json: str,
        error_message: Optional[str] = None,
        private: bool = False,
        not_found: bool = False,
    ) -> bool:
        """Inserts one row and commits.

        Returns True when the row was written, False when matchId was
        already recorded.
        """
        with self._session_factory() as session:
            session.add(
                MatchRecord(
                    match_id=to_db_match_id(match_id),
                    http_status_code=http_status_code,
                    raw_json=raw_json,
                    error_message=error_message,
                    private=private,
                    not_found=not_found,
                )
            )
            try:
                session.commit()
            except IntegrityError:
                # UNIQUE on matchId is the only constraint on the table
                session.rollback()
                logger.debug("[store] match %d already recorded, skipping", match_id)
                return False
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_match(self, match_id: int) -> Optional[MatchRecord]:
        """Returns a detached MatchRecord, or None."""
        with self._session_factory() as session:
            row = session.get(MatchRecord, to_db_match_id(match_id))
            if row is not None:
                session.expunge(row)
                row.match_id = from_db_match_id(row.match_id)
            return row

    def count_matches(self) -> int:
        with self._session_factory() as session:
            return session.scalar(select(func.count()).select_from(MatchRecord)) or 0
