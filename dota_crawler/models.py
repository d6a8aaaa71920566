"""
models.py — ORM model for the `matches` table.

Column names are camelCase in the database (the table is consumed by
external analysis tooling); attribute names are snake_case.
"""

from sqlalchemy import BigInteger, Boolean, Column, Integer, Text

from dota_crawler.database import Base


class MatchRecord(Base):
    """One row per attempted match_id that reached the store.

    Rows are append-only: the crawler never updates or deletes them.
    """
    __tablename__ = "matches"

    # BigInteger: Dota match IDs exceed the 32-bit range
    match_id = Column("matchId", BigInteger, primary_key=True, autoincrement=False)
    http_status_code = Column("httpStatusCode", Integer)
    # Response body with newlines removed, kept even for API error bodies
    raw_json = Column("rawJson", Text)
    # NULL on success and on the two flagged errors below
    error_message = Column("errorMessage", Text, nullable=True)
    private = Column("private", Boolean, nullable=False, default=False)
    not_found = Column("notFound", Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return (
            f"MatchRecord(match_id={self.match_id}, status={self.http_status_code}, "
            f"error={self.error_message!r}, private={self.private}, not_found={self.not_found})"
        )
