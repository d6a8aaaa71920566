"""
classify.py — Turns a 200 response body into a `matches` row.

Pure functions only: no network, no database.  The crawler passes the
returned dict straight to MatchStore.save_match(**record).

Classification of result.error:
  absent                                   → clean record
  MATCH_NOT_FOUND_ERROR                    → notFound = True, errorMessage NULL
  PRACTICE_MATCH_ERROR                     → private  = True, errorMessage NULL
  anything else (incl. INVALID_JSON)       → errorMessage = the string
"""

from __future__ import annotations

import json
from typing import Optional

from dota_crawler.config import MATCH_NOT_FOUND_ERROR, PRACTICE_MATCH_ERROR

# Stored in errorMessage when a 200 body cannot be parsed as a JSON object
INVALID_JSON = "Invalid JSON"


def strip_newlines(body: str) -> str:
    return body.replace("\r", "").replace("\n", "")


def parse_error_field(body: str) -> Optional[str]:
    """Extracts result.error from a GetMatchDetails body.

    {"result": {"match_id": 123, ...}}           → None
    {"result": {"error": "Match ID not found"}}  → "Match ID not found"
    "<html>…" / "[]"                             → INVALID_JSON

    Returns None when there is no error, the error string otherwise, and
    INVALID_JSON when the body is not a JSON object.
    """
    try:
        payload = json.loads(body)
    except ValueError:
        return INVALID_JSON

    if not isinstance(payload, dict):
        return INVALID_JSON

    result = payload.get("result")
    if not isinstance(result, dict):
        return None

    error = result.get("error")
    if error is None:
        return None
    return error if isinstance(error, str) else json.dumps(error)


def classify_response(match_id: int, status_code: int, body: str) -> dict:
    """Builds the keyword arguments for MatchStore.save_match()."""
    error = parse_error_field(body)

    record = {
        "match_id": match_id,
        "http_status_code": status_code,
        "raw_json": strip_newlines(body),
        "error_message": None,
        "private": False,
        "not_found": False,
    }

    if error == MATCH_NOT_FOUND_ERROR:
        record["not_found"] = True
    elif error == PRACTICE_MATCH_ERROR:
        record["private"] = True
    elif error is not None:
        record["error_message"] = error

    return record
