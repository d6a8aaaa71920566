"""Tests for match_store.py on a temporary SQLite file."""

from sqlalchemy import inspect

from dota_crawler.match_store import MatchStore, from_db_match_id, to_db_match_id


def _row(match_id: int, **overrides) -> dict:
    row = {
        "match_id": match_id,
        "http_status_code": 200,
        "raw_json": '{"result":{}}',
        "error_message": None,
        "private": False,
        "not_found": False,
    }
    row.update(overrides)
    return row


def test_schema_created_on_first_open(settings, tmp_path) -> None:
    db_file = tmp_path / "database" / "database.sqlite"
    assert not db_file.exists()

    with MatchStore(settings.database_url) as store:
        columns = {c["name"] for c in inspect(store._engine).get_columns("matches")}

    assert db_file.exists()
    assert columns == {"matchId", "httpStatusCode", "rawJson", "errorMessage", "private", "notFound"}


def test_save_and_read_back(store) -> None:
    assert store.save_match(**_row(10, not_found=True)) is True

    row = store.get_match(10)
    assert row is not None
    assert row.not_found is True
    assert row.private is False
    assert row.error_message is None
    assert store.get_match(10) is not None
    assert store.get_match(11) is None


def test_duplicate_is_ignored(store) -> None:
    assert store.save_match(**_row(10, raw_json="first")) is True
    assert store.save_match(**_row(10, raw_json="second")) is False

    assert store.count_matches() == 1
    assert store.get_match(10).raw_json == "first"


def test_reopen_keeps_existing_rows(settings) -> None:
    with MatchStore(settings.database_url) as store:
        store.save_match(**_row(1))
        store.save_match(**_row(2))

    with MatchStore(settings.database_url) as store:
        assert store.count_matches() == 2
        assert store.save_match(**_row(2)) is False


def test_large_match_id(store) -> None:
    big = 2**62 + 17
    assert store.save_match(**_row(big)) is True
    assert store.get_match(big).match_id == big


def test_match_ids_above_signed_range_round_trip(store) -> None:
    """Unsigned ids >= 2**63 are stored wrapped and read back unchanged."""
    for match_id in (2**63 - 1, 2**63, 2**63 + 5, 2**64 - 1):
        assert store.save_match(**_row(match_id, raw_json=str(match_id))) is True

    assert store.count_matches() == 4
    for match_id in (2**63 - 1, 2**63, 2**63 + 5, 2**64 - 1):
        row = store.get_match(match_id)
        assert row.match_id == match_id
        assert row.raw_json == str(match_id)

    assert store.save_match(**_row(2**64 - 1)) is False
    assert store.get_match(2**63 + 6) is None


def test_wrapped_id_does_not_collide_with_small_ids(store) -> None:
    assert store.save_match(**_row(1)) is True
    assert store.save_match(**_row(2**64 - 1)) is True
    assert store.count_matches() == 2


def test_db_match_id_conversion() -> None:
    assert to_db_match_id(2**63 - 1) == 2**63 - 1
    assert to_db_match_id(2**63) == -(2**63)
    assert to_db_match_id(2**64 - 1) == -1
    assert from_db_match_id(-1) == 2**64 - 1
    assert from_db_match_id(42) == 42
