"""Error Hierarchy — codes, statuses and the REST envelope."""

from dailypath.core.errors import (
    CatalogUnavailableError,
    DailyPathError,
    InvalidDateError,
    StoreUnavailableError,
    UnauthorizedError,
    UncommittedPastGameError,
    UnresolvedOverrideIdentityError,
)


def test_uncommitted_past_game_envelope():
    err = UncommittedPastGameError("2025-09-01", game_number=1)
    body = err.to_response()["error"]
    assert err.http_status == 409
    assert body["code"] == "UNCOMMITTED_PAST_GAME"
    assert body["category"] == "conflict"
    assert body["context"]["date_iso"] == "2025-09-01"
    assert body["context"]["game_number"] == 1
    assert "override" in body["message"]


def test_unresolved_identities_are_listed():
    err = UnresolvedOverrideIdentityError(["Nobody", "Ghost"])
    assert err.http_status == 400
    assert err.names == ["Nobody", "Ghost"]
    assert err.to_response()["error"]["context"]["details"] == {
        "unresolved": ["Nobody", "Ghost"],
    }


def test_status_codes():
    assert UnauthorizedError().http_status == 401
    assert CatalogUnavailableError("down").http_status == 503
    assert StoreUnavailableError("down", "commit").http_status == 503
    assert InvalidDateError("yesterday").http_status == 400


def test_all_errors_share_base():
    assert isinstance(StoreUnavailableError("x", "read"), DailyPathError)
    assert StoreUnavailableError("x", "read").operation == "read"
