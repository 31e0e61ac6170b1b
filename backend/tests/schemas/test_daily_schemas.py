"""Daily Schemas — camelCase aliases and override request validation."""

import pytest
from pydantic import ValidationError

from dailypath.core.domain_types import PuzzleSource
from dailypath.schemas.daily import (
    AdminOverrideRequest,
    DailyPuzzleResponse,
    ResultCountRequest,
)

FIVE = ["A", "B", "C", "D", "E"]


def test_daily_response_serializes_camel_case():
    body = DailyPuzzleResponse(
        date_iso="2025-09-03", game_number=3, keys=FIVE,
        source=PuzzleSource.COMMITTED, base_iso="2025-09-01",
    ).model_dump(by_alias=True, mode="json")
    assert body == {
        "dateISO": "2025-09-03", "gameNumber": 3, "keys": FIVE,
        "source": "committed", "baseISO": "2025-09-01",
    }


def test_override_from_catalog():
    req = AdminOverrideRequest.model_validate({"fromCatalog": True})
    assert req.from_catalog
    assert req.target_date is None


def test_override_date_aliases():
    assert AdminOverrideRequest.model_validate(
        {"keys": FIVE, "date": "2025-09-01"},
    ).target_date == "2025-09-01"
    assert AdminOverrideRequest.model_validate(
        {"keys": FIVE, "dateISO": "2025-09-02"},
    ).target_date == "2025-09-02"


def test_override_rejects_bad_date():
    with pytest.raises(ValidationError):
        AdminOverrideRequest.model_validate({"keys": FIVE, "date": "2025-02-30"})


def test_override_requires_exactly_five():
    with pytest.raises(ValidationError):
        AdminOverrideRequest.model_validate({"names": FIVE[:4]})
    with pytest.raises(ValidationError):
        AdminOverrideRequest.model_validate({"keys": FIVE + ["F"]})


def test_override_rejects_blank_entries():
    with pytest.raises(ValidationError):
        AdminOverrideRequest.model_validate({"keys": ["A", " ", "C", "D", "E"]})


def test_override_requires_one_mode():
    with pytest.raises(ValidationError):
        AdminOverrideRequest.model_validate({})
    with pytest.raises(ValidationError):
        AdminOverrideRequest.model_validate({"keys": FIVE, "names": FIVE})
    with pytest.raises(ValidationError):
        AdminOverrideRequest.model_validate({"fromCatalog": False})


def test_result_request_bounds():
    req = ResultCountRequest.model_validate(
        {"date": "2025-09-03", "levelIndex": 4, "correct": True, "playerSession": "p"},
    )
    assert req.level_index == 4
    assert req.player_session == "p"
    with pytest.raises(ValidationError):
        ResultCountRequest.model_validate({"date": "2025-09-03", "levelIndex": -1, "correct": True})
    with pytest.raises(ValidationError):
        ResultCountRequest.model_validate({"date": "today", "levelIndex": 0, "correct": True})
