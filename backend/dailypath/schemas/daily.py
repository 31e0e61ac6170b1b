"""Daily Puzzle Schemas — Pydantic models for the public and admin endpoints.

Invariants:
    - Wire field names are camelCase (dateISO, gameNumber, levelIndex, ...);
      Python attributes stay snake_case through aliases
    - AdminOverrideRequest carries exactly one mode: fromCatalog, keys or names
    - keys / names lists hold exactly LEVEL_COUNT entries
    - Dates are YYYY-MM-DD

Design Decisions:
    - populate_by_name: tests and services may build models with snake_case names
    - model_validator(mode="after") for the one-mode rule: field validators cannot see siblings
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from dailypath.core.catalog import CandidateRecord
from dailypath.core.domain_types import LEVEL_COUNT, PuzzleSource
from dailypath.core.game_calendar import is_iso_date


def _check_iso(value: str | None) -> str | None:
    if value is not None and not is_iso_date(value):
        raise ValueError("date must be YYYY-MM-DD")
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class DailyPuzzleResponse(CamelModel):
    """Resolved puzzle set for one date."""
    date_iso: str = Field(alias="dateISO")
    game_number: int | None = Field(None, alias="gameNumber")
    keys: list[str]
    source: PuzzleSource
    base_iso: str | None = Field(None, alias="baseISO")


class AdminOverrideRequest(CamelModel):
    """Override body — one of fromCatalog, keys or names; date defaults to today."""
    from_catalog: bool = Field(False, alias="fromCatalog")
    keys: list[str] | None = None
    names: list[str] | None = None
    date: str | None = None
    date_iso: str | None = Field(None, alias="dateISO")

    @field_validator("date", "date_iso")
    @classmethod
    def validate_date(cls, v: str | None) -> str | None:
        return _check_iso(v)

    @field_validator("keys", "names")
    @classmethod
    def validate_length(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        if len(v) != LEVEL_COUNT:
            raise ValueError(f"must contain exactly {LEVEL_COUNT} entries")
        if any(not item.strip() for item in v):
            raise ValueError("entries cannot be empty")
        return v

    @model_validator(mode="after")
    def exactly_one_mode(self):
        modes = sum([self.from_catalog, self.keys is not None, self.names is not None])
        if modes != 1:
            raise ValueError("provide exactly one of fromCatalog, keys or names")
        return self

    @property
    def target_date(self) -> str | None:
        return self.date_iso or self.date


class AdminOverrideResponse(CamelModel):
    date_iso: str = Field(alias="dateISO")
    keys: list[str]
    source: PuzzleSource = PuzzleSource.OVERRIDE


class AdminCheckResponse(BaseModel):
    ok: bool = True


class ResultCountRequest(CamelModel):
    """One answered level reported by a client."""
    date: str
    level_index: int = Field(alias="levelIndex", ge=0, lt=LEVEL_COUNT)
    correct: bool
    player_session: str | None = Field(
        None, alias="playerSession", min_length=1, max_length=64,
    )

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        return _check_iso(v)


class ResultCountResponse(BaseModel):
    ok: bool = True
    counted: bool


class CatalogRecord(BaseModel):
    identity: str
    path_tokens: list[str]
    level: int = Field(ge=1, le=LEVEL_COUNT)
    role: str | None = None
    difficulty: float | None = None


class CatalogResponse(BaseModel):
    count: int
    records: list[CatalogRecord]

    @classmethod
    def from_records(cls, records: list[CandidateRecord]) -> "CatalogResponse":
        return cls(
            count=len(records),
            records=[CatalogRecord(**r.to_dict()) for r in records],
        )
