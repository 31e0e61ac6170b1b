"""Entity Catalog — candidate records parsed from the tabular source, plus pure lookups.

Invariants:
    - parse_catalog is PURE: text in, records out, no IO
    - Rows missing identity, path or a level in 1..LEVEL_COUNT are dropped
    - Records are immutable; several records may share (path_key, level)
    - Identity comparisons are case-insensitive; stored identity keeps its case

Design Decisions:
    - csv.reader over hand splitting: the path column itself holds
      comma-separated tokens inside a quoted cell
    - Header names matched case-insensitively: name, path, path_level,
      position (role), difficulty
"""

import csv
import io
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from dailypath.core.domain_types import PathKey, LEVEL_COUNT
from dailypath.core.path_key import encode_path_key

MAX_SUGGESTIONS: int = 20


@dataclass(frozen=True)
class CandidateRecord:
    """One answer entity and the path it belongs to."""
    identity: str
    path_tokens: tuple[str, ...]
    level: int
    role: str | None = None
    difficulty: float | None = None

    @property
    def path_key(self) -> PathKey:
        return encode_path_key(self.path_tokens)

    def to_dict(self) -> dict:
        return {
            "identity": self.identity,
            "path_tokens": list(self.path_tokens),
            "level": self.level,
            "role": self.role,
            "difficulty": self.difficulty,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CandidateRecord":
        return cls(
            identity=data["identity"],
            path_tokens=tuple(data["path_tokens"]),
            level=int(data["level"]),
            role=data.get("role"),
            difficulty=data.get("difficulty"),
        )


def _clean(cell: str | None) -> str:
    if not cell:
        return ""
    return cell.strip().strip('"')


def _parse_level(raw: str) -> int | None:
    try:
        level = int(raw)
    except ValueError:
        return None
    return level if 1 <= level <= LEVEL_COUNT else None


def _parse_difficulty(raw: str) -> float | None:
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def parse_catalog(text: str) -> list[CandidateRecord]:
    """Parse CSV text into candidate records. Pure."""
    reader = csv.reader(io.StringIO(text))
    header = next(reader, None)
    if not header:
        return []
    columns = {_clean(h).lower(): i for i, h in enumerate(header)}

    def cell(row: list[str], name: str) -> str:
        i = columns.get(name)
        return _clean(row[i]) if i is not None and i < len(row) else ""

    records: list[CandidateRecord] = []
    for row in reader:
        if not any(c.strip() for c in row):
            continue
        identity = cell(row, "name")
        path_str = cell(row, "path")
        level = _parse_level(cell(row, "path_level"))
        if not identity or not path_str or level is None:
            continue
        tokens = tuple(_clean(t) for t in path_str.split(","))
        records.append(CandidateRecord(
            identity=identity,
            path_tokens=tokens,
            level=level,
            role=cell(row, "position") or None,
            difficulty=_parse_difficulty(cell(row, "difficulty")),
        ))
    return records


# ─── Lookups ─────────────────────────────────────────────────────

def is_correct_guess(
    records: Iterable[CandidateRecord], guess: str, target_key: str,
) -> bool:
    """A guess matches if some record has that identity and the target path."""
    wanted = guess.strip().lower()
    if not wanted:
        return False
    return any(
        r.identity.lower() == wanted and r.path_key == target_key
        for r in records
    )


def answers_for_key(records: Iterable[CandidateRecord], key: str) -> list[str]:
    """All identities that solve the puzzle with this key, sorted."""
    return sorted({r.identity for r in records if r.path_key == key})


def build_answer_lists(
    records: Sequence[CandidateRecord], keys: Sequence[str],
) -> list[list[str]]:
    return [answers_for_key(records, k) for k in keys]


def resolve_identity(records: Iterable[CandidateRecord], name: str) -> PathKey | None:
    """First record whose identity matches name (case-insensitive)."""
    wanted = name.strip().lower()
    for r in records:
        if r.identity.lower() == wanted:
            return r.path_key
    return None


def suggest_identities(
    records: Iterable[CandidateRecord], typed: str, limit: int = MAX_SUGGESTIONS,
) -> list[str]:
    """Autocomplete: identities containing the typed text, sorted."""
    needle = typed.strip().lower()
    if not needle:
        return []
    matches = {r.identity for r in records if needle in r.identity.lower()}
    return sorted(matches)[:limit]
