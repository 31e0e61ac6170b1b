"""Session Storage — SessionState persistence over a ScopedStorage.

Invariants:
    - One JSON record per date under DAY_KEY_PREFIX + date
    - One "started" map (date -> bool) under STARTED_KEY, written independently
      of the day record
    - Unreadable JSON reads as absent; a bad record never blocks a fresh game
"""

import json
import logging

from dailypath.core.repository_protocols import ScopedStorage
from dailypath.core.session_state import SessionState

logger = logging.getLogger(__name__)

DAY_KEY_PREFIX = "dailypath:day:"
STARTED_KEY = "dailypath:started"


class SessionStorage:
    """Typed accessors for day records and the started map."""

    def __init__(self, storage: ScopedStorage):
        self.storage = storage

    def _read_json(self, key: str):
        raw = self.storage.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding unreadable stored value under {key}")
            return None

    def load_day(self, date_iso: str, slot_count: int) -> SessionState | None:
        return SessionState.from_record(
            self._read_json(DAY_KEY_PREFIX + date_iso), date_iso, slot_count,
        )

    def save_day(self, state: SessionState) -> None:
        self.storage.set_item(DAY_KEY_PREFIX + state.date, json.dumps(state.to_record()))

    def started_map(self) -> dict[str, bool]:
        data = self._read_json(STARTED_KEY)
        if not isinstance(data, dict):
            return {}
        return {str(k): bool(v) for k, v in data.items()}

    def is_started(self, date_iso: str) -> bool:
        return self.started_map().get(date_iso, False)

    def set_started(self, date_iso: str, value: bool = True) -> None:
        started = self.started_map()
        started[date_iso] = value
        self.storage.set_item(STARTED_KEY, json.dumps(started))

    def stored_dates(self) -> list[str]:
        return sorted(
            k[len(DAY_KEY_PREFIX):] for k in self.storage.keys()
            if k.startswith(DAY_KEY_PREFIX)
        )

    def history(self, dates: list[str], slot_count: int) -> dict[str, SessionState | None]:
        """Persisted state per requested date (None where nothing was played)."""
        return {d: self.load_day(d, slot_count) for d in dates}
