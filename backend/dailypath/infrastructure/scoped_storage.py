"""Scoped Storage — device-local string key-value stores for game sessions.

Invariants:
    - Values are opaque strings; callers own serialization
    - JsonFileScopedStorage writes via temp file + rename, so a crash mid-write
      leaves the previous contents intact
    - A missing or corrupt storage file reads as empty
"""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class InMemoryScopedStorage:
    """Dict-backed storage (tests, single-run tools)."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileScopedStorage:
    """Single JSON file holding every key, rewritten on each set_item."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data = self._read()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}
        if not isinstance(raw, dict):
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        # memory follows disk: a failed write leaves both unchanged
        data = {**self._data, key: value}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self.path)
        self._data = data

    def keys(self) -> list[str]:
        return list(self._data)
