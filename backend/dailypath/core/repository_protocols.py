"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Every idempotent write goes through a *_if_absent method that is atomic
      in the backing store; callers never read-then-write
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no base class
    - DistributionStore / ResultCounter / CatalogSource are async (network IO);
      ScopedStorage and Scheduler are sync (device-local, cooperative loop)
"""

from collections.abc import Callable
from typing import Protocol

from dailypath.core.catalog import CandidateRecord
from dailypath.core.domain_types import PathKey


class DistributionStore(Protocol):
    """Shared per-day puzzle slots plus the baseline start date."""
    async def get_override(self, date_iso: str) -> list[PathKey] | None: ...
    async def get_committed(self, date_iso: str) -> list[PathKey] | None: ...
    async def commit_if_absent(
        self, date_iso: str, keys: list[PathKey],
    ) -> tuple[list[PathKey], bool]:
        """Atomic first-writer-wins. Returns (stored keys, whether this call wrote them)."""
        ...
    async def put_override(self, date_iso: str, keys: list[PathKey]) -> None: ...
    async def get_baseline(self) -> str | None: ...
    async def set_baseline_if_absent(self, date_iso: str) -> str:
        """Atomic first-writer-wins. Returns the stored baseline."""
        ...


class ResultCounter(Protocol):
    """Aggregate per-day, per-level correctness counters."""
    async def increment(
        self, date_iso: str, level_index: int, correct: bool,
        player_session: str | None = None,
    ) -> bool: ...
    async def read_percentages(self, date_iso: str) -> list[float]: ...


class CatalogSource(Protocol):
    """Read-only provider of candidate records."""
    async def load(self) -> list[CandidateRecord]: ...


class ScopedStorage(Protocol):
    """Device-local string key-value storage (browser localStorage equivalent)."""
    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def keys(self) -> list[str]: ...


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Cooperative one-shot timers."""
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...
