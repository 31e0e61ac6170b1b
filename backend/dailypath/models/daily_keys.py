"""DailyKeys ORM — per-day puzzle slots of the distribution store.

Invariants:
    - Primary key (date_iso, slot): at most one override and one committed row per day
    - The committed row is written once (INSERT ... ON CONFLICT DO NOTHING) and never updated
    - The override row is replaced in place by each admin write; committed row untouched
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from dailypath.db.base import Base


class DailyKeys(Base):
    """Stored puzzle keys for one date and slot (override | committed)."""
    __tablename__ = "daily_keys"

    date_iso: Mapped[str] = mapped_column(String(10), primary_key=True)
    slot: Mapped[str] = mapped_column(String(16), primary_key=True)
    path_keys: Mapped[list] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
