"""GameBaseline ORM — process-wide named values set once (first writer wins)."""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from dailypath.db.base import Base

BASELINE_START_DATE = "baseline_start_date"


class GameBaseline(Base):
    __tablename__ = "game_baseline"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
