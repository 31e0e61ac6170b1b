"""Result Counter ORM — per-day, per-level attempt and correct tallies.

Invariants:
    - ResultCount primary key (date_iso, level_index); rows only ever incremented
    - correct <= attempts
    - ResultDedup row exists once per (date_iso, level_index, player_session)
"""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from dailypath.db.base import Base


class ResultCount(Base):
    __tablename__ = "result_counts"

    date_iso: Mapped[str] = mapped_column(String(10), primary_key=True)
    level_index: Mapped[int] = mapped_column(Integer, primary_key=True)
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    correct: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ResultDedup(Base):
    """Marker that a player session's result for a level was already counted."""
    __tablename__ = "result_dedup"

    date_iso: Mapped[str] = mapped_column(String(10), primary_key=True)
    level_index: Mapped[int] = mapped_column(Integer, primary_key=True)
    player_session: Mapped[str] = mapped_column(String(64), primary_key=True)
