"""Game Calendar — civil-date helpers for the reference timezone.

Invariants:
    - Dates are ISO strings (YYYY-MM-DD); ISO ordering equals calendar ordering
    - day_index counts whole days since 1970-01-01, ignoring time of day
    - game_number is None for dates before the baseline (game #1)
"""

import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from dailypath.core.domain_types import DateISO

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_EPOCH_ORDINAL = date(1970, 1, 1).toordinal()


def is_iso_date(value: str | None) -> bool:
    """True if value is a well-formed, existing calendar date."""
    if not value or not _ISO_DATE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def day_index(date_iso: str) -> int:
    return date.fromisoformat(date_iso).toordinal() - _EPOCH_ORDINAL


def today_iso(time_zone: str, now: datetime | None = None) -> DateISO:
    """Today's date in the given IANA timezone."""
    tz = ZoneInfo(time_zone)
    current = now.astimezone(tz) if now else datetime.now(tz)
    return DateISO(current.date().isoformat())


def game_number(date_iso: str, baseline_iso: str) -> int | None:
    offset = day_index(date_iso) - day_index(baseline_iso)
    if offset < 0:
        return None
    return offset + 1


def last_n_dates(n: int, time_zone: str, now: datetime | None = None) -> list[DateISO]:
    """Most recent n dates, today first."""
    today = date.fromisoformat(today_iso(time_zone, now))
    return [DateISO((today - timedelta(days=i)).isoformat()) for i in range(n)]


def format_short(date_iso: str) -> str:
    """M/D/YY for share text."""
    d = date.fromisoformat(date_iso)
    return f"{d.month}/{d.day}/{d.strftime('%y')}"
