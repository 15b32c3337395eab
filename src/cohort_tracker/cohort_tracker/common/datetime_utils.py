from __future__ import annotations

from datetime import date, datetime, timedelta

import pytz

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}")


def now_local() -> datetime:
    """Current time as an aware UTC datetime.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(pytz.utc)


def to_program_time(now: datetime, tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Convert an instant into the program's reference timezone.

    Naive datetimes are taken to be program-local already.
    """
    tz = pytz.timezone(tz_name)
    if now.tzinfo is None:
        return tz.localize(now)
    return now.astimezone(tz)


def program_today(now: datetime, tz_name: str = DEFAULT_TIMEZONE) -> date:
    return to_program_time(now, tz_name).date()


def week_monday(day: date) -> date:
    return day - timedelta(days=day.weekday())
