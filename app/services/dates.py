"""Calendar-date helpers. Workout timestamps are naive local wall-clock time."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from app.core.config import get_settings
from app.core.constants import DATE_PARAM_FORMAT

DATE_PARAM = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# Last day whose month grid and following day are both representable
MAX_DATE = date(9999, 11, 30)


class InvalidDateParam(ValueError):
    """Raised for a present but malformed `date` query parameter."""


def local_zone() -> ZoneInfo:
    return ZoneInfo(get_settings().timezone)


def now() -> datetime:
    """Current local wall-clock time (naive)."""
    return datetime.now(local_zone()).replace(tzinfo=None)


def today() -> date:
    return now().date()


def to_local_naive(value: datetime) -> datetime:
    """Aware datetimes are converted to the local zone; naive ones are taken as local already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(local_zone()).replace(tzinfo=None)


def parse_date_param(value: str | None) -> date | None:
    """Parse a strict yyyy-MM-dd string. Absent or blank gives None."""
    if value is None or not value.strip():
        return None
    value = value.strip()
    if not DATE_PARAM.fullmatch(value):
        raise InvalidDateParam(f"Invalid date {value!r}, expected yyyy-MM-dd")
    try:
        parsed = datetime.strptime(value, DATE_PARAM_FORMAT).date()
    except ValueError:
        raise InvalidDateParam(f"Invalid date {value!r}, expected yyyy-MM-dd")
    if parsed > MAX_DATE:
        raise InvalidDateParam(f"Date {value!r} is out of range")
    return parsed


def format_date_param(value: date | datetime) -> str:
    # strftime does not zero-pad years below 1000 on every platform
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Half-open range [start of day, start of next day)."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)
