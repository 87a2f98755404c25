"""Gregorian calendar helpers and strict date-string parsing."""

from __future__ import annotations

import calendar
import re
from datetime import MAXYEAR, MINYEAR, date


class InvalidArgument(ValueError):
    """Raised when a caller passes an out-of-range or malformed value."""


_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

WEEKDAY_NAMES = ["sun", "mon", "tue", "wed", "thu", "fri", "sat"]


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def check_year_month(year: int, month: int) -> None:
    if not isinstance(year, int) or isinstance(year, bool) or not MINYEAR <= year <= MAXYEAR:
        raise InvalidArgument(f"Invalid year: {year!r}")
    if not isinstance(month, int) or isinstance(month, bool) or not 1 <= month <= 12:
        raise InvalidArgument(f"Invalid month: {month!r}")


def days_in_month(year: int, month: int) -> int:
    """Number of days in *month* of *year* (Gregorian)."""
    check_year_month(year, month)
    return calendar.monthrange(year, month)[1]


def parse_iso_date(value: str) -> date:
    """Parse a canonical 'YYYY-MM-DD' string.

    Only the zero-padded form is accepted; '2024-3-5' or '2024-02-30'
    raise InvalidArgument.
    """
    if not isinstance(value, str):
        raise InvalidArgument(f"Invalid date: {value!r}")
    m = _ISO_DATE_RE.match(value)
    if not m:
        raise InvalidArgument(f"Invalid date: {value!r}")
    year, month, day = (int(g) for g in m.groups())
    try:
        return date(year, month, day)
    except ValueError:
        raise InvalidArgument(f"Invalid date: {value!r}") from None


def iso_date(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def weekday_sunday_first(d: date) -> int:
    """Weekday with Sunday=0 ... Saturday=6."""
    return (calendar.weekday(d.year, d.month, d.day) + 1) % 7


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Return (year, month) moved by *delta* months."""
    check_year_month(year, month)
    index = year * 12 + (month - 1) + delta
    new_year, new_month = divmod(index, 12)
    if not MINYEAR <= new_year <= MAXYEAR:
        raise InvalidArgument(f"Month out of range: {year}-{month:02d} {delta:+d}")
    return new_year, new_month + 1


def parse_weekday(value: int | str) -> int:
    """Parse a first-weekday setting: 0..6 (Sunday=0) or 'sun', 'mon', ..."""
    if isinstance(value, bool):
        raise InvalidArgument(f"Invalid weekday: {value!r}")
    if isinstance(value, int):
        if 0 <= value <= 6:
            return value
        raise InvalidArgument(f"Invalid weekday: {value!r}")
    if isinstance(value, str):
        key = value.strip().lower()[:3]
        if key in WEEKDAY_NAMES:
            return WEEKDAY_NAMES.index(key)
    raise InvalidArgument(f"Invalid weekday: {value!r}")
