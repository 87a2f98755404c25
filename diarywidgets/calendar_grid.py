"""Month grid builder for the calendar widget.

Maps a month onto a fixed 6x7 grid of cells. Pure function: no I/O, no
logging, no hidden state.
"""

from __future__ import annotations

from collections.abc import Iterable

from diarywidgets.dates import (
    InvalidArgument,
    check_year_month,
    days_in_month,
    iso_date,
    parse_iso_date,
    weekday_sunday_first,
)
from diarywidgets.models import CalendarCell, WeekdayClass

GRID_WEEKS = 6
GRID_CELLS = GRID_WEEKS * 7


def leading_blanks(year: int, month: int, first_weekday_offset: int = 0) -> int:
    """Number of empty cells before day 1 when column 0 is *first_weekday_offset*."""
    check_year_month(year, month)
    _check_offset(first_weekday_offset)
    first = parse_iso_date(iso_date(year, month, 1))
    return (weekday_sunday_first(first) - first_weekday_offset + 7) % 7


def weekday_class_for(position: int, first_weekday_offset: int = 0) -> WeekdayClass:
    weekday = (first_weekday_offset + position % 7) % 7
    if weekday == 0:
        return WeekdayClass.SUNDAY
    if weekday == 6:
        return WeekdayClass.SATURDAY
    return WeekdayClass.WEEKDAY


def build_calendar_grid(
    year: int,
    month: int,
    entry_dates: Iterable[str],
    today: str,
    first_weekday_offset: int = 0,
) -> list[CalendarCell]:
    """Build the 42 cells for *year*/*month*.

    entry_dates and today must be canonical 'YYYY-MM-DD' strings; membership
    is exact string equality. Raises InvalidArgument on any malformed input.
    """
    check_year_month(year, month)
    _check_offset(first_weekday_offset)
    parse_iso_date(today)
    entries = set(entry_dates)
    for value in entries:
        parse_iso_date(value)

    n_days = days_in_month(year, month)
    blanks = leading_blanks(year, month, first_weekday_offset)

    cells = []
    for position in range(GRID_CELLS):
        day = position - blanks + 1
        weekday_class = weekday_class_for(position, first_weekday_offset)
        if 1 <= day <= n_days:
            key = iso_date(year, month, day)
            cells.append(CalendarCell(
                position=position,
                day_number=day,
                iso_date=key,
                has_entry=key in entries,
                is_today=key == today,
                weekday_class=weekday_class,
            ))
        else:
            cells.append(CalendarCell(
                position=position,
                day_number=None,
                iso_date=None,
                has_entry=False,
                is_today=False,
                weekday_class=weekday_class,
            ))
    return cells


def _check_offset(first_weekday_offset: int) -> None:
    if (
        not isinstance(first_weekday_offset, int)
        or isinstance(first_weekday_offset, bool)
        or not 0 <= first_weekday_offset <= 6
    ):
        raise InvalidArgument(f"Invalid first weekday offset: {first_weekday_offset!r}")
