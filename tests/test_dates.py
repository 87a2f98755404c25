"""Tests for diarywidgets/dates.py — Gregorian helpers and strict parsing."""

from datetime import date

import pytest

from diarywidgets.dates import (
    InvalidArgument,
    days_in_month,
    is_leap_year,
    parse_iso_date,
    parse_weekday,
    shift_month,
    weekday_sunday_first,
)


def test_leap_years():
    assert is_leap_year(2000) is True
    assert is_leap_year(1900) is False
    assert is_leap_year(2024) is True
    assert is_leap_year(2023) is False


def test_days_in_month():
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2100, 2) == 28
    assert days_in_month(2024, 4) == 30
    assert days_in_month(2024, 12) == 31
    assert days_in_month(1, 2) == 28
    assert days_in_month(9999, 12) == 31
    assert days_in_month(2000, 2) == 29


def test_days_in_month_rejects_bad_month():
    with pytest.raises(InvalidArgument):
        days_in_month(2024, 0)


def test_parse_iso_date():
    assert parse_iso_date("2024-02-29") == date(2024, 2, 29)


@pytest.mark.parametrize("value", ["2023-02-29", "2024-3-05", "20240305", "2024-00-10", None, 20240305])
def test_parse_iso_date_rejects(value):
    with pytest.raises(InvalidArgument):
        parse_iso_date(value)


def test_weekday_sunday_first():
    assert weekday_sunday_first(date(2024, 3, 3)) == 0  # Sunday
    assert weekday_sunday_first(date(2024, 3, 1)) == 5  # Friday
    assert weekday_sunday_first(date(2024, 3, 2)) == 6  # Saturday
    assert weekday_sunday_first(date(1, 1, 1)) == 1  # Monday
    assert weekday_sunday_first(date(9999, 12, 31)) == 5  # Friday


def test_shift_month():
    assert shift_month(2024, 1, -1) == (2023, 12)
    assert shift_month(2024, 12, 1) == (2025, 1)
    assert shift_month(2024, 3, 0) == (2024, 3)
    assert shift_month(2024, 3, -15) == (2022, 12)
    assert shift_month(2024, 3, 25) == (2026, 4)


def test_shift_month_out_of_range():
    with pytest.raises(InvalidArgument):
        shift_month(9999, 12, 1)


def test_parse_weekday():
    assert parse_weekday(0) == 0
    assert parse_weekday("mon") == 1
    assert parse_weekday("Saturday") == 6
    with pytest.raises(InvalidArgument):
        parse_weekday(7)
    with pytest.raises(InvalidArgument):
        parse_weekday("someday")
