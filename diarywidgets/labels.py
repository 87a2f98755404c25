"""Localized widget strings and date labels."""

from __future__ import annotations

from datetime import date

_MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

LABELS: dict[str, dict[str, str]] = {
    "en": {
        "untitled": "Untitled",
        "no_memos": "No memos yet",
        "month_count": "This month: {count} entries",
        "entry_count": "{count} entries",
    },
    "ko": {
        "untitled": "제목 없음",
        "no_memos": "작성된 메모가 없습니다",
        "month_count": "이번 달 일기: {count}개",
        "entry_count": "{count}개의 일기",
    },
}


def label(locale: str, key: str, **kwargs: object) -> str:
    table = LABELS.get(locale, LABELS["en"])
    return table[key].format(**kwargs)


def format_month_title(year: int, month: int, locale: str = "en") -> str:
    if locale == "ko":
        return f"{year}년 {month}월"
    return f"{_MONTH_NAMES[month - 1]} {year}"


def format_long_date(d: date, locale: str = "en") -> str:
    if locale == "ko":
        return f"{d.year}년 {d.month}월 {d.day}일"
    return f"{_MONTH_NAMES[d.month - 1]} {d.day}, {d.year}"


def format_short_date(d: date, locale: str = "en") -> str:
    if locale == "ko":
        return f"{d.month}월 {d.day}일"
    return f"{_MONTH_NAMES[d.month - 1][:3]} {d.day}"
