"""Typed dataclasses for the widget data model.

Models read from the app cache or the widget state file use
from_dict/to_dict. camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from diarywidgets.dates import parse_weekday


# ── Calendar grid ─────────────────────────────────────────────


class WeekdayClass(str, Enum):
    WEEKDAY = "weekday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


@dataclass(frozen=True)
class CalendarCell:
    """One of the 42 slots of a 6-week month grid."""

    position: int
    day_number: int | None
    iso_date: str | None
    has_entry: bool
    is_today: bool
    weekday_class: WeekdayClass

    @property
    def is_blank(self) -> bool:
        return self.day_number is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": self.position,
            "dayNumber": self.day_number,
            "isoDate": self.iso_date,
            "hasEntry": self.has_entry,
            "isToday": self.is_today,
            "weekdayClass": self.weekday_class.value,
        }


# ── Cached app data ───────────────────────────────────────────


@dataclass
class Entry:
    id: str = ""
    type: str = "dated"  # dated, general
    title: str = ""
    content: str = ""
    date: str = ""  # YYYY-MM-DD, empty for general memos
    updated_at: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Entry:
        return cls(
            id=str(d.get("id", "") or ""),
            type=str(d.get("type", "dated") or "dated"),
            title=str(d.get("title", "") or ""),
            content=str(d.get("content", "") or ""),
            date=str(d.get("date", "") or ""),
            updated_at=str(d.get("updatedAt", "") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "content": self.content,
            "date": self.date,
            "updatedAt": self.updated_at,
        }

    def sort_key(self) -> str:
        return self.date if self.date else self.updated_at


@dataclass
class MemoSlot:
    """A recent entry/memo row pushed into the cache by the app."""

    id: str = ""
    date: str = ""
    title: str = ""
    content: str = ""
    icons: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "title": self.title,
            "content": self.content,
            "icons": self.icons,
        }


# ── Per-widget state ──────────────────────────────────────────


@dataclass
class SelectedMemo:
    id: str = ""
    date: str = ""  # display label, already formatted
    title: str = ""
    content: str = ""
    icons: str = ""
    type: str = "general"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> SelectedMemo:
        return cls(
            id=str(d.get("id", "")),
            date=str(d.get("date", "")),
            title=str(d.get("title", "")),
            content=str(d.get("content", "")),
            icons=str(d.get("icons", "")),
            type=str(d.get("type", "general") or "general"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "title": self.title,
            "content": self.content,
            "icons": self.icons,
            "type": self.type,
        }


@dataclass
class WidgetState:
    month_offset: int = 0
    selected_memo: SelectedMemo | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> WidgetState:
        if not d or not isinstance(d, dict):
            return cls()
        memo = d.get("selectedMemo")
        return cls(
            month_offset=int(d.get("monthOffset", 0) or 0),
            selected_memo=SelectedMemo.from_dict(memo) if isinstance(memo, dict) and memo.get("id") else None,
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"monthOffset": self.month_offset}
        if self.selected_memo is not None:
            d["selectedMemo"] = self.selected_memo.to_dict()
        return d


# ── Navigation ────────────────────────────────────────────────


@dataclass(frozen=True)
class NavigationTarget:
    """Abstract deep link: an action name plus string parameters."""

    action: str
    params: tuple[tuple[str, str], ...] = ()

    @classmethod
    def of(cls, action: str, **params: Any) -> NavigationTarget:
        return cls(action=action, params=tuple((k, str(v)) for k, v in params.items()))

    def params_dict(self) -> dict[str, str]:
        return dict(self.params)

    def to_dict(self) -> dict[str, Any]:
        return {"action": self.action, "params": self.params_dict()}


# ── Configuration ─────────────────────────────────────────────


@dataclass
class WidgetConfig:
    timezone: str = "UTC"
    first_weekday: int = 0  # 0=Sunday
    locale: str = "en"  # en, ko
    recent_limit: int = 3
    preview_length: int = 50
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> WidgetConfig:
        if not d or not isinstance(d, dict):
            return cls()
        known = {"timezone", "first_weekday", "locale", "recent_limit", "preview_length"}
        locale = str(d.get("locale", "en")).strip().lower()
        return cls(
            timezone=str(d.get("timezone", "UTC")),
            first_weekday=parse_weekday(d.get("first_weekday", 0)),
            locale=locale if locale in {"en", "ko"} else "en",
            recent_limit=max(0, int(d.get("recent_limit", 3))),
            preview_length=max(1, int(d.get("preview_length", 50))),
            extra={k: v for k, v in d.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "timezone": self.timezone,
            "first_weekday": self.first_weekday,
            "locale": self.locale,
            "recent_limit": self.recent_limit,
            "preview_length": self.preview_length,
        }
        d.update(self.extra)
        return d
