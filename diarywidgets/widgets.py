"""View models for the home-screen widgets.

Each builder reads the cache/state it is given and returns plain data:
text to show plus the NavigationTarget for every tappable area. Nothing
here draws anything.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from diarywidgets.calendar_grid import build_calendar_grid
from diarywidgets.dates import InvalidArgument, parse_iso_date, shift_month
from diarywidgets.entries import (
    canonical_dates,
    dated_entry_index,
    find_entry,
    month_entry_count,
    parse_entries,
    recent_entries,
    recent_memos,
    sort_entries_newest_first,
)
from diarywidgets.labels import format_long_date, format_month_title, format_short_date, label
from diarywidgets.models import (
    CalendarCell,
    Entry,
    MemoSlot,
    NavigationTarget,
    SelectedMemo,
    WidgetConfig,
    WidgetState,
)
from diarywidgets.navigation import (
    NEW_ENTRY,
    NEXT_MONTH,
    OPEN_APP,
    PREV_MONTH,
    TAB_CALCULATOR,
    TAB_CALENDAR,
    TAB_DIARY,
    TAB_MEMO,
    configure_target,
    day_cell_target,
    tab_target,
    view_memo_target,
    write_general_target,
)
from diarywidgets.repository import WidgetStateRepository, check_widget_id

logger = logging.getLogger(__name__)


def _target_dict(target: NavigationTarget | None) -> dict[str, Any] | None:
    return target.to_dict() if target is not None else None


# ── Calendar widget ───────────────────────────────────────────


@dataclass
class CalendarWidgetModel:
    widget_id: int
    year: int
    month: int
    title: str
    cells: list[CalendarCell]
    cell_targets: list[NavigationTarget | None]
    prev_month: NavigationTarget
    next_month: NavigationTarget
    open_app: NavigationTarget
    tabs: list[NavigationTarget] = field(default_factory=list)
    today_label: str | None = None
    month_count_label: str | None = None

    def to_dict(self) -> dict[str, Any]:
        cells = []
        for cell, target in zip(self.cells, self.cell_targets):
            d = cell.to_dict()
            d["target"] = _target_dict(target)
            cells.append(d)
        return {
            "widgetId": self.widget_id,
            "year": self.year,
            "month": self.month,
            "title": self.title,
            "cells": cells,
            "prevMonth": self.prev_month.to_dict(),
            "nextMonth": self.next_month.to_dict(),
            "openApp": self.open_app.to_dict(),
            "tabs": [t.to_dict() for t in self.tabs],
            "todayLabel": self.today_label,
            "monthCountLabel": self.month_count_label,
        }


def displayed_month(today: str, month_offset: int) -> tuple[int, int]:
    d = parse_iso_date(today)
    return shift_month(d.year, d.month, month_offset)


def calendar_widget(
    cache: dict[str, Any],
    state: WidgetState,
    config: WidgetConfig,
    today: str,
    widget_id: int = 0,
    compact: bool = False,
) -> CalendarWidgetModel:
    """Build the calendar widget for the month *state* currently shows.

    compact=True is the small layout: no tab row, plus today's date and
    the number of entries written this month.
    """
    year, month = displayed_month(today, state.month_offset)
    dates, ids_by_date = dated_entry_index(parse_entries(cache))
    dates = canonical_dates(dates)

    cells = build_calendar_grid(year, month, dates, today, config.first_weekday)
    targets = [
        day_cell_target(c.iso_date, dates, ids_by_date) if c.iso_date else None
        for c in cells
    ]

    model = CalendarWidgetModel(
        widget_id=widget_id,
        year=year,
        month=month,
        title=format_month_title(year, month, config.locale),
        cells=cells,
        cell_targets=targets,
        prev_month=NavigationTarget.of(PREV_MONTH, widget_id=widget_id),
        next_month=NavigationTarget.of(NEXT_MONTH, widget_id=widget_id),
        open_app=NavigationTarget.of(OPEN_APP),
    )
    if compact:
        model.today_label = format_short_date(parse_iso_date(today), config.locale)
        model.month_count_label = label(
            config.locale, "month_count", count=month_entry_count(dates, year, month)
        )
    else:
        model.tabs = [tab_target(t) for t in (TAB_CALENDAR, TAB_DIARY, TAB_MEMO, TAB_CALCULATOR)]
    return model


def change_month(
    repo: WidgetStateRepository,
    widget_id: int,
    delta: int,
    today: str | None = None,
) -> WidgetState:
    """Move a calendar widget's displayed month by *delta* and persist it.

    With *today*, a move past year 1 or 9999 raises InvalidArgument and the
    stored offset is left unchanged.
    """
    state = repo.get(widget_id)
    if today is not None:
        displayed_month(today, state.month_offset + delta)
    state.month_offset += delta
    repo.save(widget_id, state)
    return state


def handle_widget_action(
    repo: WidgetStateRepository,
    widget_id: int,
    action: str,
    today: str | None = None,
) -> WidgetState:
    """Apply a widget-internal action (prev/next month buttons)."""
    if action == PREV_MONTH:
        return change_month(repo, widget_id, -1, today)
    if action == NEXT_MONTH:
        return change_month(repo, widget_id, 1, today)
    raise InvalidArgument(f"Unknown widget action: {action!r}")


# ── Diary list widget ─────────────────────────────────────────


@dataclass
class RowModel:
    slot: MemoSlot
    target: NavigationTarget

    def to_dict(self) -> dict[str, Any]:
        d = self.slot.to_dict()
        d["target"] = self.target.to_dict()
        return d


@dataclass
class DiaryWidgetModel:
    today_label: str
    entry_count_label: str
    rows: list[RowModel]
    open_app: NavigationTarget
    new_entry: NavigationTarget

    def to_dict(self) -> dict[str, Any]:
        return {
            "todayLabel": self.today_label,
            "entryCountLabel": self.entry_count_label,
            "rows": [r.to_dict() for r in self.rows],
            "openApp": self.open_app.to_dict(),
            "newEntry": self.new_entry.to_dict(),
        }


def diary_widget(cache: dict[str, Any], config: WidgetConfig) -> DiaryWidgetModel:
    """Recent diary entries as pushed by the app (entry_{i}_* keys)."""
    rows = [
        RowModel(slot=slot, target=view_memo_target(slot.id))
        for slot in recent_entries(cache, config.recent_limit)
    ]
    return DiaryWidgetModel(
        today_label=str(cache.get("today_date", "") or ""),
        entry_count_label=str(cache.get("entry_count") or label(config.locale, "entry_count", count=0)),
        rows=rows,
        open_app=NavigationTarget.of(OPEN_APP),
        new_entry=NavigationTarget.of(NEW_ENTRY),
    )


# ── Memo list widget ──────────────────────────────────────────


@dataclass
class MemoWidgetModel:
    rows: list[RowModel]
    empty_message: str | None
    empty_target: NavigationTarget | None
    add_memo: NavigationTarget

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": [r.to_dict() for r in self.rows],
            "emptyMessage": self.empty_message,
            "emptyTarget": _target_dict(self.empty_target),
            "addMemo": self.add_memo.to_dict(),
        }


def memo_widget(cache: dict[str, Any], config: WidgetConfig) -> MemoWidgetModel:
    rows = [
        RowModel(slot=slot, target=view_memo_target(slot.id))
        for slot in recent_memos(cache, config.recent_limit, config.locale)
    ]
    if rows:
        return MemoWidgetModel(rows=rows, empty_message=None, empty_target=None,
                               add_memo=write_general_target())
    return MemoWidgetModel(
        rows=[],
        empty_message=label(config.locale, "no_memos"),
        empty_target=write_general_target(),
        add_memo=write_general_target(),
    )


# ── Single memo widget ────────────────────────────────────────


@dataclass
class SingleMemoWidgetModel:
    widget_id: int
    memo: SelectedMemo | None
    show_icons: bool
    target: NavigationTarget
    settings: NavigationTarget

    def to_dict(self) -> dict[str, Any]:
        return {
            "widgetId": self.widget_id,
            "memo": self.memo.to_dict() if self.memo else None,
            "showIcons": self.show_icons,
            "target": self.target.to_dict(),
            "settings": self.settings.to_dict(),
        }


def single_memo_widget(state: WidgetState, widget_id: int) -> SingleMemoWidgetModel:
    """A widget pinned to one memo, or its "pick a memo" empty state."""
    check_widget_id(widget_id)
    memo = state.selected_memo
    settings = configure_target(widget_id)
    if memo is None:
        return SingleMemoWidgetModel(widget_id=widget_id, memo=None, show_icons=False,
                                     target=settings, settings=settings)
    show_icons = memo.type != "general" and bool(memo.icons)
    return SingleMemoWidgetModel(
        widget_id=widget_id,
        memo=memo,
        show_icons=show_icons,
        target=view_memo_target(memo.id),
        settings=settings,
    )


@dataclass
class MemoChoice:
    id: str
    title: str
    preview: str
    date: str
    selected: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "preview": self.preview,
            "date": self.date,
            "selected": self.selected,
        }


def memo_choices(
    cache: dict[str, Any],
    config: WidgetConfig,
    selected_id: str | None = None,
) -> list[MemoChoice]:
    """Rows for the single-memo picker, newest first.

    The row whose id is *selected_id* (the memo already pinned) is marked.
    """
    out = []
    for entry in sort_entries_newest_first(parse_entries(cache)):
        content = entry.content
        if len(content) > config.preview_length:
            content = content[: config.preview_length] + "..."
        out.append(MemoChoice(
            id=entry.id,
            title=entry.title or label(config.locale, "untitled"),
            preview=content,
            date=entry.date or entry.updated_at,
            selected=bool(selected_id) and entry.id == selected_id,
        ))
    return out


@dataclass
class MemoPickerModel:
    widget_id: int
    choices: list[MemoChoice]
    empty_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "widgetId": self.widget_id,
            "choices": [c.to_dict() for c in self.choices],
            "emptyMessage": self.empty_message,
        }


def memo_picker(
    cache: dict[str, Any],
    state: WidgetState,
    config: WidgetConfig,
    widget_id: int,
) -> MemoPickerModel:
    """Configuration screen for a single-memo widget."""
    check_widget_id(widget_id)
    selected_id = state.selected_memo.id if state.selected_memo is not None else None
    choices = memo_choices(cache, config, selected_id)
    return MemoPickerModel(
        widget_id=widget_id,
        choices=choices,
        empty_message=None if choices else label(config.locale, "no_memos"),
    )


def memo_display_date(entry: Entry, locale: str = "en") -> str:
    """Long date label for a pinned memo; raw value if it does not parse."""
    if entry.type == "dated" and entry.date:
        raw = entry.date
    else:
        raw = entry.updated_at.split("T")[0]
        if not raw:
            return entry.updated_at
    try:
        d: date = parse_iso_date(raw)
    except InvalidArgument:
        return entry.date if entry.type == "dated" and entry.date else entry.updated_at
    return format_long_date(d, locale)


def select_memo(
    repo: WidgetStateRepository,
    widget_id: int,
    entries: list[Entry],
    memo_id: str,
    config: WidgetConfig,
) -> WidgetState:
    """Pin *memo_id* to a single-memo widget. Raises KeyError if unknown."""
    entry = find_entry(entries, memo_id)
    if entry is None:
        raise KeyError(memo_id)
    state = repo.get(widget_id)
    state.selected_memo = SelectedMemo(
        id=entry.id,
        date=memo_display_date(entry, config.locale),
        title=entry.title,
        content=entry.content,
        icons="",
        type=entry.type,
    )
    repo.save(widget_id, state)
    logger.info("Widget %d now shows memo %s", widget_id, entry.id)
    return state
