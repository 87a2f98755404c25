"""Navigation capability: widgets ask the host app to open a screen.

Widgets never build links themselves. They produce NavigationTarget values
and a host-supplied Navigator turns them into whatever its platform needs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from diarywidgets.models import NavigationTarget

# Actions understood by the app
OPEN_APP = "openapp"
NEW_ENTRY = "newentry"
HOME = "home"
VIEW_MEMO = "viewmemo"
VIEW_DATE = "viewdate"
WRITE = "write"
CONFIGURE = "configure"
PREV_MONTH = "prev_month"
NEXT_MONTH = "next_month"

# Tabs of the app's home screen
TAB_CALENDAR = 0
TAB_DIARY = 1
TAB_MEMO = 2
TAB_CALCULATOR = 3


class Navigator(Protocol):
    def navigate(self, action: str, params: Mapping[str, str]) -> None:
        ...


class RecordingNavigator:
    """Navigator that only remembers what it was asked to open."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, str]]] = []

    def navigate(self, action: str, params: Mapping[str, str]) -> None:
        self.calls.append((action, dict(params)))


def dispatch(target: NavigationTarget, navigator: Navigator) -> None:
    navigator.navigate(target.action, target.params_dict())


def day_cell_target(
    iso_date: str,
    dates: set[str],
    ids_by_date: Mapping[str, str],
) -> NavigationTarget:
    """Where tapping a day goes: the entry, the day's entries, or a new entry."""
    if iso_date in dates:
        entry_id = ids_by_date.get(iso_date)
        if entry_id:
            return NavigationTarget.of(VIEW_MEMO, id=entry_id)
        return NavigationTarget.of(VIEW_DATE, date=iso_date)
    return NavigationTarget.of(WRITE, date=iso_date)


def tab_target(tab: int) -> NavigationTarget:
    return NavigationTarget.of(HOME, tab=tab)


def view_memo_target(memo_id: str) -> NavigationTarget:
    return NavigationTarget.of(VIEW_MEMO, id=memo_id)


def write_general_target() -> NavigationTarget:
    return NavigationTarget.of(WRITE, type="general")


def configure_target(widget_id: int) -> NavigationTarget:
    return NavigationTarget.of(CONFIGURE, widget_id=widget_id)
