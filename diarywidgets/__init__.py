"""Diary widgets core library — widget cache, calendar grid and view models.

Public API re-exports for convenient imports:
    from diarywidgets import build_calendar_grid, calendar_widget, ...
"""

# Calendar arithmetic
from diarywidgets.dates import (
    InvalidArgument,
    is_leap_year,
    days_in_month,
    parse_iso_date,
    shift_month,
    parse_weekday,
)

# Grid
from diarywidgets.calendar_grid import (
    build_calendar_grid,
    leading_blanks,
    weekday_class_for,
)

# Workspace & config
from diarywidgets.workspace import (
    workspace_root,
    cache_path,
    widget_state_path,
    config_path,
    load_config,
    save_config,
    get_widget_timezone,
    today_str,
)

# Cache
from diarywidgets.entries import (
    load_cache,
    update_cache,
    parse_entries,
    dated_entry_index,
    month_entry_count,
    recent_memos,
    recent_entries,
    sort_entries_newest_first,
)

# State & navigation
from diarywidgets.repository import (
    WidgetStateRepository,
    InMemoryWidgetStateRepository,
    JsonWidgetStateRepository,
)
from diarywidgets.navigation import (
    Navigator,
    RecordingNavigator,
    dispatch,
    day_cell_target,
)

# Widgets
from diarywidgets.widgets import (
    calendar_widget,
    change_month,
    handle_widget_action,
    diary_widget,
    memo_widget,
    single_memo_widget,
    memo_choices,
    memo_picker,
    select_memo,
)

# Models
from diarywidgets.models import (
    CalendarCell,
    WeekdayClass,
    Entry,
    MemoSlot,
    SelectedMemo,
    WidgetState,
    NavigationTarget,
    WidgetConfig,
)
