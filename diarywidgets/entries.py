"""Reading diary entries and memo rows from the app's widget cache.

The main app writes a flat key-value cache (home_widget.json). The widget
side only reads it. Corrupt or partial data is skipped with a warning so a
widget can still show its empty state.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from diarywidgets.dates import InvalidArgument, check_year_month, parse_iso_date
from diarywidgets.fileio import read_json, write_json_atomic
from diarywidgets.labels import label
from diarywidgets.models import Entry, MemoSlot
from diarywidgets.workspace import cache_path

logger = logging.getLogger(__name__)

ENTRY_KEYS = ("entries", "flutter.entries")


# ── Cache file ────────────────────────────────────────────────


def load_cache(root: Path | None = None) -> dict[str, Any]:
    """Read home_widget.json; missing or corrupt files give an empty cache."""
    path = cache_path(root)
    try:
        return read_json(path)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Ignoring corrupt widget cache %s: %s", path, e)
        return {}


def update_cache(values: dict[str, Any], root: Path | None = None) -> dict[str, Any]:
    """Merge *values* into the cache (what the app does on each data push)."""
    cache = load_cache(root)
    cache.update(values)
    write_json_atomic(cache_path(root), cache)
    return cache


# ── Entries ───────────────────────────────────────────────────


def _raw_entries(cache: dict[str, Any]) -> Any:
    for key in ENTRY_KEYS:
        if cache.get(key) is not None:
            return cache[key]
    for key, value in cache.items():
        if "entries" in key and value is not None:
            logger.debug("Found entries under key %r", key)
            return value
    return []


def parse_entries(cache: dict[str, Any]) -> list[Entry]:
    """Decode the entries array stored in the cache.

    The value may be a JSON string (as written by the app) or an already
    decoded list.
    """
    raw = _raw_entries(cache)
    if isinstance(raw, str):
        try:
            raw = json.loads(raw) if raw.strip() else []
        except json.JSONDecodeError as e:
            logger.warning("Ignoring malformed entries JSON: %s", e)
            return []
    if not isinstance(raw, list):
        logger.warning("Ignoring entries of type %s", type(raw).__name__)
        return []

    out = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            logger.warning("Skipping entry %d: not an object", i)
            continue
        entry = Entry.from_dict(item)
        if not entry.id:
            logger.warning("Skipping entry %d: missing id", i)
            continue
        out.append(entry)
    return out


def dated_entry_index(entries: list[Entry]) -> tuple[set[str], dict[str, str]]:
    """Return (dates with a dated entry, date -> entry id).

    When several entries share a date the last one wins the id mapping.
    """
    dates: set[str] = set()
    ids_by_date: dict[str, str] = {}
    for entry in entries:
        if entry.type != "dated" or not entry.date:
            continue
        dates.add(entry.date)
        if entry.id:
            ids_by_date[entry.date] = entry.id
    return dates, ids_by_date


def canonical_dates(dates: set[str]) -> set[str]:
    """Keep only dates the grid accepts; the rest are logged and dropped."""
    out = set()
    for value in dates:
        try:
            parse_iso_date(value)
        except InvalidArgument:
            logger.warning("Dropping non-canonical entry date %r", value)
            continue
        out.add(value)
    return out


def month_entry_count(dates: set[str], year: int, month: int) -> int:
    """Count dates falling in year/month by exact field comparison.

    Malformed dates never count, even when they share the 'YYYY-MM' prefix.
    """
    check_year_month(year, month)
    count = 0
    for value in dates:
        try:
            d = parse_iso_date(value)
        except InvalidArgument:
            continue
        if d.year == year and d.month == month:
            count += 1
    return count


def sort_entries_newest_first(entries: list[Entry]) -> list[Entry]:
    return sorted(entries, key=lambda e: e.sort_key(), reverse=True)


def find_entry(entries: list[Entry], entry_id: str) -> Entry | None:
    for entry in entries:
        if entry.id == entry_id:
            return entry
    return None


# ── Recent rows ───────────────────────────────────────────────


def _get_str(cache: dict[str, Any], key: str, default: str = "") -> str:
    value = cache.get(key)
    if value is None:
        return default
    return str(value)


def recent_memos(cache: dict[str, Any], limit: int = 3, locale: str = "en") -> list[MemoSlot]:
    """Read memo_{i}_* rows; rows with no id are skipped."""
    out = []
    for i in range(limit):
        memo_id = _get_str(cache, f"memo_{i}_id")
        if not memo_id:
            continue
        out.append(MemoSlot(
            id=memo_id,
            date=_get_str(cache, f"memo_{i}_date"),
            title=_get_str(cache, f"memo_{i}_title", label(locale, "untitled")),
            content=_get_str(cache, f"memo_{i}_content"),
        ))
    return out


def recent_entries(cache: dict[str, Any], limit: int = 3) -> list[MemoSlot]:
    """Read entry_{i}_* rows; a row needs both an id and a date."""
    out = []
    for i in range(limit):
        entry_id = _get_str(cache, f"entry_{i}_id")
        entry_date = _get_str(cache, f"entry_{i}_date")
        if not entry_id or not entry_date:
            continue
        out.append(MemoSlot(
            id=entry_id,
            date=entry_date,
            title=_get_str(cache, f"entry_{i}_title"),
            icons=_get_str(cache, f"entry_{i}_icons"),
        ))
    return out
