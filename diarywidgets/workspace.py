"""Workspace root, configuration, timezone, path helpers."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from diarywidgets.fileio import read_yaml, write_yaml_atomic
from diarywidgets.models import WidgetConfig

logger = logging.getLogger(__name__)


def workspace_root() -> Path:
    """Get the workspace root directory (holds the cache, state and config)."""
    return Path(
        os.environ.get("DIARY_WIDGETS_ROOT", str(Path.home() / ".diary-widgets"))
    ).expanduser().resolve()


# ── Path helpers ──────────────────────────────────────────────

def cache_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "home_widget.json"


def widget_state_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "widget_state.json"


def config_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "widgets.yaml"


# ── Configuration ─────────────────────────────────────────────

def load_config(root: Path | None = None) -> WidgetConfig:
    """Load widgets.yaml, falling back to defaults when missing or invalid."""
    path = config_path(root)
    try:
        return WidgetConfig.from_dict(read_yaml(path))
    except (yaml.YAMLError, TypeError, ValueError) as e:
        logger.warning("Invalid %s, using default widget settings: %s", path, e)
        return WidgetConfig()


def save_config(config: WidgetConfig, root: Path | None = None) -> None:
    write_yaml_atomic(config_path(root), config.to_dict())


def get_widget_timezone(root: Path | None = None) -> ZoneInfo:
    """Get the widgets' timezone from widgets.yaml, defaulting to UTC."""
    try:
        name = read_yaml(config_path(root)).get("timezone", "UTC")
    except yaml.YAMLError:
        name = "UTC"
    try:
        return ZoneInfo(str(name))
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r in widgets.yaml, using UTC", name)
        return ZoneInfo("UTC")


def now_local(root: Path | None = None) -> datetime:
    return datetime.now(get_widget_timezone(root))


def today_str(root: Path | None = None) -> str:
    """Get today's date string (YYYY-MM-DD) in the widgets' timezone."""
    return now_local(root).date().isoformat()
