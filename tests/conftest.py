"""Shared test fixtures for diary widget tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml


ENTRIES = [
    {"id": "e-0305", "type": "dated", "title": "Spring walk", "content": "Cherry trees are budding.",
     "date": "2024-03-05", "updatedAt": "2024-03-05T21:10:00"},
    {"id": "e-0331", "type": "dated", "title": "", "content": "End of the month.",
     "date": "2024-03-31", "updatedAt": "2024-03-31T22:00:00"},
    {"id": "e-0214", "type": "dated", "title": "Valentine", "content": "Dinner out.",
     "date": "2024-02-14", "updatedAt": "2024-02-14T23:00:00"},
    {"id": "m-1", "type": "general", "title": "Groceries",
     "content": "Milk, eggs, flour, sugar, butter, apples, pears and a very long tail of items",
     "date": "", "updatedAt": "2024-03-20T08:30:00"},
]


@pytest.fixture
def cache() -> dict:
    """Cache content as the app writes it (entries stored as a JSON string)."""
    return {
        "entries": json.dumps(ENTRIES),
        "today_date": "March 20",
        "entry_count": "3 entries",
        "entry_0_id": "e-0331",
        "entry_0_date": "2024-03-31",
        "entry_0_title": "End of the month",
        "entry_0_icons": "☀️",
        "entry_1_id": "e-0305",
        "entry_1_date": "2024-03-05",
        "entry_1_title": "Spring walk",
        "memo_0_id": "m-1",
        "memo_0_date": "2024-03-20",
        "memo_0_title": "Groceries",
        "memo_0_content": "Milk, eggs",
    }


@pytest.fixture
def workspace(tmp_path: Path, cache: dict) -> Path:
    """Create a temporary widget workspace with config and cache."""
    root = tmp_path / "widgets"
    root.mkdir(parents=True)

    config = {
        "timezone": "UTC",
        "first_weekday": "sun",
        "locale": "en",
        "recent_limit": 3,
    }
    (root / "widgets.yaml").write_text(
        yaml.dump(config, default_flow_style=False), encoding="utf-8"
    )
    (root / "home_widget.json").write_text(
        json.dumps(cache, indent=2, ensure_ascii=False), encoding="utf-8"
    )

    os.environ["DIARY_WIDGETS_ROOT"] = str(root)
    yield root
    if "DIARY_WIDGETS_ROOT" in os.environ:
        del os.environ["DIARY_WIDGETS_ROOT"]
