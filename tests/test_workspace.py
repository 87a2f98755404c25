"""Tests for diarywidgets/workspace.py and fileio.py."""

import logging
import re

import pytest
import yaml

from diarywidgets.fileio import read_json, read_yaml, write_json_atomic, write_yaml_atomic
from diarywidgets.models import WidgetConfig
from diarywidgets.workspace import (
    config_path,
    get_widget_timezone,
    load_config,
    save_config,
    today_str,
    workspace_root,
)


def test_workspace_root_from_env(workspace):
    assert workspace_root() == workspace.resolve()
    assert config_path() == workspace.resolve() / "widgets.yaml"


def test_load_config(workspace):
    config = load_config()
    assert config.first_weekday == 0
    assert config.timezone == "UTC"


def test_load_config_missing(tmp_path):
    assert load_config(tmp_path) == WidgetConfig()


def test_save_config_round_trip(tmp_path):
    save_config(WidgetConfig(first_weekday=1, locale="ko"), tmp_path)
    raw = yaml.safe_load((tmp_path / "widgets.yaml").read_text(encoding="utf-8"))
    assert raw["first_weekday"] == 1
    assert load_config(tmp_path).locale == "ko"


def test_unknown_timezone_falls_back_to_utc(tmp_path, caplog):
    write_yaml_atomic(tmp_path / "widgets.yaml", {"timezone": "Mars/Olympus"})
    with caplog.at_level(logging.WARNING):
        assert get_widget_timezone(tmp_path).key == "UTC"
    assert "Mars/Olympus" in caplog.text


def test_today_str_format(workspace):
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", today_str())


def test_atomic_writes(tmp_path):
    target = tmp_path / "nested" / "state.json"
    write_json_atomic(target, {"1": {"monthOffset": -1}})
    assert read_json(target) == {"1": {"monthOffset": -1}}
    assert list(target.parent.iterdir()) == [target]


def test_readers_tolerate_missing_and_non_mapping(tmp_path):
    assert read_json(tmp_path / "nope.json") == {}
    (tmp_path / "list.yaml").write_text("- a\n- b\n", encoding="utf-8")
    assert read_yaml(tmp_path / "list.yaml") == {}


@pytest.mark.parametrize("text", [
    "first_weekday: 9\n",
    "recent_limit: abc\n",
    "recent_limit: null\n",
    "locale: [unclosed\n",
])
def test_invalid_config_falls_back_to_defaults(tmp_path, caplog, text):
    (tmp_path / "widgets.yaml").write_text(text, encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert load_config(tmp_path) == WidgetConfig()
    assert "using default widget settings" in caplog.text


def test_timezone_survives_unparsable_config(tmp_path):
    (tmp_path / "widgets.yaml").write_text("timezone: [Asia/Seoul\n", encoding="utf-8")
    assert get_widget_timezone(tmp_path).key == "UTC"


def test_failed_write_keeps_previous_file(tmp_path, monkeypatch):
    target = tmp_path / "home_widget.json"
    write_json_atomic(target, {"entry_count": "1 entries"})

    def broken_fsync(fd):
        raise OSError("disk full")

    monkeypatch.setattr("diarywidgets.fileio.os.fsync", broken_fsync)
    with pytest.raises(OSError):
        write_json_atomic(target, {"entry_count": "2 entries"})
    assert read_json(target) == {"entry_count": "1 entries"}
    assert list(tmp_path.iterdir()) == [target]
