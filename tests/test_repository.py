"""Tests for diarywidgets/repository.py — per-widget state storage."""

import json

import pytest

from diarywidgets.dates import InvalidArgument
from diarywidgets.models import SelectedMemo, WidgetState
from diarywidgets.repository import InMemoryWidgetStateRepository, JsonWidgetStateRepository


@pytest.fixture(params=["memory", "json"])
def repo(request, tmp_path):
    if request.param == "memory":
        return InMemoryWidgetStateRepository()
    return JsonWidgetStateRepository(tmp_path / "widget_state.json")


def test_unknown_widget_gets_default_state(repo):
    state = repo.get(42)
    assert state.month_offset == 0
    assert state.selected_memo is None


def test_save_and_get(repo):
    memo = SelectedMemo(id="m-1", date="March 20, 2024", title="Groceries", content="Milk")
    repo.save(7, WidgetState(month_offset=-2, selected_memo=memo))
    state = repo.get(7)
    assert state.month_offset == -2
    assert state.selected_memo.id == "m-1"
    assert state.selected_memo.title == "Groceries"


def test_widgets_are_independent(repo):
    repo.save(1, WidgetState(month_offset=1))
    repo.save(2, WidgetState(month_offset=-1))
    assert repo.get(1).month_offset == 1
    assert repo.get(2).month_offset == -1
    assert repo.widget_ids() == [1, 2]


def test_delete(repo):
    repo.save(3, WidgetState(month_offset=4))
    assert repo.delete(3) is True
    assert repo.get(3).month_offset == 0
    assert repo.delete(3) is False


def test_get_returns_copy(repo):
    repo.save(5, WidgetState(month_offset=1))
    state = repo.get(5)
    state.month_offset = 99
    assert repo.get(5).month_offset == 1


@pytest.mark.parametrize("widget_id", [-1, "1", True, 1.5])
def test_invalid_widget_id(repo, widget_id):
    with pytest.raises(InvalidArgument):
        repo.get(widget_id)


def test_json_repository_file_layout(tmp_path):
    path = tmp_path / "widget_state.json"
    repo = JsonWidgetStateRepository(path)
    repo.save(12, WidgetState(month_offset=1))
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {"12": {"monthOffset": 1}}


def test_json_repository_corrupt_file(tmp_path, caplog):
    path = tmp_path / "widget_state.json"
    path.write_text("][", encoding="utf-8")
    repo = JsonWidgetStateRepository(path)
    assert repo.get(1).month_offset == 0
    assert "corrupt" in caplog.text
    repo.save(1, WidgetState(month_offset=2))
    assert repo.get(1).month_offset == 2


@pytest.mark.parametrize("offset", ["abc", [1], {"n": 1}])
def test_json_repository_bad_record_reads_as_default(tmp_path, caplog, offset):
    path = tmp_path / "widget_state.json"
    path.write_text(json.dumps({"1": {"monthOffset": offset}, "2": {"monthOffset": 3}}), encoding="utf-8")
    repo = JsonWidgetStateRepository(path)
    assert repo.get(1) == WidgetState()
    assert "corrupt state for widget 1" in caplog.text
    assert repo.get(2).month_offset == 3
    repo.save(1, WidgetState(month_offset=-1))
    assert repo.get(1).month_offset == -1
