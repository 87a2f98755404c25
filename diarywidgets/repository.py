"""Per-widget-instance state storage.

Each placed widget has an integer id. Its stored state (displayed month
offset, pinned memo) lives behind a WidgetStateRepository that callers
receive explicitly.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from diarywidgets.dates import InvalidArgument
from diarywidgets.fileio import read_json, write_json_atomic
from diarywidgets.models import WidgetState
from diarywidgets.workspace import widget_state_path

logger = logging.getLogger(__name__)


def check_widget_id(widget_id: int) -> int:
    if not isinstance(widget_id, int) or isinstance(widget_id, bool) or widget_id < 0:
        raise InvalidArgument(f"Invalid widget id: {widget_id!r}")
    return widget_id


class WidgetStateRepository(ABC):
    """Maps widget ids to their WidgetState."""

    @abstractmethod
    def get(self, widget_id: int) -> WidgetState:
        """Return the stored state, or a default state for unknown ids."""

    @abstractmethod
    def save(self, widget_id: int, state: WidgetState) -> None:
        ...

    @abstractmethod
    def delete(self, widget_id: int) -> bool:
        """Forget a widget. Returns False if nothing was stored."""

    @abstractmethod
    def widget_ids(self) -> list[int]:
        ...


class InMemoryWidgetStateRepository(WidgetStateRepository):
    def __init__(self) -> None:
        self._states: dict[int, dict] = {}

    def get(self, widget_id: int) -> WidgetState:
        check_widget_id(widget_id)
        return WidgetState.from_dict(self._states.get(widget_id, {}))

    def save(self, widget_id: int, state: WidgetState) -> None:
        check_widget_id(widget_id)
        self._states[widget_id] = state.to_dict()

    def delete(self, widget_id: int) -> bool:
        check_widget_id(widget_id)
        return self._states.pop(widget_id, None) is not None

    def widget_ids(self) -> list[int]:
        return sorted(self._states)


class JsonWidgetStateRepository(WidgetStateRepository):
    """Stores all widget states in one JSON object keyed by widget id."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path is not None else widget_state_path()

    def _load(self) -> dict[str, dict]:
        try:
            data = read_json(self.path)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Ignoring corrupt widget state %s: %s", self.path, e)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, dict)}

    def get(self, widget_id: int) -> WidgetState:
        check_widget_id(widget_id)
        record = self._load().get(str(widget_id), {})
        try:
            return WidgetState.from_dict(record)
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring corrupt state for widget %d in %s: %s", widget_id, self.path, e)
            return WidgetState()

    def save(self, widget_id: int, state: WidgetState) -> None:
        check_widget_id(widget_id)
        data = self._load()
        data[str(widget_id)] = state.to_dict()
        write_json_atomic(self.path, data)
        logger.debug("Saved state for widget %d", widget_id)

    def delete(self, widget_id: int) -> bool:
        check_widget_id(widget_id)
        data = self._load()
        if data.pop(str(widget_id), None) is None:
            return False
        write_json_atomic(self.path, data)
        logger.debug("Deleted state for widget %d", widget_id)
        return True

    def widget_ids(self) -> list[int]:
        return sorted(int(k) for k in self._load() if k.isdigit())
