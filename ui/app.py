from __future__ import annotations

import os
import secrets
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from diarywidgets import (
    InvalidArgument,
    JsonWidgetStateRepository,
    WidgetConfig,
    WidgetStateRepository,
    build_calendar_grid,
    calendar_widget,
    change_month,
    diary_widget,
    load_cache,
    load_config,
    memo_picker,
    memo_widget,
    parse_entries,
    save_config,
    select_memo,
    single_memo_widget,
    today_str as _today_str,
    update_cache,
    widget_state_path,
    workspace_root as _workspace_root,
)
from diarywidgets.entries import canonical_dates, dated_entry_index
from diarywidgets.repository import check_widget_id


# ── Auth ──────────────────────────────────────────────────────

app = FastAPI(title="Diary Widgets", version="0.1.0")

security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("DIARY_WIDGETS_USERNAME", "")
    expected_password = os.environ.get("DIARY_WIDGETS_PASSWORD", "")

    if not expected_username or not expected_password:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


def get_repository() -> WidgetStateRepository:
    return JsonWidgetStateRepository(widget_state_path(_workspace_root()))


def _widget_id(widget_id: int) -> int:
    try:
        return check_widget_id(widget_id)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))


# ── Health & config ───────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/api/config")
def api_get_config(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return load_config(_workspace_root()).to_dict()


@app.put("/api/config")
def api_put_config(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Replace widgets.yaml.

    Unparsable values (first_weekday, recent_limit, preview_length) are
    rejected with 400. An unknown locale is stored as "en" and out-of-range
    limits are clamped, matching how widgets.yaml itself is read.
    """
    root = _workspace_root()
    try:
        config = WidgetConfig.from_dict(payload)
    except (InvalidArgument, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    save_config(config, root)
    return {"ok": True, "config": config.to_dict()}


# ── Cache push (main app -> widgets) ──────────────────────────

@app.put("/api/cache")
def api_put_cache(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Merge key/values into the widget cache."""
    cache = update_cache(payload, _workspace_root())
    return {"ok": True, "keys": sorted(cache)}


# ── Calendar ──────────────────────────────────────────────────

@app.get("/api/grid")
def api_grid(
    year: int,
    month: int,
    today: str | None = None,
    first_weekday: int = 0,
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    """Raw 42-cell grid for the given month, using cached entry dates."""
    root = _workspace_root()
    dates, _ids = dated_entry_index(parse_entries(load_cache(root)))
    try:
        cells = build_calendar_grid(year, month, canonical_dates(dates), today or _today_str(root), first_weekday)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"year": year, "month": month, "cells": [c.to_dict() for c in cells]}


@app.get("/api/widgets/{widget_id}/calendar")
def api_calendar_widget(
    widget_id: int,
    compact: bool = False,
    repo: WidgetStateRepository = Depends(get_repository),
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    root = _workspace_root()
    state = repo.get(_widget_id(widget_id))
    try:
        model = calendar_widget(load_cache(root), state, load_config(root), _today_str(root),
                                widget_id=widget_id, compact=compact)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    return model.to_dict()


@app.post("/api/widgets/{widget_id}/month")
def api_change_month(
    widget_id: int,
    payload: dict[str, Any] = Body(...),
    repo: WidgetStateRepository = Depends(get_repository),
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    """Prev/next month buttons: body {"delta": -1} or {"delta": 1}."""
    delta = payload.get("delta")
    if not isinstance(delta, int) or isinstance(delta, bool) or delta not in (-1, 1):
        raise HTTPException(status_code=400, detail="delta must be -1 or 1")
    try:
        state = change_month(repo, _widget_id(widget_id), delta, _today_str(_workspace_root()))
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "monthOffset": state.month_offset}


# ── List widgets ──────────────────────────────────────────────

@app.get("/api/widgets/diary")
def api_diary_widget(username: str = Depends(get_current_user)) -> dict[str, Any]:
    root = _workspace_root()
    return diary_widget(load_cache(root), load_config(root)).to_dict()


@app.get("/api/widgets/memos")
def api_memo_widget(username: str = Depends(get_current_user)) -> dict[str, Any]:
    root = _workspace_root()
    return memo_widget(load_cache(root), load_config(root)).to_dict()


# ── Single memo widget ────────────────────────────────────────

@app.get("/api/widgets/{widget_id}/memo")
def api_single_memo(
    widget_id: int,
    repo: WidgetStateRepository = Depends(get_repository),
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    state = repo.get(_widget_id(widget_id))
    return single_memo_widget(state, widget_id).to_dict()


@app.get("/api/widgets/{widget_id}/memo/choices")
def api_memo_choices(
    widget_id: int,
    repo: WidgetStateRepository = Depends(get_repository),
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    """Picker rows; the memo already pinned to the widget is marked selected."""
    root = _workspace_root()
    state = repo.get(_widget_id(widget_id))
    return memo_picker(load_cache(root), state, load_config(root), widget_id).to_dict()


@app.put("/api/widgets/{widget_id}/memo")
def api_select_memo(
    widget_id: int,
    payload: dict[str, Any] = Body(...),
    repo: WidgetStateRepository = Depends(get_repository),
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    memo_id = str(payload.get("memo_id", "") or "")
    if not memo_id:
        raise HTTPException(status_code=400, detail="Missing memo_id")
    root = _workspace_root()
    entries = parse_entries(load_cache(root))
    try:
        state = select_memo(repo, _widget_id(widget_id), entries, memo_id, load_config(root))
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Memo not found: {memo_id}")
    return {"ok": True, "widget": single_memo_widget(state, widget_id).to_dict()}


@app.delete("/api/widgets/{widget_id}")
def api_delete_widget(
    widget_id: int,
    repo: WidgetStateRepository = Depends(get_repository),
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    """Widget removed from the home screen: forget its state."""
    deleted = repo.delete(_widget_id(widget_id))
    if not deleted:
        raise HTTPException(status_code=404, detail=f"No state for widget {widget_id}")
    return {"ok": True, "widget_id": widget_id}
