"""Reading and atomically replacing the widget workspace files.

The cache and state files are JSON objects, the settings file is YAML.
Readers return {} for a missing, blank or non-mapping file and let parse
errors propagate so callers can log and recover.
"""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Callable

import yaml


def _read_mapping(path: Path, parse: Callable[[str], Any]) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    if not text.strip():
        return {}
    data = parse(text)
    return data if isinstance(data, dict) else {}


def read_json(path: Path) -> dict[str, Any]:
    """Raises json.JSONDecodeError on corrupt content."""
    return _read_mapping(path, json.loads)


def read_yaml(path: Path) -> dict[str, Any]:
    """Raises yaml.YAMLError on corrupt content."""
    return _read_mapping(path, yaml.safe_load)


def _replace_file(path: Path, content: str) -> None:
    """Write a locked sibling temp file, fsync it, then rename it over *path*.

    Readers see either the old file or the new one, never a partial write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def write_json_atomic(path: Path, data: dict[str, Any]) -> None:
    _replace_file(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")


def write_yaml_atomic(path: Path, data: dict[str, Any]) -> None:
    _replace_file(path, yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False))
