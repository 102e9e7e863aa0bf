"""Utility helpers for JSON/YAML IO and logging."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import yaml

YAML_SUFFIXES = {".yaml", ".yml"}


def stable_json_dumps(obj: object, *, sort_keys: bool = True) -> str:
    """Serialize JSON in a stable, human-readable way with a trailing newline.

    Pass ``sort_keys=False`` for descriptions and shorthands, where attribute
    order is kept for rendering.
    """
    return json.dumps(obj, ensure_ascii=False, sort_keys=sort_keys, indent=2) + "\n"


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def read_data(path: Path) -> Any:
    """Load JSON, or YAML when the file has a YAML suffix."""
    if path.suffix.lower() in YAML_SUFFIXES:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    return read_json(path)


def write_text(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def warn(msg: str) -> None:
    print(msg, file=sys.stderr)
