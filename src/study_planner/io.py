"""File helpers for the CLI: JSON in, JSON and plain text out."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def read_json(path: str | Path) -> dict[str, Any]:
    """Load a request file.

    Raises ``ValueError`` for malformed JSON or a non-object root and
    ``OSError`` when the file cannot be read.
    """
    source = Path(path)
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {source} (line {exc.lineno}, column {exc.colno})") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object at the root of {source}")
    return payload


def write_json(path: str | Path, payload: dict[str, Any]) -> None:
    text = json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)
    Path(path).write_text(text + "\n", encoding="utf-8")


def write_text(path: str | Path, text: str) -> None:
    Path(path).write_text(text, encoding="utf-8")
