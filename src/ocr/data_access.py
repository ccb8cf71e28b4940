from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class DataAccessError(Exception):
    pass


def resolve_json_under_data_root(*, data_root: Path, relpath: str) -> Path:
    """
    Resolve a batch JSON file given relative to an explicit data_root.
    """

    if relpath.startswith(("/", "\\")) or (":" in relpath and "\\" in relpath):
        raise DataAccessError(f"Expected a relative path under data_root, got: {relpath!r}")

    root = data_root.expanduser().resolve()
    candidate = (root / relpath).resolve()
    if not candidate.is_relative_to(root):
        raise DataAccessError(f"Path traversal or external reference detected: relpath={relpath!r}")
    if not candidate.is_file():
        raise DataAccessError(f"Batch file not found under data_root: {relpath!r}")

    return candidate


def read_json_object(path: Path) -> dict[str, Any]:
    """
    Raises json.JSONDecodeError for invalid JSON, TypeError for non-object payloads.
    """

    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise TypeError(f"Expected a JSON object in {path.name}, got {type(raw).__name__}")
    return raw
