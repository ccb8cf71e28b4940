from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from contracts.layout import PageDetail, Row


def rows_artifact(
    *,
    rows: list[Row],
    pages: list[PageDetail],
    meta: dict[str, Any],
) -> dict[str, Any]:
    return {
        "rows": [r.to_dict() for r in rows],
        "pages": [p.to_dict() for p in pages],
        "meta": dict(meta),
    }


def serialize_rows_artifact(payload: dict[str, Any]) -> str:
    """
    Stable JSON serialization (sorted keys, fixed separators).
    """

    return json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"), indent=2) + "\n"


def write_rows_json_artifact(*, payload: dict[str, Any], out_file: Path) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(serialize_rows_artifact(payload), encoding="utf-8")
