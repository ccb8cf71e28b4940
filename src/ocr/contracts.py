from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from contracts.vision import BatchResponse


@dataclass(frozen=True, slots=True)
class OcrBatchError:
    code: str
    message: str
    detail: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "detail": self.detail}


@dataclass(frozen=True, slots=True)
class VisionBatchLoadResult:
    """
    One logical document assembled from one or more Cloud Vision output shards.

    On failure, `ok` is False and `batch` is None; shards are never half-merged.
    """

    ok: bool
    source_relpaths: list[str]
    batch: BatchResponse | None
    errors: list[OcrBatchError]
    meta: dict[str, Any]


@dataclass(frozen=True, slots=True)
class OcrBatchConfig:
    """
    `data_root` must be the resolved root passed in by the caller; this module
    does not read environment variables.
    """

    data_root: Path

    def __post_init__(self) -> None:
        if not isinstance(self.data_root, Path):
            raise TypeError("data_root must be a pathlib.Path")
