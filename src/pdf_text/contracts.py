from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from contracts.pdf_text import PdfPageContents


class PdfTextEngineName(str, Enum):
    """
    Text-layer backends.
    """

    PYPDFIUM2 = "pypdfium2"


@dataclass(frozen=True, slots=True)
class PdfTextError:
    code: str
    message: str
    detail: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "detail": self.detail}


@dataclass(frozen=True, slots=True)
class PdfTextResult:
    """
    Text runs of every selected page, ascending by page number.

    On failure, `ok` is False and `pages` is empty; no partial documents.
    """

    ok: bool
    engine: PdfTextEngineName
    source_pdf_relpath: str
    pages: list[PdfPageContents]
    errors: list[PdfTextError]
    meta: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "engine": self.engine.value,
            "source_pdf_relpath": self.source_pdf_relpath,
            "pages": [p.to_dict() for p in self.pages],
            "errors": [e.to_dict() for e in self.errors],
            "meta": dict(self.meta),
        }


@dataclass(frozen=True, slots=True)
class PdfTextConfig:
    """
    `data_root` must be passed explicitly; no environment variable reads here.
    """

    data_root: Path
    engine: PdfTextEngineName = PdfTextEngineName.PYPDFIUM2
    page_selection: str | None = None  # e.g. "1,3-5"; None => all pages

    def __post_init__(self) -> None:
        if not isinstance(self.data_root, Path):
            raise TypeError("data_root must be a pathlib.Path")
