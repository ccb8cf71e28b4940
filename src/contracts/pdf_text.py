from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PdfTextItem:
    """
    One text run from a PDF text layer, in PDF user space (origin bottom-left).
    """

    text: str
    x: float
    y: float  # baseline, measured upward from the page bottom
    width: float
    height: float
    font_id: str  # page-local identifier, resolved via PdfPageContents.styles
    transform: tuple[float, float, float, float, float, float]

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "font_id": self.font_id,
            "transform": list(self.transform),
        }


@dataclass(frozen=True, slots=True)
class PdfPageContents:
    page_number: int  # 1-indexed
    page_width: float  # points
    page_height: float  # points
    styles: dict[str, str]  # font_id -> font name
    items: list[PdfTextItem]

    def to_dict(self) -> dict[str, Any]:
        return {
            "page_number": self.page_number,
            "page_width": self.page_width,
            "page_height": self.page_height,
            "styles": dict(sorted(self.styles.items())),
            "items": [i.to_dict() for i in self.items],
        }
