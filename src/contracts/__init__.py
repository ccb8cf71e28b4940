"""
Shared data contracts between the adapters and the layout engine.

Adapters (PDF text layer, Cloud Vision OCR) produce these objects; the layout
engine consumes them read-only and produces ordered rows.
"""

from .layout import (
    KNOWN_ANGLES,
    Fragment,
    IntermediateFormatPage,
    IntermediateWord,
    KnownAngle,
    Page,
    PageDetail,
    Row,
    RowItem,
    Size,
    Vector2d,
)
from .pdf_text import PdfPageContents, PdfTextItem
from .vision import BatchResponse, Block, BoundingBox, PageResponse, Paragraph, Symbol, VisionPage, Word

__all__ = [
    "KNOWN_ANGLES",
    "KnownAngle",
    "Vector2d",
    "Size",
    "Fragment",
    "Page",
    "PageDetail",
    "RowItem",
    "Row",
    "IntermediateWord",
    "IntermediateFormatPage",
    "PdfTextItem",
    "PdfPageContents",
    "BoundingBox",
    "Symbol",
    "Word",
    "Paragraph",
    "Block",
    "VisionPage",
    "PageResponse",
    "BatchResponse",
]
