"""
Cloud Vision DOCUMENT_TEXT_DETECTION batch output (consumed, never produced).

Shape: batch -> responses[] -> fullTextAnnotation.pages[] -> blocks[] ->
paragraphs[] -> words[] -> symbols[]. Geometric nodes carry four normalized
vertices in [0, 1] relative to the page size, ordered
(top-left, top-right, bottom-right, bottom-left) as read in the text's natural
orientation, so a rotated word keeps vertex 0 at its reading top-left.

Proto3 JSON omits zero-valued fields; a vertex without "x" is at x=0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .layout import Vector2d


def _require_list(d: dict[str, Any], key: str, owner: str) -> list[Any]:
    raw = d.get(key) or []
    if not isinstance(raw, list):
        raise TypeError(f"{owner}.{key} must be a list")
    return raw


@dataclass(frozen=True, slots=True)
class BoundingBox:
    normalized_vertices: tuple[Vector2d, Vector2d, Vector2d, Vector2d]

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "BoundingBox":
        raw = _require_list(d, "normalizedVertices", "BoundingBox")
        if len(raw) != 4:
            raise ValueError(f"BoundingBox expects 4 normalized vertices, got {len(raw)}")
        vs = tuple(Vector2d(x=float(v.get("x", 0.0)), y=float(v.get("y", 0.0))) for v in raw)
        return BoundingBox(normalized_vertices=vs)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class Symbol:
    text: str
    confidence: float

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Symbol":
        return Symbol(text=str(d.get("text", "")), confidence=float(d.get("confidence", 0.0)))


@dataclass(frozen=True, slots=True)
class Word:
    bounding_box: BoundingBox
    symbols: list[Symbol]
    confidence: float

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.symbols)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Word":
        return Word(
            bounding_box=BoundingBox.from_dict(d["boundingBox"]),
            symbols=[Symbol.from_dict(s) for s in _require_list(d, "symbols", "Word")],
            confidence=float(d.get("confidence", 0.0)),
        )


@dataclass(frozen=True, slots=True)
class Paragraph:
    bounding_box: BoundingBox
    words: list[Word]
    confidence: float

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Paragraph":
        return Paragraph(
            bounding_box=BoundingBox.from_dict(d["boundingBox"]),
            words=[Word.from_dict(w) for w in _require_list(d, "words", "Paragraph")],
            confidence=float(d.get("confidence", 0.0)),
        )


@dataclass(frozen=True, slots=True)
class Block:
    bounding_box: BoundingBox
    paragraphs: list[Paragraph]
    block_type: str  # TEXT, TABLE, PICTURE, RULER, BARCODE or UNKNOWN
    confidence: float | None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Block":
        return Block(
            bounding_box=BoundingBox.from_dict(d["boundingBox"]),
            paragraphs=[Paragraph.from_dict(p) for p in _require_list(d, "paragraphs", "Block")],
            block_type=str(d.get("blockType", "UNKNOWN")),
            confidence=(None if d.get("confidence") is None else float(d["confidence"])),
        )


@dataclass(frozen=True, slots=True)
class VisionPage:
    # points for PDF input, pixels for images
    width: float
    height: float
    blocks: list[Block]
    confidence: float

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "VisionPage":
        return VisionPage(
            width=float(d["width"]),
            height=float(d["height"]),
            blocks=[Block.from_dict(b) for b in _require_list(d, "blocks", "VisionPage")],
            confidence=float(d.get("confidence", 0.0)),
        )


@dataclass(frozen=True, slots=True)
class PageResponse:
    page_number: int  # from context; accounts for batches spanning several output files
    uri: str | None
    pages: list[VisionPage]  # fullTextAnnotation.pages; exactly one is expected
    text: str

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "PageResponse":
        context = d.get("context") or {}
        annotation = d.get("fullTextAnnotation") or {}
        return PageResponse(
            page_number=int(context["pageNumber"]),
            uri=(None if context.get("uri") is None else str(context["uri"])),
            pages=[VisionPage.from_dict(p) for p in _require_list(annotation, "pages", "fullTextAnnotation")],
            text=str(annotation.get("text", "")),
        )


@dataclass(frozen=True, slots=True)
class BatchResponse:
    responses: list[PageResponse]
    source_uri: str | None = None
    mime_type: str | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "BatchResponse":
        input_config = d.get("inputConfig") or {}
        gcs_source = input_config.get("gcsSource") or {}
        return BatchResponse(
            responses=[PageResponse.from_dict(r) for r in _require_list(d, "responses", "BatchResponse")],
            source_uri=(None if gcs_source.get("uri") is None else str(gcs_source["uri"])),
            mime_type=(None if input_config.get("mimeType") is None else str(input_config["mimeType"])),
        )

    def merged(self, other: "BatchResponse") -> "BatchResponse":
        return BatchResponse(
            responses=self.responses + other.responses,
            source_uri=self.source_uri if self.source_uri is not None else other.source_uri,
            mime_type=self.mime_type if self.mime_type is not None else other.mime_type,
        )
