from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from .vision import Word

# Page/paragraph rotation class coerced from a measured angle.
KnownAngle = Literal[0, 90, 180, 270]
KNOWN_ANGLES: tuple[KnownAngle, ...] = (0, 90, 180, 270)


@dataclass(frozen=True, slots=True)
class Vector2d:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Size:
    width: float
    height: float

    def swapped(self) -> "Size":
        return Size(width=self.height, height=self.width)


@dataclass(frozen=True, slots=True)
class Fragment:
    """
    One positioned text run, page-local, origin top-left, y increasing downward.

    Produced once by an adapter; the layout engine only reads it.
    """

    text: str
    x: float
    y: float
    width: float
    height: float
    page: int  # 1-indexed
    font_name: str | None = None  # resolved font name (PDF path only)
    transform: tuple[float, ...] | None = None
    source: "Word | None" = None  # OCR word this fragment came from

    @property
    def confidence(self) -> float | None:
        return None if self.source is None else self.source.confidence


@dataclass(frozen=True, slots=True)
class Page:
    page_number: int  # 1-indexed, unique per document
    size: Size
    fragments: list[Fragment]


@dataclass(frozen=True, slots=True)
class PageDetail:
    page_number: int
    # internal font identifier -> human font name (PDF path only)
    styles: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"page_number": self.page_number, "styles": dict(sorted(self.styles.items()))}


@dataclass(frozen=True, slots=True)
class RowItem:
    """
    A fragment placed on the accumulated (multi-page) vertical axis.
    """

    text: str
    x: float
    y: float  # absolute y: sum of previous page heights + local y
    width: float
    height: float
    page: int
    font_name: str | None  # None: OCR path, or font id missing from the page style table
    transform: tuple[float, ...] | None = None
    source: "Word | None" = None

    @property
    def confidence(self) -> float | None:
        return None if self.source is None else self.source.confidence

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "page": self.page,
            "font_name": self.font_name,
            "transform": None if self.transform is None else list(self.transform),
            "confidence": self.confidence,
        }


@dataclass(frozen=True, slots=True)
class Row:
    y: float  # grouping key
    items: list[RowItem]  # ascending x

    def texts(self) -> list[str]:
        return [i.text for i in self.items]

    def to_dict(self) -> dict[str, Any]:
        return {"y": self.y, "items": [i.to_dict() for i in self.items]}


@dataclass(frozen=True, slots=True)
class IntermediateWord:
    """
    One OCR word after unit conversion (cm) and page rotation.

    The block/paragraph hierarchy is flattened; row grouping does not use it.
    """

    top_left: Vector2d
    size: Size
    text: str
    known_angle: KnownAngle
    angle: float
    source: "Word | None" = None


@dataclass(frozen=True, slots=True)
class IntermediateFormatPage:
    page_number: int
    size: Size  # centimeters, already in reading orientation
    words: list[IntermediateWord]
    meta: dict[str, Any] = field(default_factory=dict)
