from __future__ import annotations

from typing import Any


class LayoutError(Exception):
    """
    Fatal layout reconstruction failure; aborts the whole document.
    """

    code = "LAYOUT_ERROR"

    def __init__(self, message: str, *, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "detail": self.detail}


class GeometryInconsistencyError(LayoutError):
    code = "LAYOUT_GEOMETRY_INCONSISTENCY"


class UnsupportedPageShapeError(LayoutError):
    code = "LAYOUT_UNSUPPORTED_PAGE_SHAPE"


class UncoercibleOrientationError(LayoutError):
    code = "LAYOUT_PARAGRAPH_ORIENTATION_UNCOERCIBLE"


class MalformedFragmentError(LayoutError):
    code = "LAYOUT_MALFORMED_FRAGMENT"
