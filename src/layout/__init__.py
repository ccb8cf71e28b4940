"""
Layout reconstruction engine.

Positioned text fragments (PDF text runs or Cloud Vision words) -> one ordered
sequence of rows spanning all pages, items ordered left to right:
- geometry: angle measurement/coercion, rotation about the page center, units
- consensus: per-page dominant rotation (median)
- unify: rotation + unit conversion (OCR), vertical flip + fonts (PDF)
- row_grouping: cross-page fold into rows under an explicit strategy

No column detection; consumers split rows into columns by x.
"""

from .config import OcrUnifyConfig
from .errors import (
    GeometryInconsistencyError,
    LayoutError,
    MalformedFragmentError,
    UncoercibleOrientationError,
    UnsupportedPageShapeError,
)
from .geometry import (
    angle_of,
    coerce_known_angle,
    convert_size_to_cm,
    convert_vector_to_cm,
    points_to_centimeters,
    rotate_point,
    world_coordinate_shift,
)
from .module import unify_and_group_from_ocr_pages, unify_and_group_from_pdf_pages
from .row_grouping import group_rows
from .strategy import FractionalEpsilon, GapThreshold, RowGroupingStrategy
from .unify import build_intermediate_format_from_ocr_batch

__all__ = [
    "OcrUnifyConfig",
    "LayoutError",
    "GeometryInconsistencyError",
    "UnsupportedPageShapeError",
    "UncoercibleOrientationError",
    "MalformedFragmentError",
    "angle_of",
    "coerce_known_angle",
    "rotate_point",
    "world_coordinate_shift",
    "points_to_centimeters",
    "convert_size_to_cm",
    "convert_vector_to_cm",
    "FractionalEpsilon",
    "GapThreshold",
    "RowGroupingStrategy",
    "group_rows",
    "build_intermediate_format_from_ocr_batch",
    "unify_and_group_from_pdf_pages",
    "unify_and_group_from_ocr_pages",
]
