"""
PDF text-layer adapter.

Reads born-digital text runs with their PDF user-space positions and page font
tables. It performs NO row grouping, rotation, or unit conversion; that is the
layout engine's job.

Data access: all filesystem access goes through an explicitly passed data_root.
"""

from .contracts import PdfTextConfig, PdfTextEngineName, PdfTextError, PdfTextResult
from .module import parse_page_selection, run_pdf_text_relpath

__all__ = [
    "PdfTextConfig",
    "PdfTextEngineName",
    "PdfTextError",
    "PdfTextResult",
    "parse_page_selection",
    "run_pdf_text_relpath",
]
