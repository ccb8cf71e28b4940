from __future__ import annotations

from contracts.layout import IntermediateFormatPage, PageDetail, Row
from contracts.pdf_text import PdfPageContents

from .row_grouping import group_rows
from .strategy import DEFAULT_STRATEGY, RowGroupingStrategy
from .unify import intermediate_page_to_page, pdf_contents_to_page


def unify_and_group_from_pdf_pages(
    pages: list[PdfPageContents],
    strategy: RowGroupingStrategy = DEFAULT_STRATEGY,
) -> tuple[list[Row], list[PageDetail]]:
    """
    Rows across all pages of a PDF text layer, plus per-page font tables.

    Coordinates stay in points.
    """
    unified = [pdf_contents_to_page(p) for p in pages]
    rows = group_rows([page for page, _ in unified], strategy)
    details = sorted((detail for _, detail in unified), key=lambda d: d.page_number)
    return rows, details


def unify_and_group_from_ocr_pages(
    pages: list[IntermediateFormatPage],
    strategy: RowGroupingStrategy = DEFAULT_STRATEGY,
) -> list[Row]:
    """
    Rows across all pages of an OCR document. Coordinates are centimeters.
    """
    return group_rows([intermediate_page_to_page(p) for p in pages], strategy)
