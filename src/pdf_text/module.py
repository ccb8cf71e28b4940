from __future__ import annotations

import logging

from .contracts import PdfTextConfig, PdfTextEngineName, PdfTextError, PdfTextResult
from .data_access import DataAccessError, resolve_pdf_under_data_root
from .engines import Pypdfium2TextEngine

logger = logging.getLogger(__name__)


def parse_page_selection(selection: str | None, *, page_count: int) -> list[int]:
    """
    "1,3-5" -> [1, 3, 4, 5] (sorted, unique, 1-indexed). None or blank => all pages.
    """

    if selection is None or selection.strip() == "":
        return list(range(1, page_count + 1))

    pages: set[int] = set()
    for part in selection.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            a_str, b_str = part.split("-", 1)
            a, b = int(a_str.strip()), int(b_str.strip())
            if a <= 0 or b <= 0:
                raise ValueError("page numbers must be >= 1")
            if b < a:
                raise ValueError(f"invalid range: {part!r}")
            pages.update(range(a, b + 1))
        else:
            p = int(part)
            if p <= 0:
                raise ValueError("page numbers must be >= 1")
            pages.add(p)

    ordered = sorted(pages)
    if ordered and ordered[-1] > page_count:
        raise ValueError(f"page selection out of bounds (1..{page_count})")
    return ordered


def _get_engine(engine: PdfTextEngineName):
    if engine == PdfTextEngineName.PYPDFIUM2:
        return Pypdfium2TextEngine()
    raise ValueError(f"Unsupported PDF text engine: {engine}")


def _failed(config: PdfTextConfig, pdf_relpath: str, error: PdfTextError) -> PdfTextResult:
    return PdfTextResult(
        ok=False,
        engine=config.engine,
        source_pdf_relpath=pdf_relpath,
        pages=[],
        errors=[error],
        meta={"page_selection": config.page_selection},
    )


def run_pdf_text_relpath(*, config: PdfTextConfig, pdf_relpath: str) -> PdfTextResult:
    """
    Extract the text layer of a PDF referenced relative to `config.data_root`.

    Pages come back strictly ascending by page number.
    """

    try:
        pdf_file = resolve_pdf_under_data_root(data_root=config.data_root, relpath=pdf_relpath)
    except DataAccessError as e:
        return _failed(
            config,
            pdf_relpath,
            PdfTextError(
                code="PDF_TEXT_DATA_ACCESS_ERROR",
                message=str(e),
                detail={"data_root": str(config.data_root), "relpath": pdf_relpath},
            ),
        )

    engine = _get_engine(config.engine)

    try:
        page_count = engine.get_page_count(pdf_file=pdf_file)
        pages = parse_page_selection(config.page_selection, page_count=page_count)
    except ValueError as e:
        return _failed(
            config,
            pdf_relpath,
            PdfTextError(
                code="PDF_TEXT_BAD_PAGE_SELECTION",
                message=str(e),
                detail={"page_selection": config.page_selection},
            ),
        )

    try:
        contents = engine.extract_pages(pdf_file=pdf_file, pages=pages)
    except Exception as e:  # engine/backend failure: report, never return partial pages
        logger.error("PDF text extraction failed for %s: %s", pdf_relpath, e)
        return _failed(
            config,
            pdf_relpath,
            PdfTextError(
                code="PDF_TEXT_ENGINE_ERROR",
                message=str(e),
                detail={"backend": engine.backend_id(), "exception": type(e).__name__},
            ),
        )

    contents = sorted(contents, key=lambda p: p.page_number)
    logger.info("Extracted %d pages from %s", len(contents), pdf_relpath)

    return PdfTextResult(
        ok=True,
        engine=config.engine,
        source_pdf_relpath=pdf_relpath,
        pages=contents,
        errors=[],
        meta={
            "backend": engine.backend_id(),
            "backend_version": engine.backend_version(),
            "page_count": page_count,
            "page_selection": config.page_selection,
            "pages": pages,
        },
    )
