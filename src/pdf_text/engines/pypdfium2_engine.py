from __future__ import annotations

import ctypes
from dataclasses import dataclass
from pathlib import Path

from contracts.pdf_text import PdfPageContents, PdfTextItem

from .base import PdfTextEngine


@dataclass(frozen=True, slots=True)
class _CharFont:
    name: str
    size: float
    origin_x: float
    origin_y: float  # baseline


class Pypdfium2TextEngine(PdfTextEngine):
    """
    One text run per pdfium text rectangle.

    Font ids are assigned per page in first-seen order ("f1", "f2", ...) and
    mapped to the font name in the page style table.
    """

    def backend_id(self) -> str:
        return "pypdfium2"

    def backend_version(self) -> str | None:
        try:
            import pypdfium2 as pdfium  # type: ignore

            return getattr(pdfium, "__version__", None)
        except ImportError:
            return None

    def _require_pdfium(self):
        try:
            import pypdfium2 as pdfium  # type: ignore

            return pdfium
        except ImportError as e:
            raise RuntimeError("Missing dependency: pypdfium2 is required for PDF text extraction.") from e

    def get_page_count(self, *, pdf_file: Path) -> int:
        pdfium = self._require_pdfium()
        doc = pdfium.PdfDocument(str(pdf_file))
        try:
            return len(doc)
        finally:
            doc.close()

    def _char_font(self, pdfium, textpage, char_index: int) -> _CharFont:
        raw = pdfium.raw
        needed = raw.FPDFText_GetFontInfo(textpage.raw, char_index, None, 0, None)
        name = ""
        if needed > 0:
            buf = ctypes.create_string_buffer(needed)
            flags = ctypes.c_int()
            raw.FPDFText_GetFontInfo(textpage.raw, char_index, buf, needed, ctypes.byref(flags))
            name = buf.value.decode("utf-8", errors="replace")

        ox = ctypes.c_double()
        oy = ctypes.c_double()
        raw.FPDFText_GetCharOrigin(textpage.raw, char_index, ctypes.byref(ox), ctypes.byref(oy))
        size = float(raw.FPDFText_GetFontSize(textpage.raw, char_index))
        return _CharFont(name=name, size=size, origin_x=float(ox.value), origin_y=float(oy.value))

    def _extract_page(self, pdfium, page, page_number: int) -> PdfPageContents:
        width, height = page.get_size()
        textpage = page.get_textpage()
        try:
            font_ids: dict[str, str] = {}  # font name -> id
            items: list[PdfTextItem] = []

            for i in range(textpage.count_rects()):
                left, bottom, right, top = textpage.get_rect(i)
                text = textpage.get_text_bounded(left=left, bottom=bottom, right=right, top=top)

                char_index = textpage.get_index(
                    (left + right) / 2, (bottom + top) / 2, (right - left) / 2, (top - bottom) / 2
                )
                if char_index is None or char_index < 0:
                    font = _CharFont(name="", size=top - bottom, origin_x=left, origin_y=bottom)
                else:
                    font = self._char_font(pdfium, textpage, char_index)

                font_id = font_ids.setdefault(font.name, f"f{len(font_ids) + 1}")
                item_height = font.size if font.size > 0 else top - bottom
                items.append(
                    PdfTextItem(
                        text=text,
                        x=font.origin_x,
                        y=font.origin_y,
                        width=right - left,
                        height=item_height,
                        font_id=font_id,
                        transform=(item_height, 0.0, 0.0, item_height, font.origin_x, font.origin_y),
                    )
                )
        finally:
            textpage.close()

        return PdfPageContents(
            page_number=page_number,
            page_width=float(width),
            page_height=float(height),
            styles={font_id: name for name, font_id in font_ids.items()},
            items=items,
        )

    def extract_pages(self, *, pdf_file: Path, pages: list[int]) -> list[PdfPageContents]:
        pdfium = self._require_pdfium()
        doc = pdfium.PdfDocument(str(pdf_file))
        try:
            page_count = len(doc)
            out: list[PdfPageContents] = []
            # Sequential: the row grouping engine relies on page order.
            for page_num in pages:
                if page_num < 1 or page_num > page_count:
                    raise ValueError(f"Page out of range: {page_num} (1..{page_count})")
                page = doc[page_num - 1]
                try:
                    out.append(self._extract_page(pdfium, page, page_num))
                finally:
                    page.close()
            return out
        finally:
            doc.close()
