from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from contracts.pdf_text import PdfPageContents


class PdfTextEngine(ABC):
    """
    PDF text-layer engine abstraction.

    Engines must:
    - Report text runs as positioned in PDF user space (origin bottom-left)
    - Return pages in the order requested
    - Perform NO row grouping, rotation, or unit conversion
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def get_page_count(self, *, pdf_file: Path) -> int:
        raise NotImplementedError

    @abstractmethod
    def extract_pages(self, *, pdf_file: Path, pages: list[int]) -> list[PdfPageContents]:
        """
        `pages` is 1-indexed and already ordered; the result follows it.
        """

        raise NotImplementedError
