from .base import PdfTextEngine
from .pypdfium2_engine import Pypdfium2TextEngine

__all__ = ["PdfTextEngine", "Pypdfium2TextEngine"]
