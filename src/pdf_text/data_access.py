from __future__ import annotations

from pathlib import Path


class DataAccessError(Exception):
    pass


def resolve_pdf_under_data_root(*, data_root: Path, relpath: str) -> Path:
    """
    Resolve a PDF path given relative to an explicit data_root.

    Absolute paths and anything escaping data_root are rejected.
    """

    if relpath.startswith(("/", "\\")) or (":" in relpath and "\\" in relpath):
        raise DataAccessError(f"Expected a relative path under data_root, got: {relpath!r}")
    if not relpath.lower().endswith(".pdf"):
        raise DataAccessError(f"Expected a .pdf file, got: {relpath!r}")

    root = data_root.expanduser().resolve()
    candidate = (root / relpath).resolve()
    if not candidate.is_relative_to(root):
        raise DataAccessError(f"Path traversal or external reference detected: relpath={relpath!r}")
    if not candidate.is_file():
        raise DataAccessError(f"PDF not found under data_root: {relpath!r}")

    return candidate
