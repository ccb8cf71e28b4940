"""
Synthetic Cloud Vision batch payloads.

A logical page (reading orientation, centimeters) is laid onto a scanned page
turned clockwise by 0/90/180/270 degrees. Vertices keep the natural reading
order, as Cloud Vision reports them.
"""

from __future__ import annotations

from typing import Any

# (text, x, y, width, height), centimeters, reading orientation
LogicalWord = tuple[str, float, float, float, float]

CM_TO_PT = 72 / 2.54


def _to_scan(x: float, y: float, rotation: int, w: float, h: float) -> tuple[float, float]:
    if rotation == 0:
        return x, y
    if rotation == 90:
        return h - y, x
    if rotation == 180:
        return w - x, h - y
    if rotation == 270:
        return y, w - x
    raise ValueError(rotation)


def _scan_size(rotation: int, w: float, h: float) -> tuple[float, float]:
    return (h, w) if rotation in (90, 270) else (w, h)


def _box(x0: float, y0: float, x1: float, y1: float, *, rotation: int, w: float, h: float) -> dict[str, Any]:
    sw, sh = _scan_size(rotation, w, h)
    corners = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    vertices = []
    for cx, cy in corners:
        sx, sy = _to_scan(cx, cy, rotation, w, h)
        vertices.append({"x": sx / sw, "y": sy / sh})
    return {"normalizedVertices": vertices}


def word_payload(
    word: LogicalWord, *, rotation: int, page_w: float, page_h: float, confidence: float = 0.95
) -> dict[str, Any]:
    text, x, y, ww, wh = word
    return {
        "boundingBox": _box(x, y, x + ww, y + wh, rotation=rotation, w=page_w, h=page_h),
        "symbols": [{"text": ch, "confidence": confidence} for ch in text],
        "confidence": confidence,
    }


def page_response(
    rows: list[list[LogicalWord]],
    *,
    page_number: int,
    rotation: int = 0,
    page_size_cm: tuple[float, float] = (20.0, 28.0),
    confidence: float = 0.95,
) -> dict[str, Any]:
    """
    One block with one paragraph per logical row.
    """
    page_w, page_h = page_size_cm
    blocks = []
    for row in rows:
        x0 = min(w[1] for w in row)
        y0 = min(w[2] for w in row)
        x1 = max(w[1] + w[3] for w in row)
        y1 = max(w[2] + w[4] for w in row)
        box = _box(x0, y0, x1, y1, rotation=rotation, w=page_w, h=page_h)
        blocks.append(
            {
                "boundingBox": box,
                "blockType": "TEXT",
                "confidence": confidence,
                "paragraphs": [
                    {
                        "boundingBox": box,
                        "confidence": confidence,
                        "words": [
                            word_payload(w, rotation=rotation, page_w=page_w, page_h=page_h, confidence=confidence)
                            for w in row
                        ],
                    }
                ],
            }
        )

    sw, sh = _scan_size(rotation, page_w, page_h)
    return {
        "context": {"uri": "gs://bucket/tests/synthetic.pdf", "pageNumber": page_number},
        "fullTextAnnotation": {
            "text": "\n".join(" ".join(w[0] for w in row) for row in rows),
            "pages": [
                {
                    "width": sw * CM_TO_PT,
                    "height": sh * CM_TO_PT,
                    "confidence": confidence,
                    "blocks": blocks,
                }
            ],
        },
    }


def batch_payload(responses: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "inputConfig": {"gcsSource": {"uri": "gs://bucket/tests/synthetic.pdf"}, "mimeType": "application/pdf"},
        "responses": responses,
    }


# Two-page table: header + two data rows per page, rows 1 cm apart.
TABLE_PAGES: list[list[list[LogicalWord]]] = [
    [
        [("Name", 2.0, 3.0, 2.0, 0.4), ("Age", 8.0, 3.0, 1.5, 0.4), ("Job", 12.0, 3.0, 1.5, 0.4)],
        [("Dave", 2.0, 4.0, 1.8, 0.4), ("20", 8.0, 4.0, 0.8, 0.4), ("Student", 12.0, 4.0, 3.0, 0.4)],
        [("Jen", 2.0, 5.0, 1.4, 0.4), ("25", 8.0, 5.0, 0.8, 0.4), ("Investor", 12.0, 5.0, 3.2, 0.4)],
    ],
    [
        [("Name", 2.0, 3.0, 2.0, 0.4), ("Age", 8.0, 3.0, 1.5, 0.4), ("Job", 12.0, 3.0, 1.5, 0.4)],
        [("Steve", 2.0, 4.0, 2.0, 0.4), ("23", 8.0, 4.0, 0.8, 0.4), ("Engineer", 12.0, 4.0, 3.4, 0.4)],
        [("Alice", 2.0, 5.0, 2.0, 0.4), ("27", 8.0, 5.0, 0.8, 0.4), ("Investor", 12.0, 5.0, 3.2, 0.4)],
    ],
]


def table_batch(rotation: int, *, pages: list[list[list[LogicalWord]]] | None = None) -> dict[str, Any]:
    pages = TABLE_PAGES if pages is None else pages
    # Responses deliberately out of page order.
    return batch_payload(
        [page_response(rows, page_number=i + 1, rotation=rotation) for i, rows in reversed(list(enumerate(pages)))]
    )
