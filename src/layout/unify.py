"""
Coordinate unification: bring every fragment of a page into one top-down
coordinate space before row grouping.

- Cloud Vision: normalized vertices -> page units -> centimeters, then rotate
  by the page's consensus angle so the text reads left to right.
- PDF text layer: born-digital text is taken as axis-aligned; only the vertical
  axis is flipped (PDF origin is bottom-left) and fonts are resolved.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from contracts.layout import (
    Fragment,
    IntermediateFormatPage,
    IntermediateWord,
    KnownAngle,
    Page,
    PageDetail,
    Size,
    Vector2d,
)
from contracts.pdf_text import PdfPageContents
from contracts.vision import BatchResponse, BoundingBox, PageResponse

from .config import OcrUnifyConfig
from .consensus import page_angle_consensus
from .errors import UncoercibleOrientationError, UnsupportedPageShapeError
from .geometry import (
    angle_of,
    coerce_known_angle,
    convert_size_to_cm,
    convert_vector_to_cm,
    rotate_point,
    world_coordinate_shift,
)

logger = logging.getLogger(__name__)


def _pixel_top_left(bounding_box: BoundingBox, page_size: Size) -> Vector2d:
    # Normalized vertices are relative to the whole page, not the parent node.
    vs = bounding_box.normalized_vertices
    return Vector2d(
        x=min(v.x for v in vs) * page_size.width,
        y=min(v.y for v in vs) * page_size.height,
    )


def _pixel_size(bounding_box: BoundingBox, page_size: Size) -> Size:
    # top-left to bottom-right diagonal; assumes a rectangle
    top_left, bottom_right = bounding_box.normalized_vertices[0], bounding_box.normalized_vertices[2]
    return Size(
        width=abs(top_left.x * page_size.width - bottom_right.x * page_size.width),
        height=abs(top_left.y * page_size.height - bottom_right.y * page_size.height),
    )


def _warning(code: str, message: str, detail: dict[str, Any]) -> dict[str, Any]:
    return {"code": code, "message": message, "detail": detail}


def _sorted_warnings(warnings: list[dict[str, Any]]) -> list[dict[str, Any]]:
    def _warn_key(w: dict[str, Any]) -> tuple[str, str]:
        detail = w.get("detail") or {}
        detail_canon = json.dumps(detail, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
        return (str(w.get("code", "")), detail_canon)

    return sorted(warnings, key=_warn_key)


def _collect_page_words(
    response: PageResponse,
    config: OcrUnifyConfig,
    warnings: list[dict[str, Any]],
) -> tuple[list[IntermediateWord], int]:
    """
    Flatten blocks -> paragraphs -> words, unrotated, in centimeters.

    Returns the words and the number of dropped blocks.
    """
    vision_page = response.pages[0]
    page_size = Size(width=vision_page.width, height=vision_page.height)

    words: list[IntermediateWord] = []
    blocks_dropped = 0

    for block_index, block in enumerate(vision_page.blocks):
        # Orientation relative to the page.
        if coerce_known_angle(block.bounding_box, config.angle_epsilon) is None:
            # e.g. a handwritten note at 58 degrees
            blocks_dropped += 1
            block_angle = angle_of(block.bounding_box)
            logger.warning(
                "Page %d: dropping block %d (%s) at %.2f deg; not a known orientation",
                response.page_number,
                block_index,
                block.block_type,
                block_angle,
            )
            warnings.append(
                _warning(
                    "LAYOUT_BLOCK_ORIENTATION_UNCOERCIBLE",
                    "Block angle does not match any known orientation; block words were dropped.",
                    {
                        "page_number": response.page_number,
                        "block_index": block_index,
                        "angle": round(block_angle, 4),
                        "words": sum(len(p.words) for p in block.paragraphs),
                    },
                )
            )
            continue

        for paragraph in block.paragraphs:
            paragraph_known = coerce_known_angle(paragraph.bounding_box, config.angle_epsilon)
            paragraph_angle = angle_of(paragraph.bounding_box)
            if paragraph_known is None:
                raise UncoercibleOrientationError(
                    f"Paragraph angle not a known angle: {paragraph_angle:.2f} deg",
                    detail={
                        "page_number": response.page_number,
                        "block_index": block_index,
                        "angle": paragraph_angle,
                    },
                )

            for word in paragraph.words:
                text = word.text
                if word.confidence < config.low_confidence_threshold:
                    logger.info(
                        "Page %d: '%s' low confidence %.1f",
                        response.page_number,
                        text,
                        word.confidence,
                    )
                    warnings.append(
                        _warning(
                            "LAYOUT_LOW_CONFIDENCE_WORD",
                            "Word confidence below threshold; kept as recognized.",
                            {"page_number": response.page_number, "text": text, "confidence": word.confidence},
                        )
                    )

                # word-level angles vary too much; use the paragraph's
                words.append(
                    IntermediateWord(
                        top_left=convert_vector_to_cm(_pixel_top_left(word.bounding_box, page_size)),
                        size=convert_size_to_cm(_pixel_size(word.bounding_box, page_size)),
                        text=text,
                        known_angle=paragraph_known,
                        angle=paragraph_angle,
                        source=word,
                    )
                )

    return words, blocks_dropped


def _rotate_words(
    words: list[IntermediateWord],
    *,
    angle: float,
    known_angle: KnownAngle,
    page_size_cm: Size,
) -> list[IntermediateWord]:
    shift = world_coordinate_shift(known_angle, page_size_cm)
    swap = known_angle in (90, 270)
    return [
        IntermediateWord(
            top_left=rotate_point(w.top_left, angle, page_size_cm, shift),
            # reading direction turned by 90 degrees
            size=w.size.swapped() if swap else w.size,
            text=w.text,
            known_angle=w.known_angle,
            angle=w.angle,
            source=w.source,
        )
        for w in words
    ]


def build_intermediate_format_page(
    response: PageResponse,
    use_known_angle_for_rotation: bool = False,
    config: OcrUnifyConfig | None = None,
) -> IntermediateFormatPage:
    config = config or OcrUnifyConfig()

    if len(response.pages) != 1:
        raise UnsupportedPageShapeError(
            f"Expecting 1 page - found {len(response.pages)} in fullTextAnnotation (page {response.page_number})",
            detail={"page_number": response.page_number, "pages": len(response.pages)},
        )

    warnings: list[dict[str, Any]] = []
    words, blocks_dropped = _collect_page_words(response, config, warnings)
    consensus = page_angle_consensus(words, page_number=response.page_number)

    vision_page = response.pages[0]
    page_size_cm = convert_size_to_cm(Size(width=vision_page.width, height=vision_page.height))

    # Rotation is unconditional; the match ratio does not gate it.
    rotation = float(consensus.median_known_angle) if use_known_angle_for_rotation else consensus.median_angle
    rotated = _rotate_words(
        words,
        angle=rotation,
        known_angle=consensus.median_known_angle,
        page_size_cm=page_size_cm,
    )

    size = page_size_cm.swapped() if consensus.median_known_angle in (90, 270) else page_size_cm

    meta: dict[str, Any] = {
        **consensus.to_dict(),
        "rotation_applied": rotation,
        "blocks_dropped": blocks_dropped,
        "warnings": _sorted_warnings(warnings),
    }
    return IntermediateFormatPage(page_number=response.page_number, size=size, words=rotated, meta=meta)


def build_intermediate_format_from_ocr_batch(
    batch: BatchResponse,
    use_known_angle_for_rotation: bool = False,
    config: OcrUnifyConfig | None = None,
) -> list[IntermediateFormatPage]:
    """
    Convert a Cloud Vision batch into per-page words in centimeters, rotated to
    reading orientation, ordered by page number.

    Raises UnsupportedPageShapeError if a response does not hold exactly one
    page, UncoercibleOrientationError if a paragraph has no known orientation.
    Blocks with no known orientation are dropped and reported in page meta.
    """
    config = config or OcrUnifyConfig()
    responses = sorted(batch.responses, key=lambda r: r.page_number)
    return [build_intermediate_format_page(r, use_known_angle_for_rotation, config) for r in responses]


def intermediate_page_to_page(page: IntermediateFormatPage) -> Page:
    return Page(
        page_number=page.page_number,
        size=page.size,
        fragments=[
            Fragment(
                text=w.text,
                x=w.top_left.x,
                y=w.top_left.y,
                width=w.size.width,
                height=w.size.height,
                page=page.page_number,
                source=w.source,
            )
            for w in page.words
        ],
    )


def pdf_contents_to_page(contents: PdfPageContents) -> tuple[Page, PageDetail]:
    """
    Flip the PDF vertical axis to top-down and resolve font ids.

    Fonts missing from the page style table resolve to None.
    """
    fragments = [
        Fragment(
            text=item.text,
            x=item.transform[4],
            y=contents.page_height - item.transform[5],
            width=item.width,
            height=item.height,
            page=contents.page_number,
            font_name=contents.styles.get(item.font_id),
            transform=item.transform,
        )
        for item in contents.items
    ]
    page = Page(
        page_number=contents.page_number,
        size=Size(width=contents.page_width, height=contents.page_height),
        fragments=fragments,
    )
    return page, PageDetail(page_number=contents.page_number, styles=dict(contents.styles))
