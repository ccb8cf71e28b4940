"""
Cross-page row grouping.

Pages are stacked on one continuous vertical axis (page k starts at the sum of
the heights of pages 1..k-1). Fragments are then bucketed by a row key derived
from that absolute y, and each bucket becomes one Row with items ordered left
to right.

The fold state is an explicit value threaded through every step; nothing
survives a call.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Iterable

from contracts.layout import Fragment, Page, Row, RowItem

from .errors import MalformedFragmentError
from .strategy import GAP_THRESHOLD_KEY_PRECISION, FractionalEpsilon, GapThreshold, RowGroupingStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GroupingState:
    y_accumulator: float = 0.0  # heights of all pages already folded
    grouping_start_y: float | None = None  # GapThreshold cluster anchor
    last_y: float | None = None  # previous fragment's absolute y


def _check_fragment(fragment: Fragment, page_number: int) -> None:
    for name in ("x", "y", "width", "height"):
        v = getattr(fragment, name)
        if v is None or not math.isfinite(v):
            raise MalformedFragmentError(
                f"Fragment {fragment.text!r} on page {page_number} has undefined {name}: {v!r}",
                detail={"page": page_number, "text": fragment.text, "field": name, "value": repr(v)},
            )


def row_key(state: GroupingState, absolute_y: float, strategy: RowGroupingStrategy) -> tuple[GroupingState, float]:
    """
    Advance the fold by one fragment at `absolute_y`; return the new state and
    the fragment's row key.
    """
    start = state.grouping_start_y if state.grouping_start_y is not None else absolute_y

    if isinstance(strategy, FractionalEpsilon):
        key = round(absolute_y, strategy.precision)
    elif isinstance(strategy, GapThreshold):
        # Independent checks; both may fire, the second wins (same value).
        if absolute_y - start > strategy.maximum_break_threshold:
            start = absolute_y
        if state.last_y is not None and absolute_y - state.last_y > strategy.minimum_gap:
            start = absolute_y
        key = round(start, GAP_THRESHOLD_KEY_PRECISION)
    else:
        raise TypeError(f"Unsupported row grouping strategy: {type(strategy).__name__}")

    # -0.0 and 0.0 are one bucket
    return replace(state, grouping_start_y=start, last_y=absolute_y), key + 0.0


def fold_page(
    state: GroupingState,
    page: Page,
    strategy: RowGroupingStrategy,
    buckets: dict[float, list[RowItem]],
) -> GroupingState:
    """
    Fold one page's fragments (ascending y) into `buckets`; return the state
    for the next page.
    """
    for fragment in sorted(page.fragments, key=lambda f: f.y):
        _check_fragment(fragment, page.page_number)
        absolute_y = state.y_accumulator + fragment.y
        state, key = row_key(state, absolute_y, strategy)
        buckets.setdefault(key, []).append(
            RowItem(
                text=fragment.text,
                x=fragment.x,
                y=absolute_y,
                width=fragment.width,
                height=fragment.height,
                page=page.page_number,
                font_name=fragment.font_name,
                transform=fragment.transform,
                source=fragment.source,
            )
        )

    return replace(state, y_accumulator=state.y_accumulator + page.size.height)


def group_rows(pages: Iterable[Page], strategy: RowGroupingStrategy) -> list[Row]:
    """
    Merge page fragment streams into rows ordered by y, items ordered by x.

    Every fragment lands in exactly one row.
    """
    strategy.validate()

    state = GroupingState()
    buckets: dict[float, list[RowItem]] = {}
    ordered_pages = sorted(pages, key=lambda p: p.page_number)
    for page in ordered_pages:
        state = fold_page(state, page, strategy, buckets)

    rows = [Row(y=key, items=sorted(items, key=lambda i: i.x)) for key, items in buckets.items()]
    rows.sort(key=lambda r: r.y)

    logger.debug(
        "Grouped %d fragments from %d pages into %d rows (%s)",
        sum(len(r.items) for r in rows),
        len(ordered_pages),
        len(rows),
        type(strategy).__name__,
    )
    return rows
