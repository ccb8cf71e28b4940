from __future__ import annotations

import logging
from dataclasses import dataclass
from statistics import median, median_low
from typing import Any

from contracts.layout import IntermediateWord, KnownAngle

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PageAngleConsensus:
    """
    Dominant rotation of one page.

    Medians rather than means so a minority of misclassified words cannot drag
    the page angle. `known_angle_match_ratio` is diagnostic only.
    """

    median_known_angle: KnownAngle
    median_angle: float
    known_angle_match_ratio: float
    words: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "median_known_angle": self.median_known_angle,
            "median_angle": self.median_angle,
            "known_angle_match_ratio": self.known_angle_match_ratio,
            "words": self.words,
        }


def _unwrap_near(angle: float, reference: float) -> float:
    # a + 360k within (reference - 180, reference + 180]; keeps an upside-down
    # page's angles on one side of +-180 before the median
    delta = (angle - reference) % 360
    if delta > 180:
        delta -= 360
    return reference + delta


def page_angle_consensus(words: list[IntermediateWord], *, page_number: int | None = None) -> PageAngleConsensus:
    if not words:
        return PageAngleConsensus(median_known_angle=0, median_angle=0.0, known_angle_match_ratio=0.0, words=0)

    # median_low: an even count must still yield one of the known angles
    median_known: KnownAngle = median_low([w.known_angle for w in words])
    median_angle = float(median([_unwrap_near(w.angle, median_known) for w in words]))
    same = sum(1 for w in words if w.known_angle == median_known)
    ratio = same / len(words)

    logger.info(
        "Page %s: known angle %d deg vs. angle %.2f deg; %.1f%% of words match",
        page_number,
        median_known,
        median_angle,
        ratio * 100,
    )
    return PageAngleConsensus(
        median_known_angle=median_known,
        median_angle=median_angle,
        known_angle_match_ratio=ratio,
        words=len(words),
    )
