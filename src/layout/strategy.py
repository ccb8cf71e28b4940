from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

# Row keys under GapThreshold are the cluster anchor at this precision.
GAP_THRESHOLD_KEY_PRECISION = 5


@dataclass(frozen=True, slots=True)
class FractionalEpsilon:
    """
    Row key = absolute y rounded to `precision` decimal digits (ties to even).

    Row boundaries are fixed, arbitrary horizontal lines; fragments a hair apart
    can land on either side of one. Works well for born-digital PDFs.
    """

    precision: int = 1

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise TypeError("precision must be an int")
        if self.precision < 0:
            raise ValueError("precision must be >= 0")

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "fractional_epsilon", "precision": self.precision}


@dataclass(frozen=True, slots=True)
class GapThreshold:
    """
    Row key = running cluster anchor.

    A new cluster starts when the jump from the previous fragment exceeds
    `minimum_gap`, or when the drift from the anchor exceeds
    `maximum_break_threshold` (even if every individual step was small).
    """

    minimum_gap: float
    maximum_break_threshold: float

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.minimum_gap <= 0:
            raise ValueError("minimum_gap must be > 0")
        if self.maximum_break_threshold <= 0:
            raise ValueError("maximum_break_threshold must be > 0")

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "gap_threshold",
            "minimum_gap": self.minimum_gap,
            "maximum_break_threshold": self.maximum_break_threshold,
        }


RowGroupingStrategy = Union[FractionalEpsilon, GapThreshold]

DEFAULT_STRATEGY = FractionalEpsilon(precision=1)


def strategy_from_dict(d: dict[str, Any]) -> RowGroupingStrategy:
    kind = d.get("kind")
    if kind == "fractional_epsilon":
        return FractionalEpsilon(precision=int(d.get("precision", 1)))
    if kind == "gap_threshold":
        return GapThreshold(
            minimum_gap=float(d["minimum_gap"]),
            maximum_break_threshold=float(d["maximum_break_threshold"]),
        )
    raise ValueError(f"Unsupported row grouping strategy: {kind!r}")
