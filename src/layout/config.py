from __future__ import annotations

from dataclasses import dataclass

from .geometry import DEFAULT_ANGLE_EPSILON


@dataclass(frozen=True, slots=True)
class OcrUnifyConfig:
    """
    Cloud Vision -> intermediate format parameters.

    Defaults are explicit constants. Confidence is only reported, never used to
    drop or weight words.
    """

    angle_epsilon: float = DEFAULT_ANGLE_EPSILON
    low_confidence_threshold: float = 0.6

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not (0.0 < self.angle_epsilon < 45.0):
            raise ValueError("angle_epsilon must be within (0, 45)")
        if not (0.0 <= self.low_confidence_threshold <= 1.0):
            raise ValueError("low_confidence_threshold must be within [0, 1]")
