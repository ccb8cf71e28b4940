"""
Pure geometry helpers: angle measurement and coercion, rotation about the page
center, unit conversion.

Screen convention throughout: origin top-left, y grows downward, so a positive
angle is a clockwise turn as seen on the page.
"""

from __future__ import annotations

import math

from contracts.layout import KNOWN_ANGLES, KnownAngle, Size, Vector2d
from contracts.vision import BoundingBox

from .errors import GeometryInconsistencyError

# Cloud Vision text is seen up to ~8 degrees off its block orientation.
DEFAULT_ANGLE_EPSILON = 10.0

ZERO_SHIFT = Vector2d(x=0.0, y=0.0)


def angle_of(bounding_box: BoundingBox) -> float:
    """
    Angle in degrees of the top edge (vertex 0 -> vertex 1), range (-180, 180].
    """
    top_left, top_right = bounding_box.normalized_vertices[0], bounding_box.normalized_vertices[1]
    return math.degrees(math.atan2(top_right.y - top_left.y, top_right.x - top_left.x))


def coerce_known_angle(bounding_box: BoundingBox, epsilon: float = DEFAULT_ANGLE_EPSILON) -> KnownAngle | None:
    """
    Nearest of {0, 90, 180, 270} within `epsilon` degrees, else None.

    Angles below (90 - epsilon) are folded by +360 so that 0 and 270 are
    compared on the same side of the circle; a top edge just above horizontal
    (e.g. 359.6) therefore still coerces to 0.
    """
    theta = angle_of(bounding_box)
    if theta < 90 - epsilon:
        theta += 360

    # internal consistency guard; the fold above keeps theta >= 90 - epsilon
    if theta < 0 - epsilon:
        raise GeometryInconsistencyError(
            f"negative theta exceeds epsilon: {theta} < 0-{epsilon}",
            detail={"theta": theta, "epsilon": epsilon},
        )

    for known in KNOWN_ANGLES:
        if abs(theta - known) < epsilon:
            return known

    if abs(theta - 360) <= epsilon:
        return 0

    return None


def _round_half_up_1dp(v: float) -> float:
    return math.floor(v * 10 + 0.5) / 10


def rotate_point(
    point: Vector2d,
    angle_degrees: float,
    page_size: Size,
    world_shift: Vector2d = ZERO_SHIFT,
) -> Vector2d:
    """
    Rotate `point` clockwise by `angle_degrees` around the page center, then
    apply `world_shift`.

    The pivot is the page center rounded to one decimal place.
    """
    radians = -angle_degrees * (math.pi / 180)  # negative: clockwise
    cx = _round_half_up_1dp(page_size.width / 2)
    cy = _round_half_up_1dp(page_size.height / 2)

    dx = point.x - cx
    dy = point.y - cy

    # [x']   [cos -sin][x]
    # [y'] = [sin  cos][y]
    cos_t = math.cos(radians)
    sin_t = math.sin(radians)
    rx = cos_t * dx - sin_t * dy
    ry = sin_t * dx + cos_t * dy

    return Vector2d(x=rx + cx + world_shift.x, y=ry + cy + world_shift.y)


def world_coordinate_shift(known_angle: KnownAngle, page_size: Size) -> Vector2d:
    """
    Translation that keeps content rotated by 90/270 inside the page footprint
    (width and height trade places around the shared center).
    """
    if known_angle in (90, 270):
        return Vector2d(
            x=(page_size.width - page_size.height) / -2,
            y=(page_size.height - page_size.width) / -2,
        )
    return ZERO_SHIFT


def points_to_centimeters(points: float) -> float:
    # 72 points per inch
    return points * (1 / 72) * 2.54


def convert_size_to_cm(size: Size) -> Size:
    return Size(width=points_to_centimeters(size.width), height=points_to_centimeters(size.height))


def convert_vector_to_cm(vector: Vector2d) -> Vector2d:
    return Vector2d(x=points_to_centimeters(vector.x), y=points_to_centimeters(vector.y))
