"""Crop and scale arithmetic, independent of any pixel representation."""

from __future__ import annotations

import math
from typing import NamedTuple

# Ratios closer than this are treated as already matching
RATIO_TOLERANCE = 0.01


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float


def crop_rect_for_ratio(width: float, height: float, ratio: float) -> Rect | None:
    """Centered crop rectangle giving ``width / height == ratio``.

    Returns None when the current ratio is within RATIO_TOLERANCE of the
    target. Wider images lose width, taller images lose height.
    """
    current = width / height
    if abs(current - ratio) < RATIO_TOLERANCE:
        return None

    if current > ratio:
        new_width = height * ratio
        x_offset = (width - new_width) / 2
        return Rect(x_offset, 0.0, new_width, height)

    new_height = width / ratio
    y_offset = (height - new_height) / 2
    return Rect(0.0, y_offset, width, new_height)


def to_pixel_box(rect: Rect, density: float = 1.0) -> tuple[int, int, int, int]:
    """Map a logical rect onto the pixel grid as (left, top, right, bottom)."""
    left = round_half_up(rect.x * density)
    top = round_half_up(rect.y * density)
    right = round_half_up((rect.x + rect.width) * density)
    bottom = round_half_up((rect.y + rect.height) * density)
    return left, top, right, bottom


def scaled_size(width: float, height: float, max_dimension: float) -> tuple[int, int] | None:
    """Target size fitting the longer side to ``max_dimension``.

    Returns None when the image already fits (never upscale).
    """
    longest = max(width, height)
    if longest <= max_dimension:
        return None
    scale = max_dimension / longest
    return (
        max(1, round_half_up(width * scale)),
        max(1, round_half_up(height * scale)),
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)
