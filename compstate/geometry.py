"""Box geometry helpers.

`acquisition_score` rates how likely a bounding box actually holds the robot
or object being tracked, from the squareness of the rectangle and how close
its area is to the calibrated area. Based on the squareness measure in
Rosin, "Measuring squareness and orientation of shapes" (JMIV).

Lower scores are better: 0 means a square of exactly the calibrated area.
Degenerate boxes get SENTINEL_SCORE instead of raising.
"""

from __future__ import annotations

import math

from .tracking_types import Rect

SENTINEL_SCORE = 1000.0
SQUARENESS_THRESHOLD = 0.99


def aspect_ratio(rect: Rect) -> float:
    """Longer side over shorter side (>= 1 for positive sides)."""
    if rect.width > rect.height:
        return rect.width / rect.height
    return rect.height / rect.width


def acquisition_score(rect: Rect, calibrated_area: float, max_aspect: float | None = None) -> float:
    area = rect.width * rect.height
    if not area:
        return SENTINEL_SCORE
    t = aspect_ratio(rect)
    # t >= 1 for positive sides; only boxes with a negative side land here.
    if t <= SQUARENESS_THRESHOLD:
        return SENTINEL_SCORE
    if max_aspect is not None and t > max_aspect:
        return SENTINEL_SCORE
    return math.fabs(area - calibrated_area) / max(area, calibrated_area) * t


def center_text(rect: Rect, label: str) -> str:
    cx, cy = rect.center()
    return f"{label:>6}: ({cx:6.1f} , {cy:6.1f} )"


def bearing_deg(dx: float, dy: float) -> float:
    """Bearing of (dx, dy) with 0 deg along +Y, wrapped to [-180, 180)."""
    return wrap_deg(math.degrees(math.atan2(dy, dx)) - 90.0)


def wrap_deg(a: float) -> float:
    """Wrap angle to [-180, 180)."""
    return float((a + 180.0) % 360.0 - 180.0)
