"""Preview overlay: draws the tracked boxes, path and walls on a BGR frame."""

from __future__ import annotations

import cv2
import numpy as np

from .tracking_types import Rect

ROBOT_COLOR = (0, 255, 0)
OBJECT_COLOR = (255, 0, 0)
TARGET_COLOR = (0, 0, 255)
PATH_COLOR = (0, 255, 255)
WALL_COLOR = (128, 128, 128)


def _draw_box(frame: np.ndarray, rect: Rect, color, label: str) -> None:
    if not rect.area():
        return
    p0 = (int(round(rect.x)), int(round(rect.y)))
    p1 = (int(round(rect.x + rect.width)), int(round(rect.y + rect.height)))
    cv2.rectangle(frame, p0, p1, color, 2)
    cv2.putText(frame, label, (p0[0], p0[1] - 6), cv2.FONT_HERSHEY_SIMPLEX, 0.5, color, 1)


def draw_state(frame: np.ndarray, state) -> np.ndarray:
    """Annotate `frame` in place with everything `state` currently holds."""
    walls = state.get_walls()
    if walls is not None:
        for x1, y1, x2, y2 in np.asarray(walls, dtype=np.float64).reshape(-1, 4):
            cv2.line(frame, (int(x1), int(y1)), (int(x2), int(y2)), WALL_COLOR, 2)

    path = state.get_path()
    if len(path) >= 2:
        pts = np.int32(np.round(path)).reshape(-1, 1, 2)
        cv2.polylines(frame, [pts], False, PATH_COLOR, 2)
    for x, y in path:
        cv2.circle(frame, (int(round(x)), int(round(y))), 3, PATH_COLOR, -1)

    # Plain reads: drawing must not consume freshness.
    _draw_box(frame, state.get_robot_box(consume=False), ROBOT_COLOR, "Robot")
    _draw_box(frame, state.get_object_box(consume=False), OBJECT_COLOR, "Object")
    _draw_box(frame, state.get_target_box(), TARGET_COLOR, "Target")
    return frame
