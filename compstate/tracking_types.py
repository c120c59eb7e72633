"""Shared lightweight types for the competition-state modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np


class ObjectType(IntEnum):
    """Classification of the tracked object."""

    UNACQUIRED = 0
    BALL = 1
    CUBE = 2
    CYLINDER = 3


@dataclass
class Rect:
    """Axis-aligned bounding box in frame/world units.

    Mutable on purpose: the state store hands out live references that the
    caller may adjust in place.
    """

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def area(self) -> float:
        return self.width * self.height

    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def copy(self) -> "Rect":
        return Rect(self.x, self.y, self.width, self.height)

    def assign(self, other: "Rect") -> None:
        """Overwrite this rectangle's fields with those of `other`."""
        self.x = float(other.x)
        self.y = float(other.y)
        self.width = float(other.width)
        self.height = float(other.height)

    @classmethod
    def from_points(cls, points) -> "Rect":
        """Bounding box of an (N, 2) point array, e.g. ArUco marker corners."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if pts.size == 0:
            return cls()
        x_min, y_min = pts.min(axis=0)
        x_max, y_max = pts.max(axis=0)
        return cls(float(x_min), float(y_min), float(x_max - x_min), float(y_max - y_min))


@dataclass
class BoxSlot:
    """A tracked rectangle plus whether it has been consumed yet."""

    rect: Rect = field(default_factory=Rect)
    fresh: bool = False


class CompStateError(RuntimeError):
    """Base class for precondition failures in the competition state."""


class DisplayNotAttachedError(CompStateError):
    """Raised when a box is acquired before a status display is attached."""


class ProcedureNotActiveError(CompStateError):
    """Raised when halting a procedure that was never begun."""


class NoControllerError(CompStateError):
    """Raised when beginning a procedure without a motion controller."""


class ProcedureStopError(CompStateError):
    """Raised when a procedure worker does not stop within the timeout."""
