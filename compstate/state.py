"""
Competition state: owns the tracked boxes, the accumulated path and the
motion procedures built from it.

- Robot and object boxes carry a freshness flag that is set on every
  acquisition and cleared only by a consuming read.
- The target box and the wall array are plain storage.
- At most one traversal and one object-move procedure are alive at a time;
  beginning a new one stops and joins the previous one first. A worker that
  does not stop within `stop_timeout` keeps its slot and raises
  ProcedureStopError.

Mutation entry points are meant to be called from one owner thread. Box reads
and writes take a lock because procedures consume boxes from their own thread.
"""

from __future__ import annotations

from threading import Lock

from .geometry import SENTINEL_SCORE, acquisition_score, center_text
from .params import TrackingParams
from .procedures import ObjectMoveProcedure, TraversalProcedure
from .tracking_types import (
    BoxSlot,
    DisplayNotAttachedError,
    NoControllerError,
    ObjectType,
    ProcedureNotActiveError,
    ProcedureStopError,
    Rect,
)


class CompetitionState:
    def __init__(
        self,
        params: TrackingParams,
        display=None,
        controller=None,
        log_path: bool = False,
        stop_timeout: float = 2.0,
    ) -> None:
        self.params = params
        self.controller = controller
        self.log_path = bool(log_path)
        self.stop_timeout = max(float(stop_timeout), 0.0)
        self.lock = Lock()

        self._robot = BoxSlot()
        self._object = BoxSlot()
        self._target = Rect()
        self._walls = None
        self._path: list[tuple[float, float]] = []

        self._tracking_robot = False
        self._tracking_object = False
        self._acquire_walls = False
        self._object_type = int(ObjectType.UNACQUIRED)

        self._robot_label = None
        self._object_label = None
        self._procedure: TraversalProcedure | None = None
        self._object_procedure: ObjectMoveProcedure | None = None

        if display is not None:
            self.attach_display(display)

    def attach_display(self, display) -> None:
        """Create the Robot/Object center labels on a status display."""
        self._robot_label = display.add_label(center_text(Rect(), "Robot"))
        self._object_label = display.add_label(center_text(Rect(), "Object"))

    def set_params(self, params: TrackingParams) -> None:
        self.params = params

    # ------------------------------------------------------------------
    # Box acquisition
    # ------------------------------------------------------------------
    def acquire_robot_box(self, robot_box: Rect) -> None:
        if self._robot_label is None:
            raise DisplayNotAttachedError("Attach a status display before acquiring the robot box.")
        self._robot_label.set_text(center_text(robot_box, "Robot"))
        with self.lock:
            self._robot.rect.assign(robot_box)
            self._robot.fresh = True

    def acquire_object_box(self, object_box: Rect) -> None:
        if self._object_label is None:
            raise DisplayNotAttachedError("Attach a status display before acquiring the object box.")
        self._object_label.set_text(center_text(object_box, "Object"))
        with self.lock:
            self._object.rect.assign(object_box)
            self._object.fresh = True

    def acquire_target_box(self, target_box: Rect) -> None:
        with self.lock:
            self._target.assign(target_box)

    def acquire_walls(self, walls) -> None:
        # Shared with the detector; never copied or written here.
        self._walls = walls

    def get_walls(self):
        return self._walls

    # ------------------------------------------------------------------
    # Box access
    # ------------------------------------------------------------------
    def get_robot_box(self, consume: bool = False) -> Rect:
        with self.lock:
            self._robot.fresh = self._robot.fresh and not consume
            return self._robot.rect

    def get_object_box(self, consume: bool = False) -> Rect:
        with self.lock:
            self._object.fresh = self._object.fresh and not consume
            return self._object.rect

    def consume_robot_box(self) -> Rect | None:
        """Atomically take a copy of the robot box if fresh, else None."""
        with self.lock:
            if not self._robot.fresh:
                return None
            self._robot.fresh = False
            return self._robot.rect.copy()

    def consume_object_box(self) -> Rect | None:
        with self.lock:
            if not self._object.fresh:
                return None
            self._object.fresh = False
            return self._object.rect.copy()

    def get_target_box(self) -> Rect:
        return self._target

    def is_robot_box_fresh(self) -> bool:
        return self._robot.fresh

    def is_object_box_fresh(self) -> bool:
        return self._object.fresh

    def robot_box_score(self) -> float:
        p = self.params
        return acquisition_score(self._robot.rect, p.robot_calib_area, p.max_aspect)

    def object_box_score(self) -> float:
        p = self.params
        return acquisition_score(self._object.rect, p.object_calib_area, p.max_aspect)

    def is_robot_box_valid(self) -> bool:
        return self._score_is_valid(self.robot_box_score())

    def is_object_box_valid(self) -> bool:
        return self._score_is_valid(self.object_box_score())

    def _score_is_valid(self, score: float) -> bool:
        # The sentinel is never valid, whatever sigma is configured.
        return score != SENTINEL_SCORE and score < self.params.area_acq_r_sigma

    # ------------------------------------------------------------------
    # Tracking flags
    # ------------------------------------------------------------------
    def is_tracking_robot(self) -> bool:
        return self._tracking_robot

    def is_tracking_object(self) -> bool:
        return self._tracking_object

    def is_acquiring_walls(self) -> bool:
        return self._acquire_walls

    def object_type(self) -> int:
        return self._object_type

    def set_tracking_robot(self, tracking_robot: bool) -> None:
        self._tracking_robot = bool(tracking_robot)

    def set_tracking_object(self, tracking_object: bool) -> None:
        self._tracking_object = bool(tracking_object)

    def set_acquire_walls(self, acquire_walls: bool) -> None:
        self._acquire_walls = bool(acquire_walls)

    def set_object_type(self, object_type: int) -> None:
        self._object_type = int(object_type)

    # ------------------------------------------------------------------
    # Path
    # ------------------------------------------------------------------
    def clear_path(self) -> None:
        self._path.clear()

    def append_path(self, x: float, y: float) -> None:
        if self.log_path:
            print(f"[CompetitionState] ({x}, {y})")
        self._path.append((float(x), float(y)))

    def get_path(self) -> tuple[tuple[float, float], ...]:
        return tuple(self._path)

    # ------------------------------------------------------------------
    # Procedures
    # ------------------------------------------------------------------
    def _stop_procedure(self, procedure, kind: str) -> None:
        if not procedure.stop(timeout=self.stop_timeout):
            raise ProcedureStopError(f"{kind} worker still running after {self.stop_timeout:.2f} s; slot kept.")

    def begin_traversal(self) -> TraversalProcedure:
        if self.controller is None:
            raise NoControllerError("No motion controller configured for traversal.")
        if self._procedure is not None:
            self._stop_procedure(self._procedure, "Traversal")
        self._procedure = TraversalProcedure(self.controller, self.get_path(), self)
        self._procedure.start()
        return self._procedure

    def halt_traversal(self) -> None:
        if self._procedure is None:
            raise ProcedureNotActiveError("halt_traversal() called with no traversal begun.")
        self._stop_procedure(self._procedure, "Traversal")
        self._procedure = None

    def is_traversing(self) -> bool:
        return bool(self._procedure and self._procedure.is_running())

    def begin_object_move(self) -> ObjectMoveProcedure:
        if self.controller is None:
            raise NoControllerError("No motion controller configured for object move.")
        if self._object_procedure is not None:
            self._stop_procedure(self._object_procedure, "Object move")
        self._object_procedure = ObjectMoveProcedure(self.controller, self.get_path(), self)
        self._object_procedure.start()
        return self._object_procedure

    def halt_object_move(self) -> None:
        if self._object_procedure is None:
            raise ProcedureNotActiveError("halt_object_move() called with no object move begun.")
        self._stop_procedure(self._object_procedure, "Object move")
        self._object_procedure = None

    def is_moving_object(self) -> bool:
        return bool(self._object_procedure and self._object_procedure.is_running())

    def shutdown(self) -> None:
        """Stop any live procedure; call when the session ends."""
        if self._procedure is not None:
            self.halt_traversal()
        if self._object_procedure is not None:
            self.halt_object_move()
