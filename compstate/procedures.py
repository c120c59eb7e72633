"""
Motion procedures driven by an accumulated 2D path.

Each procedure runs on its own daemon thread and calls `step(now)` at a fixed
rate until the path is exhausted or `stop()` is requested. Commands go to a
motion controller exposing `send(distance, angle_deg)` and `stop()`.

Yaw convention matches the navigation stack: 0 deg points along +Y.
"""

from __future__ import annotations

import math
import time
from threading import Event, Thread
from typing import Sequence

from .geometry import bearing_deg


class PathProcedure:
    """Thread lifecycle shared by the path-following procedures."""

    def __init__(
        self,
        controller,
        path: Sequence[tuple[float, float]],
        state,
        arrive_radius: float = 30.0,
        update_hz: float = 20.0,
        log_steps: bool = False,
    ) -> None:
        self.controller = controller
        self.path = tuple((float(x), float(y)) for x, y in path)
        self.state = state
        self.arrive_radius = max(float(arrive_radius), 1e-6)
        self._update_period = 1.0 / max(float(update_hz), 1.0)
        self.log_steps = bool(log_steps)

        self._index = 0
        self._finished = not self.path
        self._stop_event = Event()
        self._thread: Thread | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = Thread(target=self._loop, name=type(self).__name__, daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 2.0) -> bool:
        """Request a stop and wait for the worker to wind down.

        Returns False if the worker is still alive after `timeout`; the
        thread handle is kept so a later call can join it.
        """
        self._stop_event.set()
        if not self._thread:
            return True
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            return False
        self._thread = None
        return True

    def is_running(self) -> bool:
        thread = self._thread
        return bool(thread and thread.is_alive())

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def waypoint_index(self) -> int:
        return self._index

    def current_waypoint(self) -> tuple[float, float] | None:
        if self._index >= len(self.path):
            return None
        return self.path[self._index]

    # ------------------------------------------------------------------
    # Internal logic
    # ------------------------------------------------------------------
    def _loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                if self.step(time.time()):
                    break
                self._stop_event.wait(self._update_period)
        finally:
            self.controller.stop()

    def step(self, now: float) -> bool:
        """Advance one control cycle. Returns True once the procedure is done."""
        raise NotImplementedError

    def _advance(self) -> bool:
        self._index += 1
        if self._index >= len(self.path):
            self._finished = True
        if self.log_steps:
            print(f"[{type(self).__name__}] waypoint {self._index}/{len(self.path)}")
        return self._finished

    def _command(self, distance: float, angle_deg: float) -> None:
        self.controller.send(float(distance), float(angle_deg))


class TraversalProcedure(PathProcedure):
    """Drive the robot through each path point in order."""

    def step(self, now: float) -> bool:
        if self._finished:
            return True
        robot = self.state.consume_robot_box()
        if robot is None:
            return False

        rx, ry = robot.center()
        wx, wy = self.path[self._index]
        dx = wx - rx
        dy = wy - ry
        dist = math.hypot(dx, dy)
        if dist <= self.arrive_radius:
            return self._advance()

        self._command(dist, bearing_deg(dx, dy))
        return False


class ObjectMoveProcedure(PathProcedure):
    """Push the tracked object through each path point in order.

    The robot first lines up on a standoff point behind the object (opposite
    the current waypoint), then drives through the object toward the
    waypoint. Contact is considered lost when the robot drifts more than
    twice the standoff away from the object.
    """

    def __init__(self, controller, path, state, standoff: float = 80.0, **kwargs) -> None:
        super().__init__(controller, path, state, **kwargs)
        self.standoff = max(float(standoff), 0.0)
        self._robot_xy: tuple[float, float] | None = None
        self._object_xy: tuple[float, float] | None = None
        self._pushing = False

    @property
    def pushing(self) -> bool:
        return self._pushing

    def step(self, now: float) -> bool:
        if self._finished:
            return True

        robot = self.state.consume_robot_box()
        obj = self.state.consume_object_box()
        if robot is not None:
            self._robot_xy = robot.center()
        if obj is not None:
            self._object_xy = obj.center()
        if (robot is None and obj is None) or self._robot_xy is None or self._object_xy is None:
            return False

        rx, ry = self._robot_xy
        ox, oy = self._object_xy
        wx, wy = self.path[self._index]

        to_wp_x = wx - ox
        to_wp_y = wy - oy
        obj_dist = math.hypot(to_wp_x, to_wp_y)
        if obj_dist <= self.arrive_radius:
            self._pushing = False
            return self._advance()

        ux = to_wp_x / obj_dist
        uy = to_wp_y / obj_dist
        sx = ox - ux * self.standoff
        sy = oy - uy * self.standoff

        if self._pushing and math.hypot(ox - rx, oy - ry) > 2.0 * self.standoff:
            self._pushing = False
        if not self._pushing and math.hypot(sx - rx, sy - ry) <= self.arrive_radius:
            self._pushing = True

        if self._pushing:
            dx = wx - rx
            dy = wy - ry
        else:
            dx = sx - rx
            dy = sy - ry
        self._command(math.hypot(dx, dy), bearing_deg(dx, dy))
        return False
