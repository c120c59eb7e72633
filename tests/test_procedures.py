import math
import time

import pytest

from compstate import ObjectMoveProcedure, Rect, TraversalProcedure


def _box_at(cx, cy, size=10.0):
    return Rect(cx - size / 2, cy - size / 2, size, size)


def _wait_until(predicate, timeout=2.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_traversal_waits_for_fresh_robot_box(state, controller):
    proc = TraversalProcedure(controller, [(5.0, 105.0)], state)
    assert proc.step(0.0) is False
    assert controller.commands == []


def test_traversal_commands_toward_waypoint(state, controller):
    proc = TraversalProcedure(controller, [(5.0, 105.0)], state)
    state.acquire_robot_box(_box_at(5.0, 5.0))
    assert proc.step(0.0) is False
    dist, ang = controller.commands[-1]
    assert dist == pytest.approx(100.0)
    assert ang == pytest.approx(0.0)
    assert not state.is_robot_box_fresh()

    # same box, already consumed: nothing new is sent
    proc.step(0.1)
    assert len(controller.commands) == 1


def test_traversal_advances_through_waypoints(state, controller):
    proc = TraversalProcedure(controller, [(0.0, 100.0), (100.0, 100.0)], state, arrive_radius=20.0)
    state.acquire_robot_box(_box_at(0.0, 95.0))
    assert proc.step(0.0) is False
    assert proc.waypoint_index == 1
    assert proc.current_waypoint() == (100.0, 100.0)

    state.acquire_robot_box(_box_at(0.0, 100.0))
    proc.step(0.1)
    dist, ang = controller.commands[-1]
    assert dist == pytest.approx(100.0)
    assert ang == pytest.approx(-90.0)

    state.acquire_robot_box(_box_at(99.0, 101.0))
    assert proc.step(0.2) is True
    assert proc.finished
    assert proc.current_waypoint() is None


def test_empty_path_is_finished_immediately(state, controller):
    proc = TraversalProcedure(controller, [], state)
    assert proc.finished
    assert proc.step(0.0) is True


def test_traversal_thread_runs_to_completion(state, controller):
    state.append_path(5.0, 105.0)
    state.acquire_robot_box(_box_at(5.0, 100.0))
    proc = state.begin_traversal()
    assert _wait_until(lambda: not proc.is_running())
    assert proc.finished
    assert not state.is_traversing()
    assert controller.stops == 1
    state.halt_traversal()


def test_object_move_lines_up_behind_object(state, controller):
    proc = ObjectMoveProcedure(controller, [(0.0, 300.0)], state, standoff=80.0)
    state.acquire_object_box(_box_at(0.0, 100.0, size=20.0))
    state.acquire_robot_box(_box_at(100.0, 0.0))
    proc.step(0.0)
    assert not proc.pushing
    dist, _ = controller.commands[-1]
    # standoff point is (0, 20)
    assert dist == pytest.approx(math.hypot(100.0, 20.0))


def test_object_move_pushes_toward_waypoint(state, controller):
    proc = ObjectMoveProcedure(controller, [(0.0, 300.0)], state, standoff=80.0)
    state.acquire_object_box(_box_at(0.0, 100.0, size=20.0))
    state.acquire_robot_box(_box_at(0.0, 10.0))
    proc.step(0.0)
    assert proc.pushing
    dist, ang = controller.commands[-1]
    assert dist == pytest.approx(290.0)
    assert ang == pytest.approx(0.0)


def test_object_move_drops_contact_when_robot_drifts(state, controller):
    proc = ObjectMoveProcedure(controller, [(0.0, 300.0)], state, standoff=80.0)
    state.acquire_object_box(_box_at(0.0, 100.0, size=20.0))
    state.acquire_robot_box(_box_at(0.0, 20.0))
    proc.step(0.0)
    assert proc.pushing

    state.acquire_robot_box(_box_at(300.0, 100.0))
    proc.step(0.1)
    assert not proc.pushing


def test_object_move_needs_both_boxes(state, controller):
    proc = ObjectMoveProcedure(controller, [(0.0, 300.0)], state)
    state.acquire_robot_box(_box_at(0.0, 0.0))
    assert proc.step(0.0) is False
    assert controller.commands == []

    # robot position is remembered once consumed
    state.acquire_object_box(_box_at(0.0, 100.0, size=20.0))
    proc.step(0.1)
    assert len(controller.commands) == 1


def test_object_move_finishes_when_object_arrives(state, controller):
    proc = ObjectMoveProcedure(controller, [(0.0, 300.0)], state, arrive_radius=30.0)
    state.acquire_robot_box(_box_at(0.0, 200.0))
    state.acquire_object_box(_box_at(0.0, 290.0, size=20.0))
    assert proc.step(0.0) is True
    assert proc.finished


def test_stop_before_start_is_harmless(state, controller):
    proc = TraversalProcedure(controller, [(0.0, 1.0)], state)
    proc.stop()
    assert not proc.is_running()
