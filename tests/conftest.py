"""Test fixtures: fake status display, recording motion controller, state."""

from __future__ import annotations

from threading import Lock

import pytest

from compstate import CompetitionState, TrackingParams


class FakeLabel:
    def __init__(self, text: str) -> None:
        self.history = [text]

    def set_text(self, text: str) -> None:
        self.history.append(text)

    @property
    def text(self) -> str:
        return self.history[-1]


class FakeDisplay:
    def __init__(self) -> None:
        self.labels: list[FakeLabel] = []

    def add_label(self, initial_text: str) -> FakeLabel:
        label = FakeLabel(initial_text)
        self.labels.append(label)
        return label


class RecordingController:
    def __init__(self) -> None:
        self._lock = Lock()
        self.commands: list[tuple[float, float]] = []
        self.stops = 0

    def send(self, distance: float, angle_deg: float) -> None:
        with self._lock:
            self.commands.append((distance, angle_deg))

    def stop(self) -> None:
        with self._lock:
            self.stops += 1


@pytest.fixture
def params():
    return TrackingParams(robot_calib_area=100.0, object_calib_area=400.0, area_acq_r_sigma=0.25)


@pytest.fixture
def display():
    return FakeDisplay()


@pytest.fixture
def controller():
    return RecordingController()


@pytest.fixture
def state(params, display, controller):
    s = CompetitionState(params, display=display, controller=controller)
    yield s
    s.shutdown()
