"""Calibration parameters consumed by the box validity checks.

Values are stored in `TrackingParams.npz` using the same lookup the vision
stack uses for `Calibration.npz`: next to this module, the project root, then
the working directory.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

import numpy as np

from .tracking_types import Rect

PARAMS_FILENAME = "TrackingParams.npz"
_REQUIRED_KEYS = ("robot_calib_area", "object_calib_area", "area_acq_r_sigma")


@dataclass(frozen=True)
class TrackingParams:
    robot_calib_area: float = 1.0
    object_calib_area: float = 1.0
    area_acq_r_sigma: float = 0.5
    # None keeps the original squareness check only.
    max_aspect: float | None = None


def _find_params_file(path: str | Path | None) -> Path:
    if path is not None:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Tracking parameter file not found: {p}")
        return p
    here = Path(__file__).resolve().parent
    candidates = [
        here / PARAMS_FILENAME,
        here.parent / PARAMS_FILENAME,
        Path.cwd() / PARAMS_FILENAME,
    ]
    found = next((p for p in candidates if p.exists()), None)
    if not found:
        raise FileNotFoundError(
            f"{PARAMS_FILENAME} not found. Place it next to the package or in the working directory."
        )
    return found


def load_params(path: str | Path | None = None) -> TrackingParams:
    src = _find_params_file(path)
    with np.load(str(src)) as data:
        missing = [k for k in _REQUIRED_KEYS if k not in data.files]
        if missing:
            raise ValueError(f"{src} is missing calibration keys: {', '.join(missing)}")

        robot_area = float(data["robot_calib_area"])
        object_area = float(data["object_calib_area"])
        sigma = float(data["area_acq_r_sigma"])
        max_aspect = None
        if "max_aspect" in data.files:
            value = float(data["max_aspect"])
            # NaN marks "unset" so the key can always be written.
            max_aspect = None if np.isnan(value) else value

    if robot_area <= 0.0 or object_area <= 0.0:
        raise ValueError(f"Calibrated areas must be positive (robot={robot_area}, object={object_area})")
    return TrackingParams(robot_area, object_area, sigma, max_aspect)


def save_params(params: TrackingParams, path: str | Path) -> Path:
    dst = Path(path)
    np.savez(
        str(dst),
        robot_calib_area=params.robot_calib_area,
        object_calib_area=params.object_calib_area,
        area_acq_r_sigma=params.area_acq_r_sigma,
        max_aspect=np.nan if params.max_aspect is None else params.max_aspect,
    )
    # np.savez appends .npz when missing
    return dst if dst.suffix == ".npz" else dst.with_name(dst.name + ".npz")


def calibrate_robot(params: TrackingParams, rect: Rect) -> TrackingParams:
    """Return params with the robot's expected area taken from a measured box."""
    area = abs(rect.area())
    if area <= 0.0:
        raise ValueError("Cannot calibrate from a zero-area robot box.")
    return replace(params, robot_calib_area=area)


def calibrate_object(params: TrackingParams, rect: Rect) -> TrackingParams:
    area = abs(rect.area())
    if area <= 0.0:
        raise ValueError("Cannot calibrate from a zero-area object box.")
    return replace(params, object_calib_area=area)
