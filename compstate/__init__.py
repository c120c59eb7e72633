"""Competition tracking state for the vision-guided robot loop."""

from .geometry import SENTINEL_SCORE, acquisition_score, center_text
from .params import TrackingParams, load_params, save_params
from .procedures import ObjectMoveProcedure, TraversalProcedure
from .state import CompetitionState
from .tracking_types import (
    BoxSlot,
    CompStateError,
    DisplayNotAttachedError,
    NoControllerError,
    ObjectType,
    ProcedureNotActiveError,
    ProcedureStopError,
    Rect,
)

__all__ = [
    "SENTINEL_SCORE",
    "acquisition_score",
    "center_text",
    "TrackingParams",
    "load_params",
    "save_params",
    "ObjectMoveProcedure",
    "TraversalProcedure",
    "CompetitionState",
    "BoxSlot",
    "CompStateError",
    "DisplayNotAttachedError",
    "NoControllerError",
    "ObjectType",
    "ProcedureNotActiveError",
    "ProcedureStopError",
    "Rect",
]
