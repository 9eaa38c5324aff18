"""
Core types and numeric policy shared by the trajectory models.
"""

from .errors import DegenerateTrajectory, InvalidParameter, LoomingModelError
from .numeric import (
    MAX_FRAMES,
    TERMINAL_DIAMETER,
    apply_terminal_clamp,
    frame_count,
    require_finite,
    require_positive,
)
from .results import ApproachFrame, ModelResult

__all__ = [
    "DegenerateTrajectory",
    "InvalidParameter",
    "LoomingModelError",
    "MAX_FRAMES",
    "TERMINAL_DIAMETER",
    "apply_terminal_clamp",
    "frame_count",
    "require_finite",
    "require_positive",
    "ApproachFrame",
    "ModelResult",
]
