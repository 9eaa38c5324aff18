"""
loomgen: frame-accurate looming stimuli for escape-response experiments.
"""

from .core import (
    ApproachFrame,
    DegenerateTrajectory,
    InvalidParameter,
    LoomingModelError,
    ModelResult,
    apply_terminal_clamp,
)
from .models import ExpansionMode, constant_speed_model, diameter_model

__version__ = "0.1.0"

__all__ = [
    "ApproachFrame",
    "DegenerateTrajectory",
    "InvalidParameter",
    "LoomingModelError",
    "ModelResult",
    "apply_terminal_clamp",
    "ExpansionMode",
    "constant_speed_model",
    "diameter_model",
]
