"""
Trajectory models that turn approach parameters into per-frame screen diameters.
"""

from .constant_speed import constant_speed_model
from .diameter import EXPANSION_CURVES, ExpansionMode, diameter_model

__all__ = [
    "constant_speed_model",
    "diameter_model",
    "ExpansionMode",
    "EXPANSION_CURVES",
]
