"""
Error types raised while building looming trajectories.
"""


class LoomingModelError(Exception):
    """Base class for every error raised by the looming models."""


class InvalidParameter(LoomingModelError, ValueError):
    """A model input is non-finite, non-positive, out of order or not allowed."""


class DegenerateTrajectory(LoomingModelError, ArithmeticError):
    """The inputs are valid but do not produce a usable frame sequence."""
