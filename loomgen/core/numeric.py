"""
Numeric Policy Module

Shared rules the trajectory models apply to their inputs and outputs: input validation,
how many frames a stimulus of a given length occupies, and the terminal clamp that
replaces the diameters of a constant-speed approach from where it reaches the viewer.
"""

import math
from numbers import Real
from typing import Optional, Sequence

import numpy as np

from .errors import DegenerateTrajectory, InvalidParameter

# Diameter (cm) forced onto the last frame of a constant-speed approach
TERMINAL_DIAMETER = 1000.0

# Upper bound on the number of frames a single model may produce
MAX_FRAMES = 1_000_000

# Frame products closer than this to an integer are treated as that integer
FRAME_SNAP_TOLERANCE = 1e-9


def require_finite(name: str, value: float) -> float:
    """Return ``value`` as a float, raising InvalidParameter if it is not a finite number."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidParameter(f"{name} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameter(f"{name} must be finite, got {value}")
    return value


def require_positive(name: str, value: float) -> float:
    """Return ``value`` as a float, raising InvalidParameter unless it is finite and > 0."""
    value = require_finite(name, value)
    if value <= 0:
        raise InvalidParameter(f"{name} must be greater than zero, got {value}")
    return value


def frame_count(duration: float, frame_rate: float) -> int:
    """
    Number of frames needed to cover ``duration`` seconds at ``frame_rate`` Hz.

    The count is rounded up so a fractional last frame is never dropped. Products that
    only miss an integer by floating-point noise are snapped to it first.

    Args:
        duration (float): Length of the stimulus in seconds.
        frame_rate (float): Playback rate in Hz.

    Returns:
        int: The frame count.

    Raises:
        InvalidParameter: If the count exceeds MAX_FRAMES.
        DegenerateTrajectory: If the count is zero.
    """
    raw = duration * frame_rate
    if not math.isfinite(raw):
        raise InvalidParameter(f"{duration} s at {frame_rate} Hz is not a frame count")

    nearest = round(raw)
    if abs(raw - nearest) < FRAME_SNAP_TOLERANCE:
        raw = nearest

    if raw > MAX_FRAMES:
        raise InvalidParameter(
            f"{duration} s at {frame_rate} Hz needs {raw:.0f} frames "
            f"(limit is {MAX_FRAMES})"
        )

    n_frames = int(math.ceil(raw))
    if n_frames < 1:
        raise DegenerateTrajectory(
            f"{duration} s at {frame_rate} Hz does not cover a single frame"
        )
    return n_frames


def apply_terminal_clamp(
    diameters: Sequence[float],
    distances: Optional[Sequence[float]] = None,
    sentinel: float = TERMINAL_DIAMETER,
) -> np.ndarray:
    """
    Replace the terminal diameters of a sequence with a fixed sentinel.

    The distance step of a constant-speed approach is rounded to three decimals, so the
    final distance lands near zero on either side of it (or on it) and the projected
    diameter blows up, goes negative or becomes infinite. When the step rounds up, the
    attacker can reach the viewer a frame or more before the last one. The last value,
    and every value from the first non-positive distance onward, is therefore not
    derived from the projection at all.

    Args:
        diameters (Sequence[float]): Per-frame diameters, in frame order.
        distances (Sequence[float], optional): Per-frame distances matching
            ``diameters``. Frames from the first distance <= 0 onward get the sentinel.
        sentinel (float): Value written to the clamped frames.

    Returns:
        np.ndarray: A float copy of ``diameters`` with the terminal frames replaced.

    Raises:
        DegenerateTrajectory: If ``diameters`` is empty.
        ValueError: If ``distances`` does not match ``diameters`` in length.
    """
    clamped = np.array(diameters, dtype=float)
    if clamped.size == 0:
        raise DegenerateTrajectory("Cannot clamp the last frame of an empty sequence")

    first = clamped.size - 1
    if distances is not None:
        distances = np.asarray(distances, dtype=float)
        if distances.shape != clamped.shape:
            raise ValueError(
                f"Got {distances.size} distances for {clamped.size} diameters"
            )
        reached = np.flatnonzero(distances <= 0)
        if reached.size:
            first = min(first, int(reached[0]))

    clamped[first:] = sentinel
    return clamped
