"""
Diameter Model

Builds a looming sequence directly from a start diameter, an end diameter and a
duration, without reference to a real object size. Two expansion curves are
available:

- ``constant_diameter``: the diameter grows by the same amount every frame.
- ``constant_speed``: the diameter follows the foreshortening of a constant-velocity
  approach (1/diameter is linear in time), growing slowly at first and accelerating
  towards the end.
"""

from enum import Enum
from typing import Callable, Dict, Union

import numpy as np

from ..core.errors import InvalidParameter
from ..core.numeric import frame_count, require_finite, require_positive
from ..core.results import ApproachFrame, ModelResult
from ..utils.log_config import setup_logging

logger = setup_logging(logger_name="DiameterModel", level="INFO", color="cyan")


class ExpansionMode(Enum):
    CONSTANT_SPEED = "constant_speed"
    CONSTANT_DIAMETER = "constant_diameter"

    @classmethod
    def parse(cls, value: Union["ExpansionMode", str]) -> "ExpansionMode":
        """Return the member for ``value``, raising InvalidParameter for unknown modes."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise InvalidParameter(
                f"Unknown expansion_mode {value!r}; expected one of: {allowed}"
            ) from None


def _linear_diameters(
    start_diameter: float, end_diameter: float, progress: np.ndarray
) -> np.ndarray:
    return start_diameter + progress * (end_diameter - start_diameter)


def _reciprocal_diameters(
    start_diameter: float, end_diameter: float, progress: np.ndarray
) -> np.ndarray:
    # d(s) = k / (tau - s) with d(0) = start and d(1) = end
    return (start_diameter * end_diameter) / (
        end_diameter - progress * (end_diameter - start_diameter)
    )


EXPANSION_CURVES: Dict[ExpansionMode, Callable[[float, float, np.ndarray], np.ndarray]] = {
    ExpansionMode.CONSTANT_SPEED: _reciprocal_diameters,
    ExpansionMode.CONSTANT_DIAMETER: _linear_diameters,
}


def _approach_parameters(
    start_diameter: float, end_diameter: float, stimulus_time: float
) -> Dict[str, float]:
    """
    Virtual approach equivalent to a reciprocal expansion.

    Distances are expressed for attacker_diameter * screen_distance = 1 cm^2, so that
    distance = 1 / diameter.
    """
    start_distance = 1.0 / start_diameter
    end_distance = 1.0 / end_diameter
    speed = (start_distance - end_distance) / stimulus_time
    return {
        "virtual_start_distance": start_distance,
        "virtual_speed": speed,
        "time_to_collision": start_distance / speed,
    }


def diameter_model(
    start_diameter: float,
    end_diameter: float,
    duration: float,
    frame_rate: float = 60,
    expansion_mode: Union[ExpansionMode, str] = ExpansionMode.CONSTANT_SPEED,
) -> ModelResult:
    """
    Interpolate screen diameters between two boundary diameters.

    The animation is split into ``ceil(duration * frame_rate)`` frame intervals. One
    frame is produced per interval boundary: frame 1 shows ``start_diameter`` at
    t = 0 and the last frame shows ``end_diameter``.

    Args:
        start_diameter (float): Diameter (cm) on the first frame. Must be > 0.
        end_diameter (float): Diameter (cm) on the last frame. Must exceed
            ``start_diameter``.
        duration (float): Length (s) of the expansion.
        frame_rate (float): Frame rate (Hz) the animation will be played at.
        expansion_mode (ExpansionMode | str): ``constant_speed`` or
            ``constant_diameter``.

    Returns:
        ModelResult: ``total_frames + 1`` frames, without distances.

    Raises:
        InvalidParameter: On non-positive, non-finite or unordered inputs, an unknown
            expansion mode, or a frame count above MAX_FRAMES.
    """
    mode = ExpansionMode.parse(expansion_mode)
    start_diameter = require_positive("start_diameter", start_diameter)
    end_diameter = require_finite("end_diameter", end_diameter)
    if start_diameter >= end_diameter:
        raise InvalidParameter(
            f"start_diameter ({start_diameter}) must be smaller than "
            f"end_diameter ({end_diameter}); only expansions are supported"
        )
    duration = require_positive("duration", duration)
    frame_rate = require_positive("frame_rate", frame_rate)

    total_frames = frame_count(duration, frame_rate)
    steps = np.arange(total_frames + 1)
    progress = steps / total_frames

    diameters = EXPANSION_CURVES[mode](start_diameter, end_diameter, progress)
    diameters[0] = start_diameter
    diameters[-1] = end_diameter

    parameters = {
        "start_diameter": start_diameter,
        "end_diameter": end_diameter,
        "duration": duration,
        "frame_rate": frame_rate,
        "expansion_mode": mode.value,
        "total_frames": total_frames,
    }
    if mode is ExpansionMode.CONSTANT_SPEED:
        parameters.update(
            _approach_parameters(start_diameter, end_diameter, total_frames / frame_rate)
        )

    logger.debug(
        f"{mode.value}: {total_frames} intervals from {start_diameter} cm "
        f"to {end_diameter} cm"
    )

    frames = [
        ApproachFrame(
            frame_index=int(step) + 1,
            time=float(step / frame_rate),
            diameter_on_screen=float(diameter),
        )
        for step, diameter in zip(steps, diameters)
    ]

    return ModelResult(
        model="diameter",
        frame_rate=frame_rate,
        frames=frames,
        parameters=parameters,
    )
