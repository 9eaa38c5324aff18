"""
Constant Speed Model

Projects an object of fixed real diameter approaching the viewer at constant speed onto
the screen. The on-screen diameter at each frame follows pinhole geometry:

    diameter_on_screen = attacker_diameter * screen_distance / distance

so an observer sitting ``screen_distance`` away from the display sees the same visual
angle as they would for the real object at ``distance``. Inputs are in cm, cm/s and Hz.
"""

import numpy as np

from ..core.errors import DegenerateTrajectory
from ..core.numeric import apply_terminal_clamp, frame_count, require_positive
from ..core.results import ApproachFrame, ModelResult
from ..utils.log_config import setup_logging

logger = setup_logging(logger_name="ConstantSpeedModel", level="INFO", color="cyan")

# Distance step resolution (decimal places)
DISTANCE_DECIMALS = 3


def constant_speed_model(
    screen_distance: float = 20,
    frame_rate: float = 60,
    speed: float = 500,
    attacker_diameter: float = 50,
    start_distance: float = 1000,
) -> ModelResult:
    """
    Calculate per-frame screen diameters for an object approaching at constant speed.

    A diameter is computed for every frame from ``start_distance`` until the distance
    between attacker and viewer reaches zero. The distance covered per frame is rounded
    to three decimals, which can leave the final distance slightly above or below zero,
    or reach zero a frame or more early when the step rounds up. The final diameter, and
    any diameter from the first non-positive distance onward, is clamped to
    TERMINAL_DIAMETER.

    Note that a viewer closer to or further from the screen than ``screen_distance``
    perceives a different distance and speed.

    Args:
        screen_distance (float): Distance (cm) from the screen to the viewer.
        frame_rate (float): Frame rate (Hz) the animation will be played at.
        speed (float): Speed (cm/s) of the hypothetical attacker.
        attacker_diameter (float): Diameter (cm) of the hypothetical attacker.
        start_distance (float): Starting distance (cm) of the attacker.

    Returns:
        ModelResult: One frame per animation frame, with the inputs echoed in
        ``parameters``.

    Raises:
        InvalidParameter: If any input is not a finite positive number, or the
            approach needs more than MAX_FRAMES frames.
        DegenerateTrajectory: If the rounded distance step is zero.
    """
    screen_distance = require_positive("screen_distance", screen_distance)
    frame_rate = require_positive("frame_rate", frame_rate)
    speed = require_positive("speed", speed)
    attacker_diameter = require_positive("attacker_diameter", attacker_diameter)
    start_distance = require_positive("start_distance", start_distance)

    total_time = start_distance / speed
    total_frames = frame_count(total_time, frame_rate)

    distance_per_frame = round(speed / frame_rate, DISTANCE_DECIMALS)
    if distance_per_frame <= 0:
        raise DegenerateTrajectory(
            f"Distance per frame ({speed} cm/s at {frame_rate} Hz) rounds to zero"
        )

    logger.debug(
        f"total_time={total_time} s, total_frames={total_frames}, "
        f"distance_per_frame={distance_per_frame} cm"
    )

    frame_numbers = np.arange(1, total_frames + 1)
    times = frame_numbers / frame_rate
    distances = start_distance - frame_numbers * distance_per_frame

    # Terminal distances may be zero or negative; those values are replaced below
    with np.errstate(divide="ignore", invalid="ignore"):
        diameters = (attacker_diameter * screen_distance) / distances

    reached = int(np.count_nonzero(distances[:-1] <= 0))
    if reached:
        logger.debug(
            f"Rounded distance step {distance_per_frame} cm reaches the viewer "
            f"{reached} frame(s) before the last; clamping those frames too"
        )
    logger.debug(
        f"Final distance {distances[-1]:.3f} cm gives diameter {diameters[-1]}; "
        f"clamping to terminal diameter"
    )
    diameters = apply_terminal_clamp(diameters, distances)

    frames = [
        ApproachFrame(
            frame_index=int(i),
            time=float(t),
            diameter_on_screen=float(d),
            distance=float(r),
        )
        for i, t, d, r in zip(frame_numbers, times, diameters, distances)
    ]

    return ModelResult(
        model="constant_speed",
        frame_rate=frame_rate,
        frames=frames,
        parameters={
            "screen_distance": screen_distance,
            "frame_rate": frame_rate,
            "speed": speed,
            "attacker_diameter": attacker_diameter,
            "start_distance": start_distance,
            "total_time": total_time,
            "distance_per_frame": distance_per_frame,
        },
    )
