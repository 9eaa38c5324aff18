"""
Model results shared by every trajectory model.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pandas as pd

from .errors import DegenerateTrajectory


@dataclass(frozen=True)
class ApproachFrame:
    """One frame of a looming animation."""

    frame_index: int
    time: float
    diameter_on_screen: float
    distance: Optional[float] = None

    def to_row(self) -> Dict[str, Any]:
        """Return the frame as a CSV/DataFrame row."""
        row: Dict[str, Any] = {"frame": self.frame_index, "time": self.time}
        if self.distance is not None:
            row["distance"] = self.distance
        row["diam_on_screen"] = self.diameter_on_screen
        return row


@dataclass(frozen=True)
class ModelResult:
    """
    Immutable output of a trajectory model.

    Attributes:
        model: Name of the model that produced the frames.
        frame_rate: Playback rate (Hz) the frames were computed for.
        frames: Frames in chronological order.
        parameters: Input parameters echoed back, plus derived quantities.
    """

    model: str
    frame_rate: float
    frames: Tuple[ApproachFrame, ...]
    parameters: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "frames", tuple(self.frames))
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))
        self._check_invariants()

    def _check_invariants(self) -> None:
        if not self.frames:
            raise DegenerateTrajectory(f"{self.model} model produced no frames")

        for expected, frame in enumerate(self.frames, start=1):
            if frame.frame_index != expected:
                raise DegenerateTrajectory(
                    f"Frame {frame.frame_index} found where frame {expected} was expected"
                )
            if not math.isfinite(frame.diameter_on_screen) or frame.diameter_on_screen <= 0:
                raise DegenerateTrajectory(
                    f"Frame {frame.frame_index} has diameter {frame.diameter_on_screen}"
                )

        with_distance = sum(frame.distance is not None for frame in self.frames)
        if 0 < with_distance < len(self.frames):
            raise DegenerateTrajectory(
                f"{with_distance} of {len(self.frames)} frames carry a distance; "
                f"either all or none must"
            )

        distances = self.distances
        if distances is not None:
            if any(later >= earlier for earlier, later in zip(distances, distances[1:])):
                raise DegenerateTrajectory("Approach distance must decrease every frame")
        else:
            diameters = self.diameters
            if any(later < earlier for earlier, later in zip(diameters, diameters[1:])):
                raise DegenerateTrajectory("Diameters must not shrink between frames")

    @property
    def diameters(self) -> Tuple[float, ...]:
        return tuple(frame.diameter_on_screen for frame in self.frames)

    @property
    def times(self) -> Tuple[float, ...]:
        return tuple(frame.time for frame in self.frames)

    @property
    def distances(self) -> Optional[Tuple[float, ...]]:
        """Per-frame distances, or None for models without a physical distance."""
        if self.frames[0].distance is None:
            return None
        return tuple(frame.distance for frame in self.frames)

    @property
    def total_frames(self) -> int:
        return len(self.frames)

    @property
    def duration(self) -> float:
        """Time (s) of the last frame."""
        return self.frames[-1].time

    def to_rows(self) -> List[Dict[str, Any]]:
        return [frame.to_row() for frame in self.frames]

    def to_dataframe(self) -> pd.DataFrame:
        """Return the frames as a DataFrame with one row per frame."""
        return pd.DataFrame(self.to_rows())
