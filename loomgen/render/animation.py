"""
Looming Animation Module

Draws a model's diameter sequence as a centred circle, one frame per diameter, and
encodes the frames to a video with ffmpeg. Frames can be marked with corner dots or
frame numbers so that a behavioural response can later be matched to the exact frame
on screen.

The circle diameter on each frame is ``diameter_on_screen * correction`` as a fraction
of the frame width. ``correction`` is a display-specific factor that makes the physical
size of the circle match the model's diameters in cm.
"""

import math
import os
from typing import Optional, Tuple

# Hide Pygame support prompt
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "hide"

import cv2  # noqa: E402
import numpy as np  # noqa: E402
import pygame  # noqa: E402
from tqdm import tqdm  # noqa: E402
from vidgear.gears import WriteGear  # noqa: E402

from ..config import AnimationConfig  # noqa: E402
from ..utils.log_config import setup_logging  # noqa: E402

logger = setup_logging(logger_name="LoomingAnimation", level="INFO", color="magenta")

# Corner offsets, as fractions of the frame, measured from the left and the bottom
DOTS_OFFSETS = {"l": 0.07, "r": 0.93, "b": 0.05, "t": 0.95}
FRAME_NUMBER_OFFSETS = {"l": 0.05, "r": 0.95, "b": 0.05, "t": 0.95}

# Font height (px) for frame_number_size = 1, matching 12 pt text at 72 dpi
FONT_PX_PER_SIZE = 12

output_params = {
    "-vcodec": "libx264",
    "-crf": 25,
    "-pix_fmt": "yuv420p",
}


def _left(string: str, n: int) -> str:
    return string[:n]


def _right(string: str, n: int) -> str:
    return string[-n:]


def _corner_fractions(position: str, offsets: dict) -> Tuple[float, float]:
    """Return the (x, y) fractions for a corner code such as "tr" or "bl"."""
    vertical, horizontal = _left(position, 1), _right(position, 1)
    if len(position) != 2 or vertical not in ("t", "b") or horizontal not in ("l", "r"):
        raise ValueError(
            f"Invalid corner position {position!r}; use one of: tr, tl, br, bl"
        )
    return offsets[horizontal], offsets[vertical]


class LoomingAnimation:
    """Render the diameter sequence of a model result to frames and video."""

    def __init__(self, settings: Optional[AnimationConfig] = None):
        self.settings = settings or AnimationConfig()
        self._size = (int(self.settings.width), int(self.settings.height))

        # Validate corners up front rather than on the first marked frame
        self._dots_xy = self._to_pixels(
            _corner_fractions(self.settings.dots_position, DOTS_OFFSETS)
        )
        self._frame_number_xy = self._to_pixels(
            _corner_fractions(self.settings.frame_number_position, FRAME_NUMBER_OFFSETS)
        )

        self._fill = pygame.Color(self.settings.fill)
        self._background = pygame.Color(self.settings.background)
        self._dots_colour = pygame.Color(self.settings.dots_colour)
        self._frame_number_colour = pygame.Color(self.settings.frame_number_colour)
        self._font: Optional[pygame.font.Font] = None
        self._surface = pygame.Surface(self._size)

    def _to_pixels(self, fractions: Tuple[float, float]) -> Tuple[int, int]:
        x, y = fractions
        width, height = self._size
        return int(round(x * width)), int(round((1 - y) * height))

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            size = max(1, int(round(self.settings.frame_number_size * FONT_PX_PER_SIZE)))
            self._font = pygame.font.Font(None, size)
        return self._font

    def circle_radius(self, diameter: float) -> float:
        """Radius in pixels of the circle drawn for a model diameter (cm)."""
        correction = self.settings.correction
        corrected = diameter * correction if correction is not None else diameter
        return corrected * self._size[0] / 2

    def _draw_circle(self, radius: float) -> None:
        width, height = self._size
        centre = (width // 2, height // 2)
        if radius >= math.hypot(width, height):
            # Larger than the frame; fill instead of rasterising a huge circle
            self._surface.fill(self._fill)
        elif int(round(radius)) > 0:
            pygame.draw.circle(self._surface, self._fill, centre, int(round(radius)))

    def _dot_due(self, frame_number: int, total_frames: int) -> bool:
        interval = self.settings.dots_interval
        return (
            frame_number == 1
            or frame_number == total_frames
            or (interval > 0 and frame_number % interval == 0)
        )

    def _draw_dot(self) -> None:
        radius = max(1, int(round(self.settings.dots_size * self._size[0])))
        pygame.draw.circle(self._surface, self._dots_colour, self._dots_xy, radius)

    def _draw_frame_number(self, frame_number: int) -> None:
        text = self._get_font().render(str(frame_number), True, self._frame_number_colour)
        if self.settings.frame_number_rotation:
            text = pygame.transform.rotate(text, self.settings.frame_number_rotation)
        self._surface.blit(text, text.get_rect(center=self._frame_number_xy))

    def frame_surface(
        self, diameter: float, frame_number: int, total_frames: int
    ) -> pygame.Surface:
        """
        Draw a single frame.

        Args:
            diameter (float): Model diameter (cm) for this frame.
            frame_number (int): 1-based number of the frame.
            total_frames (int): Number of frames in the animation.

        Returns:
            pygame.Surface: The drawn frame. The surface is reused between calls.
        """
        self._surface.fill(self._background)
        self._draw_circle(self.circle_radius(diameter))

        if self.settings.dots and self._dot_due(frame_number, total_frames):
            self._draw_dot()

        if self.settings.frame_number:
            self._draw_frame_number(frame_number)

        return self._surface

    def frame_array(self, diameter: float, frame_number: int, total_frames: int) -> np.ndarray:
        """Draw a single frame and return it as a BGR array of shape (height, width, 3)."""
        surface = self.frame_surface(diameter, frame_number, total_frames)
        rgb = np.ascontiguousarray(pygame.surfarray.array3d(surface).transpose(1, 0, 2))
        return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)

    def render(self, result, output: Optional[str] = None) -> str:
        """
        Encode every frame of a model result to a video file.

        Args:
            result: A ModelResult, or any object with ``frame_rate`` and ``diameters``.
            output (str, optional): Video path. Defaults to the configured output.

        Returns:
            str: The path of the written video.
        """
        output = output or self.settings.output
        diameters = list(result.diameters)
        total_frames = len(diameters)

        folder = os.path.dirname(output)
        if folder:
            os.makedirs(folder, exist_ok=True)

        logger.info(
            f"Rendering {total_frames} frames at {result.frame_rate:g} fps "
            f"({self._size[0]}x{self._size[1]}) to {output}"
        )

        video_writer = WriteGear(
            output=output,
            logging=False,
            **{"-input_framerate": result.frame_rate, **output_params},
        )
        try:
            for frame_number, diameter in enumerate(tqdm(diameters, leave=False), start=1):
                video_writer.write(self.frame_array(diameter, frame_number, total_frames))
        finally:
            video_writer.close()

        logger.info(f"Animation saved to {output}")
        return output
