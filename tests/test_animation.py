from types import SimpleNamespace

import numpy as np
import pygame
import pytest

from loomgen import diameter_model
from loomgen.config import AnimationConfig
from loomgen.render.animation import LoomingAnimation

WIDTH, HEIGHT = 100, 80


def _bgr(name):
    r, g, b, _ = pygame.Color(name)
    return [b, g, r]


@pytest.fixture
def settings():
    return AnimationConfig(width=WIDTH, height=HEIGHT, correction=0.01)


def test_circle_radius(settings):
    animation = LoomingAnimation(settings)
    assert animation.circle_radius(50) == pytest.approx(25.0)

    settings.correction = None
    assert LoomingAnimation(settings).circle_radius(0.5) == pytest.approx(25.0)


def test_frame_array(settings):
    frame = LoomingAnimation(settings).frame_array(50, 1, 10)

    assert frame.shape == (HEIGHT, WIDTH, 3)
    assert frame.dtype == np.uint8
    assert frame[HEIGHT // 2, WIDTH // 2].tolist() == _bgr("black")
    assert frame[0, 0].tolist() == _bgr("white")
    assert frame[HEIGHT // 2, WIDTH // 2 + 30].tolist() == _bgr("white")


def test_custom_colours(settings):
    settings.fill = "red"
    settings.background = "blue"
    frame = LoomingAnimation(settings).frame_array(50, 1, 10)

    assert frame[HEIGHT // 2, WIDTH // 2].tolist() == [0, 0, 255]
    assert frame[0, 0].tolist() == [255, 0, 0]


def test_circle_larger_than_frame_fills_it(settings):
    frame = LoomingAnimation(settings).frame_array(1000, 10, 10)
    assert np.all(frame == 0)


@pytest.mark.parametrize(
    "frame_number, total_frames, marked",
    [(1, 40, True), (2, 40, False), (20, 40, True), (39, 40, False), (40, 40, True), (7, 7, True)],
)
def test_dots(settings, frame_number, total_frames, marked):
    settings.dots = True
    settings.dots_size = 0.03
    frame = LoomingAnimation(settings).frame_array(10, frame_number, total_frames)

    # bottom right corner: x = 0.93 * width, y = 0.05 * height from the bottom
    pixel = frame[76, 93].tolist()
    assert (pixel == _bgr("grey")) is marked
    if not marked:
        assert pixel == _bgr("white")


@pytest.mark.parametrize("position, row, col", [("tl", 4, 7), ("tr", 4, 93), ("bl", 76, 7)])
def test_dot_corners(settings, position, row, col):
    settings.dots = True
    settings.dots_size = 0.03
    settings.dots_position = position
    frame = LoomingAnimation(settings).frame_array(10, 1, 5)

    assert frame[row, col].tolist() == _bgr("grey")


def test_frame_numbers_are_drawn(settings):
    plain = LoomingAnimation(settings).frame_array(10, 12, 40)
    settings.frame_number = True
    numbered = LoomingAnimation(settings).frame_array(10, 12, 40)

    assert not np.array_equal(plain, numbered)
    # nothing drawn outside the top half besides the circle
    np.testing.assert_array_equal(plain[HEIGHT // 2 + 10 :], numbered[HEIGHT // 2 + 10 :])


def test_rotated_frame_numbers(settings):
    settings.frame_number = True
    settings.frame_number_rotation = 90
    frame = LoomingAnimation(settings).frame_array(10, 12, 40)
    assert frame.shape == (HEIGHT, WIDTH, 3)


@pytest.mark.parametrize("position", ["xx", "middle", "rt", "t", ""])
def test_invalid_corner(settings, position):
    settings.dots_position = position
    with pytest.raises(ValueError, match="corner"):
        LoomingAnimation(settings)


def test_render(settings, fake_writer, tmp_path):
    result = diameter_model(1, 10, 0.1, 60)
    output = str(tmp_path / "videos" / "loom.mp4")

    path = LoomingAnimation(settings).render(result, output)

    writer = fake_writer.instances[-1]
    assert path == output
    assert writer.output == output
    assert writer.output_params["-input_framerate"] == 60
    assert writer.output_params["-vcodec"] == "libx264"
    assert len(writer.frames) == result.total_frames
    assert writer.closed
    assert (tmp_path / "videos").is_dir()


def test_render_uses_configured_output(settings, fake_writer, tmp_path):
    settings.output = str(tmp_path / "configured.mp4")
    LoomingAnimation(settings).render(SimpleNamespace(frame_rate=30, diameters=[10, 20, 30]))

    writer = fake_writer.instances[-1]
    assert writer.output == settings.output
    assert len(writer.frames) == 3
    # frames grow with the diameters
    dark = [int(np.count_nonzero(frame.sum(axis=2) == 0)) for frame in writer.frames]
    assert dark[0] < dark[1] < dark[2]


def test_frame_number_font_scale(settings, monkeypatch):
    sizes = []
    real_font = pygame.font.Font

    def recording_font(name, size):
        sizes.append(size)
        return real_font(name, size)

    monkeypatch.setattr(pygame.font, "Font", recording_font)
    settings.frame_number = True
    LoomingAnimation(settings).frame_array(10, 1, 5)

    # default size 2 is 24 px, as 2x 12 pt text at 72 dpi
    assert sizes == [24]
